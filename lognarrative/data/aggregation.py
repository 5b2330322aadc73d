"""
Fixed-width time bucketing.

Buckets are aligned to the Unix epoch, so a 60 second bucket always starts on
a whole minute and a 300 second bucket on a five-minute boundary (00:00,
00:05, ...). Any positive width is allowed, including sub-minute widths.
"""

from datetime import datetime, timedelta, timezone

from lognarrative.core.exceptions import ConfigurationError

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _as_utc(ts: datetime) -> datetime:
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def bucket_key(ts: datetime, bucket_size_seconds: int) -> int:
    """
    Index of the bucket containing ts (buckets since the epoch).

    Raises:
        ConfigurationError: If the bucket size is not positive
    """
    if bucket_size_seconds <= 0:
        raise ConfigurationError("Bucket size must be positive")
    return (_as_utc(ts) - _EPOCH) // timedelta(seconds=bucket_size_seconds)


def bucket_start(key: int, bucket_size_seconds: int) -> datetime:
    """UTC start time of the bucket with the given index."""
    return _EPOCH + timedelta(seconds=key * bucket_size_seconds)


def align_to_bucket(ts: datetime, bucket_size_seconds: int) -> datetime:
    """
    Align timestamp to the start of its bucket.

    Example with 5-minute buckets (300s):
    - 10:32:00 -> 10:30:00 (aligned down)
    - 10:30:00 -> 10:30:00 (already aligned)

    Args:
        ts: Timestamp to align (naive values are treated as UTC)
        bucket_size_seconds: Bucket width in seconds

    Returns:
        Aligned timestamp at bucket start (UTC)
    """
    return bucket_start(bucket_key(ts, bucket_size_seconds), bucket_size_seconds)
