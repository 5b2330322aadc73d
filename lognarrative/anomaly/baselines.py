"""
Baseline estimation for burst detection.

The baseline is the average count over populated buckets of a time series.
Empty buckets are not counted, which keeps the baseline conservative for
sparse logs: a quiet hour does not drag the average towards zero.
"""

from __future__ import annotations

from typing import Optional

from lognarrative.data.stats import TimeSeries


def baseline_rate(series: Optional[TimeSeries]) -> float:
    """
    Average events per populated bucket.

    Returns 0.0 when the series is absent or has no points.
    """
    if series is None or not series.points:
        return 0.0
    return series.total_count() / len(series.points)
