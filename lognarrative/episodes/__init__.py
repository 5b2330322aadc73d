"""
Episode segmentation exports.
"""

from .builder import EPISODE_CORRELATION_KEYS, EpisodeBuilder
from .schema import Episode

__all__ = [
    "EPISODE_CORRELATION_KEYS",
    "Episode",
    "EpisodeBuilder",
]
