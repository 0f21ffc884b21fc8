"""Utility functions for ytmatch.

Available via `from ytmatch.utils import ...` for power users.
Not re-exported at the top-level `ytmatch` package.
"""

from ytmatch.utils.url import extract_catalog_id, is_video_id, parse_video_id, watch_url

__all__ = [
    "extract_catalog_id",
    "is_video_id",
    "parse_video_id",
    "watch_url",
]
