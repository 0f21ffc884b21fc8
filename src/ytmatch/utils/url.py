"""Catalog id extraction from exported external ids and URLs."""

import re
from urllib.parse import parse_qs, urlparse

# YouTube video ids are exactly 11 URL-safe base64 characters
_VIDEO_ID_PATTERN = re.compile(r"[A-Za-z0-9_-]{11}")

# Path-based video ID patterns (shorts, live, embed)
_PATH_VIDEO_ID_PATTERN = re.compile(r"^/(?:shorts|live|embed|e|v|vi)/([^/?#]+)")

# Recognized YouTube hostnames
_YOUTUBE_HOSTS = {
    "youtube.com",
    "www.youtube.com",
    "m.youtube.com",
    "music.youtube.com",
    "youtube-nocookie.com",
    "www.youtube-nocookie.com",
}

# Maximum URL length to prevent potential abuse (standard browser limit)
MAX_URL_LENGTH = 2048

WATCH_URL_TEMPLATE = "https://music.youtube.com/watch?v={video_id}"


def is_video_id(value: str) -> bool:
    """Check whether a string is a bare 11-character video id."""
    return bool(_VIDEO_ID_PATTERN.fullmatch(value))


def parse_video_id(url: str) -> str | None:
    """Extract a video id from a YouTube or YouTube Music URL.

    Supports watch URLs (``v=`` parameter), youtu.be short URLs and
    path-based formats (/shorts/, /live/, /embed/, /e/, /v/, /vi/). Unlike
    playlist-oriented parsing, a ``list=`` parameter does not hide the
    video id: exports often carry watch URLs with playlist context.

    Args:
        url: URL to parse.

    Returns:
        The video id, or None if the URL carries no well-formed id.
    """
    if not url or len(url) > MAX_URL_LENGTH:
        return None

    parsed = urlparse(url.strip())
    host = (parsed.hostname or "").lower()
    path = parsed.path or ""

    candidate: str | None = None
    if host == "youtu.be" and len(path) > 1:
        candidate = path.split("/")[1]
    elif host in _YOUTUBE_HOSTS:
        if values := parse_qs(parsed.query).get("v"):
            candidate = values[0]
        elif match := _PATH_VIDEO_ID_PATTERN.match(path):
            candidate = match.group(1)

    if candidate and is_video_id(candidate):
        return candidate
    return None


def extract_catalog_id(external_id: str | None) -> str | None:
    """Resolve an exported external id to a catalog video id.

    Args:
        external_id: Bare video id or URL from the export.

    Returns:
        The 11-character video id if the external id identifies one
        deterministically, otherwise None.

    Example:
        >>> extract_catalog_id("https://youtu.be/dQw4w9WgXcQ?t=10")
        'dQw4w9WgXcQ'
        >>> extract_catalog_id("spotify:track:4uLU6hMCjMI75M1A2tKUQC") is None
        True
    """
    if not external_id:
        return None
    value = external_id.strip()
    if is_video_id(value):
        return value
    return parse_video_id(value)


def watch_url(video_id: str) -> str:
    """Build the YouTube Music watch URL for a video id."""
    return WATCH_URL_TEMPLATE.format(video_id=video_id)
