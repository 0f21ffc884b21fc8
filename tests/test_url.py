"""Tests for catalog id extraction."""

import pytest
from ytmatch.utils.url import extract_catalog_id, is_video_id, parse_video_id, watch_url


class TestIsVideoId:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("dQw4w9WgXcQ", True),
            ("a-b_c1234XY", True),
            ("short", False),
            ("dQw4w9WgXcQX", False),
            ("dQw4w9WgX!Q", False),
        ],
    )
    def test_is_video_id(self, value: str, expected: bool) -> None:
        assert is_video_id(value) is expected


class TestParseVideoId:
    @pytest.mark.parametrize(
        "url",
        [
            "https://music.youtube.com/watch?v=dQw4w9WgXcQ",
            "https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=42",
            "https://music.youtube.com/watch?v=dQw4w9WgXcQ&list=RDAMVMdQw4w9WgXcQ",
            "https://youtu.be/dQw4w9WgXcQ?t=10",
            "https://www.youtube.com/shorts/dQw4w9WgXcQ",
            "https://www.youtube.com/embed/dQw4w9WgXcQ",
        ],
    )
    def test_recognized_urls(self, url: str) -> None:
        assert parse_video_id(url) == "dQw4w9WgXcQ"

    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com/watch?v=dQw4w9WgXcQ",
            "https://music.youtube.com/watch?v=short",
            "https://music.youtube.com/playlist?list=PL123",
            "",
            "https://youtu.be/" + "a" * 3000,
        ],
    )
    def test_unrecognized_urls(self, url: str) -> None:
        assert parse_video_id(url) is None


class TestExtractCatalogId:
    def test_bare_id(self) -> None:
        assert extract_catalog_id("  dQw4w9WgXcQ ") == "dQw4w9WgXcQ"

    def test_url(self) -> None:
        assert extract_catalog_id("https://youtu.be/dQw4w9WgXcQ") == "dQw4w9WgXcQ"

    @pytest.mark.parametrize(
        "value", [None, "", "spotify:track:4uLU6hMCjMI75M1A2tKUQC", "USRC17607839"]
    )
    def test_unrecognized(self, value: str | None) -> None:
        assert extract_catalog_id(value) is None


def test_watch_url() -> None:
    assert watch_url("dQw4w9WgXcQ") == "https://music.youtube.com/watch?v=dQw4w9WgXcQ"
