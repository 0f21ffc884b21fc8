"""Test fixtures and configuration."""

import threading
from collections.abc import Callable

import pytest
from ytmatch.models.candidate import Candidate
from ytmatch.models.records import ImportRecord


def make_candidate(
    video_id: str,
    title: str,
    artists: list[str],
    album: str | None = None,
    duration: str | None = None,
) -> Candidate:
    """Build a candidate from a ytmusicapi-shaped search result."""
    return Candidate.model_validate(
        {
            "videoId": video_id,
            "title": title,
            "artists": [{"name": name, "id": f"UC_{name}"} for name in artists],
            "album": {"name": album, "id": "MPREb_album"} if album else None,
            "duration": duration,
            "thumbnails": [
                {"url": "https://example.com/small.jpg", "width": 60, "height": 60},
                {"url": "https://example.com/large.jpg", "width": 544, "height": 544},
            ],
        }
    )


class MockCandidateSource:
    """Mock catalog search for testing.

    Results are looked up by exact query; unknown queries return
    ``default``. Unfiltered searches read ``any_results`` (empty when
    unknown). Queries listed in ``errors`` raise the given exception from
    either search.
    """

    def __init__(
        self,
        results: dict[str, list[Candidate]] | None = None,
        default: list[Candidate] | None = None,
        errors: dict[str, Exception] | None = None,
        on_search: Callable[[str], None] | None = None,
        any_results: dict[str, list[Candidate]] | None = None,
    ) -> None:
        self._results = results or {}
        self._default = default or []
        self._errors = errors or {}
        self._on_search = on_search
        self._lock = threading.Lock()
        self._any_results = any_results or {}
        self.search_songs_calls: list[str] = []
        self.search_any_calls: list[str] = []

    def search_songs(self, query: str) -> list[Candidate]:
        """Mock search_songs."""
        with self._lock:
            self.search_songs_calls.append(query)
        if self._on_search:
            self._on_search(query)
        if query in self._errors:
            raise self._errors[query]
        return list(self._results.get(query, self._default))

    def search_any(self, query: str) -> list[Candidate]:
        """Mock search_any."""
        with self._lock:
            self.search_any_calls.append(query)
        if query in self._errors:
            raise self._errors[query]
        return list(self._any_results.get(query, []))


@pytest.fixture
def beatles_record() -> ImportRecord:
    """Create the 'Yesterday' import record."""
    return ImportRecord(title="Yesterday", artist="The Beatles")


@pytest.fixture
def yesterday_candidates() -> list[Candidate]:
    """Create a plain and a live rendition of 'Yesterday'."""
    return [
        make_candidate("plain000001", "Yesterday", ["The Beatles"], "Help!", "2:06"),
        make_candidate(
            "live0000001", "Yesterday (Live)", ["The Beatles"], None, "2:35"
        ),
    ]
