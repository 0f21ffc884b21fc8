"""YouTube Music search client wrapper."""

import logging
from typing import Any, Protocol

from pydantic import ValidationError
from requests.exceptions import RequestException
from ytmusicapi import YTMusic
from ytmusicapi.exceptions import YTMusicError, YTMusicServerError, YTMusicUserError

from ytmatch.config import APIConfig
from ytmatch.exceptions import APIError, CandidateParseError
from ytmatch.models.candidate import Candidate

logger = logging.getLogger(__name__)

# Unfiltered search result types that can be played as a track
PLAYABLE_RESULT_TYPES = frozenset({"song", "video"})


class CandidateSource(Protocol):
    """Protocol for catalog search providers.

    This protocol enables dependency injection and testing.
    Implement this protocol to create mock sources for testing.
    """

    def search_songs(self, query: str) -> list[Candidate]:
        """Search the catalog for songs matching a keyword query.

        Raises:
            APIError: If the request fails (timeout, transport, server error).
            CandidateParseError: If the response cannot be parsed.
        """
        ...

    def search_any(self, query: str) -> list[Candidate]:
        """Search the catalog without the songs filter.

        Finds tracks only listed as videos (uploads, covers). Same errors
        as ``search_songs``.
        """
        ...


class YTMusicClient:
    """Production YouTube Music search client.

    Wraps ytmusicapi with consistent error handling and response parsing.
    Implements CandidateSource for type safety. Safe to share between
    worker threads: each search is an independent HTTP request.
    """

    def __init__(
        self,
        ytmusic: YTMusic | None = None,
        config: APIConfig | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            ytmusic: Optional YTMusic instance. Creates an unauthenticated
                one if not provided.
            config: Optional API configuration. Uses defaults if not provided.
        """
        self._ytm = ytmusic or YTMusic()
        self._config = config or APIConfig()

    def search_songs(self, query: str) -> list[Candidate]:
        """Search for songs.

        Args:
            query: Search query string.

        Returns:
            Parsed candidates in the catalog's ranking order. Results
            without a video id (unavailable tracks) are skipped.

        Raises:
            ValueError: If query is empty.
            APIError: If API request fails.
            CandidateParseError: If a result cannot be parsed.
        """
        return self._parse_results(query, self._search(query, "songs"))

    def search_any(self, query: str) -> list[Candidate]:
        """Search without a result filter, keeping only playable tracks.

        Unfiltered results mix songs and videos with albums, artists and
        playlists; only song and video entries are returned.

        Raises:
            ValueError: If query is empty.
            APIError: If API request fails.
            CandidateParseError: If a result cannot be parsed.
        """
        data = self._search(query, None)
        tracks = [
            raw
            for raw in data
            if raw and raw.get("resultType") in PLAYABLE_RESULT_TYPES
        ]
        return self._parse_results(query, tracks)

    def _search(self, query: str, result_filter: str | None) -> list[dict[str, Any]]:
        """Run a raw search, mapping library errors to ytmatch errors."""
        if not query or not query.strip():
            raise ValueError("query cannot be empty")

        logger.debug("Searching (filter=%s): %s", result_filter, query)
        try:
            data = self._ytm.search(
                query,
                filter=result_filter,
                limit=self._config.search_limit,
                ignore_spelling=self._config.ignore_spelling,
            )
        except (YTMusicServerError, YTMusicUserError) as e:
            logger.warning("YTMusic API error for search '%s': %s", query, e)
            raise APIError(f"Search failed: {e}") from e
        except YTMusicError as e:
            logger.warning("YTMusic error for search '%s': %s", query, e)
            raise APIError(f"Search failed: {e}") from e
        except RequestException as e:
            logger.warning("Request failed for search '%s': %s", query, e)
            raise APIError(f"Search request failed: {e}") from e
        except KeyError as e:
            # ytmusicapi raises KeyError when the response layout is unexpected
            logger.warning("Malformed search response for '%s': %s", query, e)
            raise CandidateParseError(f"Malformed search response: {e}") from e

        return data or []

    def _parse_results(self, query: str, data: list[dict[str, Any]]) -> list[Candidate]:
        """Validate raw search results into candidates."""
        candidates: list[Candidate] = []
        skipped = 0
        for raw in data:
            if not raw or not raw.get("videoId"):
                skipped += 1
                continue
            try:
                candidates.append(Candidate.model_validate(raw))
            except ValidationError as e:
                logger.warning("Unparseable search result for '%s': %s", query, e)
                raise CandidateParseError(f"Invalid search result: {e}") from e

        logger.debug(
            "Search '%s' returned %d candidates (%d skipped)",
            query,
            len(candidates),
            skipped,
        )
        return candidates
