"""Persistence of resolved tracks as a named collection."""

import json
import logging
from pathlib import Path
from typing import Protocol

from ytmatch.exceptions import CollectionWriteError
from ytmatch.models.results import ResolvedTrack
from ytmatch.utils.url import watch_url

logger = logging.getLogger(__name__)


class CollectionSink(Protocol):
    """Protocol for storing the resolved tracks of an import.

    Called once per successful import, after every batch has finished,
    with the full resolved list in input order.
    """

    def save(self, name: str, tracks: list[ResolvedTrack]) -> None:
        """Persist ``tracks`` as a collection called ``name``."""
        ...


class JSONCollectionWriter:
    """Writes resolved tracks to a JSON playlist file.

    Output format::

        {
          "name": "Road trip",
          "tracks": [
            {"position": 0, "video_id": "...", "title": "...", "artists": [...],
             "album": "...", "duration": "3:25", "thumbnail_url": "...",
             "url": "https://music.youtube.com/watch?v=...",
             "source": {"title": "...", "artist": "...", "album": "..."}}
          ]
        }
    """

    def __init__(self, output_path: Path) -> None:
        self._output_path = output_path

    @property
    def output_path(self) -> Path:
        """Destination file."""
        return self._output_path

    def save(self, name: str, tracks: list[ResolvedTrack]) -> None:
        """Write the collection, replacing any existing file.

        Raises:
            CollectionWriteError: If the file cannot be written.
        """
        payload = {
            "name": name,
            "tracks": [
                self._track_entry(position, track)
                for position, track in enumerate(tracks)
            ],
        }
        try:
            self._output_path.parent.mkdir(parents=True, exist_ok=True)
            self._output_path.write_text(
                json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8"
            )
        except OSError as e:
            raise CollectionWriteError(
                f"Failed to write collection to {self._output_path}: {e}"
            ) from e

        logger.info("Saved %d tracks to %s", len(tracks), self._output_path)

    def _track_entry(self, position: int, track: ResolvedTrack) -> dict:
        candidate = track.candidate
        return {
            "position": position,
            "video_id": candidate.id,
            "title": candidate.title,
            "artists": candidate.artist_names,
            "album": candidate.album,
            "duration": candidate.duration_text,
            "thumbnail_url": candidate.thumbnail_url,
            "url": watch_url(candidate.id),
            "match": {"stage": track.stage.value, "score": track.score},
            "source": track.record.model_dump(exclude_none=True),
        }
