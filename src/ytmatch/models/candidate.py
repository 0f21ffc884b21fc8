"""Search candidate models.

Candidates are built from ytmusicapi song search results. Field aliases
follow the raw response keys so results can be validated directly.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

__all__ = [
    "Candidate",
    "CandidateArtist",
]


class CandidateModel(BaseModel):
    """Base model for search candidates."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


class CandidateArtist(CandidateModel):
    """Artist credited on a candidate."""

    name: str
    id: str | None = None


class Candidate(CandidateModel):
    """One track returned by the catalog search."""

    id: str = Field(alias="videoId")
    title: str
    artists: list[CandidateArtist] = Field(default_factory=list)
    album: str | None = None
    duration_text: str | None = Field(default=None, alias="duration")
    thumbnail_url: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _flatten_response(cls, data: Any) -> Any:
        """Flatten nested album/thumbnail structures from search results."""
        if not isinstance(data, dict):
            return data
        result = dict(data)

        if result.get("artists") is None:
            result["artists"] = []
        elif isinstance(result["artists"], list):
            # ytmusicapi sometimes returns artist entries without a name
            result["artists"] = [
                a for a in result["artists"] if not isinstance(a, dict) or a.get("name")
            ]

        album = result.get("album")
        if isinstance(album, dict):
            result["album"] = album.get("name")

        thumbnails = result.pop("thumbnails", None)
        if isinstance(thumbnails, list) and "thumbnail_url" not in result:
            largest = max(
                (t for t in thumbnails if isinstance(t, dict)),
                key=lambda t: t.get("width") or 0,
                default=None,
            )
            if largest:
                result["thumbnail_url"] = largest.get("url")

        return result

    @property
    def artist_names(self) -> list[str]:
        """Names of all credited artists, in credit order."""
        return [a.name for a in self.artists]

    @property
    def artists_text(self) -> str:
        """Artists joined as 'Artist One, Artist Two'."""
        return ", ".join(self.artist_names)
