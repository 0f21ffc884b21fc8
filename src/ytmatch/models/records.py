"""Import record model."""

from pydantic import BaseModel, ConfigDict, field_validator


class ImportRecord(BaseModel):
    """One row of externally supplied track metadata.

    Attributes:
        title: Track title as exported (may contain noise like "(Official Video)").
        artist: Artist string, possibly several artists joined by ",", "&", "feat.".
        album: Album name, if the export has one.
        duration_ms: Track length in milliseconds, if known.
        external_id: Video id or URL from the export, if any.
    """

    model_config = ConfigDict(frozen=True)

    title: str
    artist: str
    album: str | None = None
    duration_ms: int | None = None
    external_id: str | None = None

    @field_validator("album", "external_id")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        """Treat blank optional strings as missing."""
        if v is None or not v.strip():
            return None
        return v.strip()

    @property
    def display(self) -> str:
        """Formatted 'Artist - Title' string for logs and reports."""
        return f"{self.artist} - {self.title}" if self.artist else self.title
