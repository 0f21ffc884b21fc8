"""Progress events emitted during an import."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from ytmatch.models.results import FailedTrack


class ImportInProgress(BaseModel):
    """Emitted before the first batch and after every completed batch.

    Attributes:
        processed: Records with a terminal outcome so far.
        total: Total records in the import.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["in_progress"] = "in_progress"
    processed: int
    total: int


class ImportComplete(BaseModel):
    """Terminal event for a finished (or cancelled) import.

    Attributes:
        imported: Records resolved to a catalog track.
        failed: Records that could not be resolved.
        total: Total records in the import.
        failed_records: Details of every failed record, in input order.
        cancelled: True if the import stopped before all batches ran.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["complete"] = "complete"
    imported: int
    failed: int
    total: int
    failed_records: list[FailedTrack] = Field(default_factory=list)
    cancelled: bool = False


class ImportFailure(BaseModel):
    """Terminal event for an import aborted by an unexpected error.

    Attributes:
        message: Error description.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["error"] = "error"
    message: str


ImportStatus = ImportInProgress | ImportComplete | ImportFailure
