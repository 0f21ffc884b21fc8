"""Resolution outcome models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from ytmatch.models.candidate import Candidate
from ytmatch.models.enums import FailureReason, MatchStage
from ytmatch.models.records import ImportRecord


class ResolvedTrack(BaseModel):
    """An import record paired with the catalog track it resolved to.

    Attributes:
        index: Position of the record in the original input.
        record: The import record.
        candidate: The accepted catalog track.
        stage: Decision stage that accepted the candidate.
        score: Fuzzy score (0 for direct-id and strict matches).
        query: Search query that produced the candidate.
    """

    model_config = ConfigDict(frozen=True)

    index: int
    record: ImportRecord
    candidate: Candidate
    stage: MatchStage
    score: int = 0
    query: str | None = None


class FailedTrack(BaseModel):
    """An import record that could not be resolved.

    Attributes:
        index: Position of the record in the original input.
        record: The import record.
        reason: Why resolution failed.
    """

    model_config = ConfigDict(frozen=True)

    index: int
    record: ImportRecord
    reason: FailureReason


ResolutionOutcome = ResolvedTrack | FailedTrack


class ImportResult(BaseModel):
    """Aggregated outcome of an import run.

    Both lists preserve original input order.

    Attributes:
        total: Number of input records.
        resolved: Records that resolved to a catalog track.
        failed: Records that did not.
        cancelled: Whether the run stopped early.
    """

    model_config = ConfigDict(frozen=True)

    total: int
    resolved: list[ResolvedTrack]
    failed: list[FailedTrack]
    cancelled: bool = False

    @property
    def processed(self) -> int:
        """Records that reached a terminal outcome."""
        return len(self.resolved) + len(self.failed)

    @property
    def failure_counts(self) -> dict[FailureReason, int]:
        """Failed record counts by reason."""
        counts: dict[FailureReason, int] = {}
        for failure in self.failed:
            counts[failure.reason] = counts.get(failure.reason, 0) + 1
        return counts
