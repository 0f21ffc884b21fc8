"""Data models for ytmatch.

Public API:
    ImportRecord - One exported track description to resolve
    Candidate - A track returned by the catalog search
    ResolvedTrack / FailedTrack - Per-record outcomes
    ImportInProgress / ImportComplete / ImportFailure - Progress events
"""

from ytmatch.models.candidate import Candidate, CandidateArtist
from ytmatch.models.enums import FailureReason, MatchStage
from ytmatch.models.progress import (
    ImportComplete,
    ImportFailure,
    ImportInProgress,
    ImportStatus,
)
from ytmatch.models.records import ImportRecord
from ytmatch.models.results import (
    FailedTrack,
    ImportResult,
    ResolutionOutcome,
    ResolvedTrack,
)

__all__ = [
    "Candidate",
    "CandidateArtist",
    "FailedTrack",
    "FailureReason",
    "ImportComplete",
    "ImportFailure",
    "ImportInProgress",
    "ImportRecord",
    "ImportResult",
    "ImportStatus",
    "MatchStage",
    "ResolutionOutcome",
    "ResolvedTrack",
]
