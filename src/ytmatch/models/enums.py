"""Enumerations for ytmatch domain models."""

from enum import StrEnum


class MatchStage(StrEnum):
    """Decision stage that produced a match decision.

    Stages are tried in this order; the first one that accepts wins.
    """

    DIRECT_ID = "direct_id"  # External id found among candidates
    STRICT = "strict"  # Exact normalized title with artist/album corroboration
    FUZZY = "fuzzy"  # Weighted score cleared the threshold
    REJECTED = "rejected"


class FailureReason(StrEnum):
    """Why an import record could not be resolved."""

    NO_CANDIDATES = "no_candidates"
    NO_CONFIDENT_MATCH = "no_confident_match"
    ERROR = "error"

    @property
    def label(self) -> str:
        """Human-readable label for display."""
        match self:
            case FailureReason.NO_CANDIDATES:
                return "no search results"
            case FailureReason.NO_CONFIDENT_MATCH:
                return "no confident match"
            case FailureReason.ERROR:
                return "error"
