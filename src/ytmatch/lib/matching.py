"""Candidate scoring for import record resolution.

The scorer combines weighted signals (artist overlap, title similarity,
album, rendition modifiers, duration, exact title) into one integer. Artist
overlap gates the rest: a candidate that shares no artist with the import
record scores 0 no matter how similar the title is.

All weights come from ``MatchWeights`` - consumers should not hard-code
thresholds or bonuses elsewhere.
"""

import logging

from rapidfuzz.distance import Levenshtein

from ytmatch.config import MatchWeights
from ytmatch.lib.normalize import NormalizedInfo, fold

logger = logging.getLogger(__name__)


def levenshtein_distance(a: str, b: str) -> int:
    """Single-character insert/delete/substitute edit distance.

    Example:
        >>> levenshtein_distance("kitten", "sitting")
        3
    """
    return Levenshtein.distance(a, b)


def title_similarity(a: str, b: str, weight: int) -> int:
    """Scaled similarity ``(1 - distance / max_len) * weight``, truncated.

    Returns 0 when both titles are empty.
    """
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 0
    return int((1.0 - levenshtein_distance(a, b) / max_len) * weight)


def parse_duration_ms(text: str | None) -> int | None:
    """Parse a duration like '3:25' or '1:02:03' to milliseconds.

    Returns None for missing or unparseable values.
    """
    if not text:
        return None

    parts = text.strip().split(":")
    if len(parts) not in (2, 3):
        logger.debug("Unexpected duration format: %s", text)
        return None
    try:
        values = [int(p) for p in parts]
    except ValueError:
        logger.debug("Could not parse duration: %s", text)
        return None

    seconds = 0
    for value in values:
        seconds = seconds * 60 + value
    return seconds * 1000


class MatchScorer:
    """Scores a candidate against an import record.

    Example:
        >>> scorer = MatchScorer()
        >>> record = parse_song_info("Yesterday", "The Beatles", None)
        >>> candidate = parse_song_info("Yesterday", "The Beatles", None)
        >>> scorer.score(record, candidate, None)
        170
    """

    def __init__(self, weights: MatchWeights | None = None) -> None:
        self._weights = weights or MatchWeights()

    @property
    def weights(self) -> MatchWeights:
        """Weights in use."""
        return self._weights

    def artist_score(
        self, import_info: NormalizedInfo, candidate_info: NormalizedInfo
    ) -> int:
        """Score artist overlap by substring containment.

        The primary import artist earns ``primary_artist_bonus`` and each
        further import artist earns ``other_artist_bonus``.
        """
        w = self._weights
        candidate_artists = candidate_info.all_artists

        def found(artist: str) -> bool:
            return any(artist in c for c in candidate_artists)

        score = 0
        if import_info.primary_artist and found(import_info.primary_artist):
            score += w.primary_artist_bonus
        others = import_info.all_artists[1:]
        score += sum(w.other_artist_bonus for artist in others if found(artist))
        return score

    def modifier_score(
        self, import_modifiers: frozenset[str], candidate_modifiers: frozenset[str]
    ) -> int:
        """Reward identical rendition modifiers and penalize disagreement."""
        w = self._weights
        if import_modifiers and import_modifiers == candidate_modifiers:
            return w.modifier_match_bonus * len(import_modifiers)
        if not import_modifiers and candidate_modifiers:
            # A remix/live/cover the user did not ask for
            return -w.modifier_unwanted_penalty
        if import_modifiers and not candidate_modifiers:
            return -w.modifier_missing_penalty
        return 0

    def duration_score(
        self, import_duration_ms: int | None, candidate_duration_text: str | None
    ) -> int:
        """Reward candidates whose length is close to the import's."""
        if import_duration_ms is None:
            return 0
        candidate_ms = parse_duration_ms(candidate_duration_text)
        if candidate_ms is None:
            return 0

        w = self._weights
        diff = abs(import_duration_ms - candidate_ms)
        if diff <= w.duration_close_ms:
            return w.duration_close_bonus
        if diff <= w.duration_near_ms:
            return w.duration_near_bonus
        return 0

    def score(
        self,
        import_info: NormalizedInfo,
        candidate_info: NormalizedInfo,
        candidate_album_raw: str | None,
        import_duration_ms: int | None = None,
        candidate_duration_text: str | None = None,
    ) -> int:
        """Compute the confidence score of one candidate.

        Args:
            import_info: Normalized import record.
            candidate_info: Normalized candidate.
            candidate_album_raw: Candidate album as returned by the search.
            import_duration_ms: Import record length, if known.
            candidate_duration_text: Candidate length text ('mm:ss').

        Returns:
            Integer score; 0 when no artist overlaps.
        """
        w = self._weights

        score = self.artist_score(import_info, candidate_info)
        if score == 0:
            return 0

        score += title_similarity(
            import_info.base_title, candidate_info.base_title, w.title_similarity_weight
        )

        if import_info.album and candidate_album_raw:
            if import_info.album in fold(candidate_album_raw):
                score += w.album_bonus

        score += self.modifier_score(import_info.modifiers, candidate_info.modifiers)
        score += self.duration_score(import_duration_ms, candidate_duration_text)

        if import_info.title and import_info.title == candidate_info.title:
            score += w.exact_title_bonus

        return score
