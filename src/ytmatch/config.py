"""Configuration for ytmatch."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class APIConfig:
    """YouTube Music API configuration.

    Attributes:
        search_limit: Maximum number of search results to return per query.
        ignore_spelling: Whether to ignore spelling in search queries.
    """

    search_limit: int = 10
    ignore_spelling: bool = True


@dataclass(frozen=True)
class MatchWeights:
    """Weights used by the match scorer.

    Bonuses are added and penalties subtracted. Relative ordering matters
    more than absolute values: artist signals gate everything else, and the
    exact-title bonus must outrank any fuzzy title similarity.

    Attributes:
        primary_artist_bonus: Import primary artist found among candidate artists.
        other_artist_bonus: Each additional import artist found.
        title_similarity_weight: Scale for normalized Levenshtein similarity.
        album_bonus: Candidate album contains the import album.
        modifier_match_bonus: Per modifier, when both modifier sets are identical.
        modifier_unwanted_penalty: Candidate has modifiers the import lacks.
        modifier_missing_penalty: Import has modifiers the candidate lacks.
        duration_close_bonus: Durations within ``duration_close_ms``.
        duration_near_bonus: Durations within ``duration_near_ms``.
        duration_close_ms: Tolerance for the close duration bonus.
        duration_near_ms: Tolerance for the near duration bonus.
        exact_title_bonus: Normalized titles are equal.
    """

    primary_artist_bonus: int = 40
    other_artist_bonus: int = 10
    title_similarity_weight: int = 50
    album_bonus: int = 30
    modifier_match_bonus: int = 25
    modifier_unwanted_penalty: int = 40
    modifier_missing_penalty: int = 20
    duration_close_bonus: int = 40
    duration_near_bonus: int = 15
    duration_close_ms: int = 3_000
    duration_near_ms: int = 10_000
    exact_title_bonus: int = 80


@dataclass(frozen=True)
class ImportConfig:
    """Playlist import configuration.

    Attributes:
        batch_size: Records resolved concurrently per batch.
        min_score: Minimum fuzzy score for a candidate to be accepted.
        allow_title_only_strict: Accept an exact-title candidate even when
            none of its artists match the import artist.
        weights: Scorer weights.
    """

    batch_size: int = 10
    min_score: int = 60
    allow_title_only_strict: bool = False
    weights: MatchWeights = field(default_factory=MatchWeights)

    def __post_init__(self) -> None:
        if self.batch_size < 1:
            raise ValueError("batch_size must be at least 1")
