"""Per-record resolution of import records to catalog tracks."""

import logging
from dataclasses import dataclass

from ytmatch.client import CandidateSource
from ytmatch.config import ImportConfig
from ytmatch.exceptions import YTMatchError
from ytmatch.lib.matching import MatchScorer
from ytmatch.lib.normalize import NormalizedInfo, fold, parse_song_info
from ytmatch.lib.queries import QueryPlanner
from ytmatch.models.candidate import Candidate
from ytmatch.models.enums import FailureReason, MatchStage
from ytmatch.models.records import ImportRecord
from ytmatch.models.results import FailedTrack, ResolutionOutcome, ResolvedTrack

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchDecision:
    """Outcome of matching one record against one candidate set.

    Attributes:
        candidate: Accepted candidate, or the best rejected one (if any).
            A rejected decision can still carry a candidate, so check
            ``accepted`` before using it.
        score: Fuzzy score of the candidate (0 for direct-id and strict).
        accepted: Whether the candidate should be used.
        stage: Stage that produced the decision.
    """

    candidate: Candidate | None
    score: int
    accepted: bool
    stage: MatchStage


class MatchResolver:
    """Resolves one import record to a single catalog track.

    Pipeline Overview:
    ==================
    1. DirectId - the record's external id names a video: search for it and
                  accept the candidate carrying that id.
    2. Search   - run planned queries in order (songs filter, then
                  unfiltered), stopping at the first that returns
                  candidates; fall back to artist + album.
    3. Strict   - exact normalized title (and identical modifiers), preferring
                  artist + album, then artist corroboration.
    4. Fuzzy    - highest weighted score, accepted at ``min_score`` or above.

    Precedence is DirectId > Strict > Fuzzy. Search failures count as empty
    results, so one bad request never aborts the record.
    """

    def __init__(
        self,
        source: CandidateSource,
        config: ImportConfig | None = None,
        *,
        planner: QueryPlanner | None = None,
        scorer: MatchScorer | None = None,
    ) -> None:
        self._source = source
        self._config = config or ImportConfig()
        self._planner = planner or QueryPlanner()
        self._scorer = scorer or MatchScorer(self._config.weights)

    # ============================================================================
    # PUBLIC API
    # ============================================================================

    def resolve(self, index: int, record: ImportRecord) -> ResolutionOutcome:
        """Resolve a record, searching the catalog as needed.

        Args:
            index: Position of the record in the original input.
            record: Record to resolve.

        Returns:
            ResolvedTrack on acceptance, FailedTrack otherwise.
        """
        plan = self._planner.plan(record)

        if plan.catalog_id:
            if direct := self._find_by_id(plan.catalog_id):
                logger.debug("Direct id match for '%s': %s", record.display, direct.id)
                return ResolvedTrack(
                    index=index,
                    record=record,
                    candidate=direct,
                    stage=MatchStage.DIRECT_ID,
                    query=plan.catalog_id,
                )

        query, candidates = self._first_results(plan.queries)
        if not candidates:
            query, candidates = self._first_results(plan.fallback_queries)

        if not candidates:
            logger.warning("No candidates for '%s'", record.display)
            return FailedTrack(
                index=index, record=record, reason=FailureReason.NO_CANDIDATES
            )

        decision = self.decide(record, candidates, plan.catalog_id)
        if not decision.accepted or decision.candidate is None:
            logger.warning(
                "No match above threshold for '%s' (best score %d, query '%s')",
                record.display,
                decision.score,
                query,
            )
            return FailedTrack(
                index=index, record=record, reason=FailureReason.NO_CONFIDENT_MATCH
            )

        logger.debug(
            "Matched '%s' -> %s '%s' (%s, score %d)",
            record.display,
            decision.candidate.id,
            decision.candidate.title,
            decision.stage,
            decision.score,
        )
        return ResolvedTrack(
            index=index,
            record=record,
            candidate=decision.candidate,
            stage=decision.stage,
            score=decision.score,
            query=query,
        )

    def decide(
        self,
        record: ImportRecord,
        candidates: list[Candidate],
        catalog_id: str | None = None,
    ) -> MatchDecision:
        """Pick the best candidate for a record without any network access.

        Args:
            record: Record being resolved.
            candidates: Candidates in the source's ranking order.
            catalog_id: Video id named by the record, if any.

        Returns:
            MatchDecision describing the chosen (or best rejected) candidate.
        """
        if not candidates:
            return MatchDecision(None, 0, False, MatchStage.REJECTED)

        if catalog_id and (direct := self._direct_match(candidates, catalog_id)):
            return MatchDecision(direct, 0, True, MatchStage.DIRECT_ID)

        import_info = parse_song_info(record.title, record.artist, record.album)
        scored = [
            (c, parse_song_info(c.title, c.artists_text, c.album)) for c in candidates
        ]

        if strict := self._strict_match(import_info, scored):
            return MatchDecision(strict, 0, True, MatchStage.STRICT)

        return self._fuzzy_match(record, import_info, scored)

    # ============================================================================
    # DECISION STAGES
    # ============================================================================

    def _find_by_id(self, catalog_id: str) -> Candidate | None:
        """Search the catalog id itself, songs first, then unfiltered."""
        for songs_only in (True, False):
            candidates = self._search(catalog_id, songs_only=songs_only)
            if direct := self._direct_match(candidates, catalog_id):
                return direct
        return None

    def _direct_match(
        self, candidates: list[Candidate], catalog_id: str
    ) -> Candidate | None:
        return next((c for c in candidates if c.id == catalog_id), None)

    def _strict_match(
        self,
        import_info: NormalizedInfo,
        scored: list[tuple[Candidate, NormalizedInfo]],
    ) -> Candidate | None:
        """Accept an exact-title candidate corroborated by artist/album.

        Modifier sets must agree too: "Yesterday" and "Yesterday (Live)"
        normalize to the same title but are different renditions.
        """
        if not import_info.title:
            return None

        exact = [
            (candidate, info)
            for candidate, info in scored
            if info.title == import_info.title
            and info.modifiers == import_info.modifiers
        ]
        if not exact:
            return None

        primary = import_info.primary_artist

        def artist_matches(info: NormalizedInfo) -> bool:
            return bool(primary) and any(primary in a for a in info.all_artists)

        def album_matches(candidate: Candidate) -> bool:
            return bool(
                import_info.album
                and candidate.album
                and import_info.album in fold(candidate.album)
            )

        for candidate, info in exact:
            if artist_matches(info) and album_matches(candidate):
                return candidate
        for candidate, info in exact:
            if artist_matches(info):
                return candidate

        # Title alone is only trusted when there is no artist to contradict it
        if not primary or self._config.allow_title_only_strict:
            return exact[0][0]
        return None

    def _fuzzy_match(
        self,
        record: ImportRecord,
        import_info: NormalizedInfo,
        scored: list[tuple[Candidate, NormalizedInfo]],
    ) -> MatchDecision:
        best: Candidate | None = None
        best_score = 0
        for candidate, info in scored:
            score = self._scorer.score(
                import_info,
                info,
                candidate.album,
                import_duration_ms=record.duration_ms,
                candidate_duration_text=candidate.duration_text,
            )
            logger.debug(
                "Score %d for candidate %s '%s'", score, candidate.id, candidate.title
            )
            # Strict comparison keeps the source's ranking on ties
            if best is None or score > best_score:
                best, best_score = candidate, score

        accepted = best_score >= self._config.min_score
        return MatchDecision(
            candidate=best,
            score=best_score,
            accepted=accepted,
            stage=MatchStage.FUZZY if accepted else MatchStage.REJECTED,
        )

    # ============================================================================
    # SEARCH
    # ============================================================================

    def _search(self, query: str, *, songs_only: bool = True) -> list[Candidate]:
        """Search, converting source errors into an empty result."""
        try:
            if songs_only:
                return self._source.search_songs(query)
            return self._source.search_any(query)
        except YTMatchError as e:
            logger.warning("Search failed for '%s': %s", query, e.message)
            return []

    def _first_results(
        self, queries: tuple[str, ...]
    ) -> tuple[str | None, list[Candidate]]:
        """Run queries in order until one returns candidates.

        Each query is tried with the songs filter first, then unfiltered,
        before moving to the next one.
        """
        for query in queries:
            logger.debug("Searching: \"%s\"", query)
            candidates = self._search(query)
            if not candidates:
                logger.debug("No songs for \"%s\", retrying unfiltered", query)
                candidates = self._search(query, songs_only=False)
            if candidates:
                return query, candidates
        return None, []
