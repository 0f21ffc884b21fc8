"""Search query planning for import records.

The catalog search is keyword based and unforgiving with noisy input, so
each record gets an ordered list of queries, most specific first. The
resolver tries them in order and stops at the first one that returns
anything.
"""

from dataclasses import dataclass, field

from ytmatch.lib.normalize import is_mostly_non_latin, normalize, normalize_non_latin
from ytmatch.models.records import ImportRecord
from ytmatch.utils.url import extract_catalog_id


@dataclass(frozen=True)
class QueryPlan:
    """Search plan for one import record.

    Attributes:
        catalog_id: Video id taken from the record's external id, if any.
        queries: Title-based queries, most specific first.
        fallback_queries: Queries used only when every title query found nothing.
    """

    catalog_id: str | None
    queries: tuple[str, ...]
    fallback_queries: tuple[str, ...] = field(default_factory=tuple)

    @property
    def all_queries(self) -> tuple[str, ...]:
        """Title queries followed by fallback queries."""
        return self.queries + self.fallback_queries


def _join(*parts: str | None) -> str:
    return " ".join(p.strip() for p in parts if p and p.strip())


def _dedupe(queries: list[str]) -> tuple[str, ...]:
    seen: set[str] = set()
    result: list[str] = []
    for query in queries:
        key = query.casefold()
        if query and key not in seen:
            seen.add(key)
            result.append(query)
    return tuple(result)


class QueryPlanner:
    """Derives candidate search queries from an import record."""

    def plan(self, record: ImportRecord) -> QueryPlan:
        """Build the query plan for a record.

        Order of title queries:

        1. normalized title + artist + album
        2. normalized title + artist
        3. non-Latin-safe title + artist (only for CJK/Hangul titles)
        4. artist + normalized title
        5. raw title + artist
        6. normalized title
        7. raw title

        Duplicates (case-insensitive) and blanks are removed.

        Args:
            record: Record to plan for.

        Returns:
            QueryPlan with the optional catalog id and the queries.
        """
        title = normalize(record.title)
        raw_title = record.title.strip()
        artist = record.artist.strip()

        queries = [
            _join(title, artist, record.album),
            _join(title, artist),
        ]
        if is_mostly_non_latin(record.title):
            queries.append(_join(normalize_non_latin(record.title), artist))
        queries += [
            _join(artist, title),
            _join(raw_title, artist),
            title,
            raw_title,
        ]

        fallback: list[str] = []
        if record.album:
            fallback.append(_join(artist, record.album))

        return QueryPlan(
            catalog_id=extract_catalog_id(record.external_id),
            queries=_dedupe(queries),
            fallback_queries=tuple(q for q in _dedupe(fallback) if q not in queries),
        )
