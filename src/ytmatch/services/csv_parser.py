"""CSV playlist export parsing."""

import csv
import logging
import re
from pathlib import Path

from ytmatch.exceptions import CSVParseError
from ytmatch.models.records import ImportRecord

logger = logging.getLogger(__name__)

# Column reference: zero-based index or header name
Column = int | str

_CLOCK_DURATION_PATTERN = re.compile(r"^(?:(\d+):)?(\d{1,2}):(\d{2})$")


def parse_duration_value(value: str) -> int | None:
    """Parse an exported duration to milliseconds.

    Accepts plain milliseconds ("215000") or clock format ("3:35",
    "1:02:03"). Returns None for anything else.
    """
    value = value.strip()
    if not value:
        return None
    if value.isdigit():
        return int(value)
    if match := _CLOCK_DURATION_PATTERN.match(value):
        hours, minutes, seconds = (int(g) if g else 0 for g in match.groups())
        return ((hours * 60 + minutes) * 60 + seconds) * 1000
    logger.debug("Ignoring unparseable duration: %s", value)
    return None


class CSVPlaylistParser:
    """Reads track lists exported by third-party services.

    The first row is the header. Quoted fields may contain commas. Rows
    without a title or artist are skipped.
    """

    def __init__(self, encoding: str = "utf-8-sig") -> None:
        self._encoding = encoding

    def get_header(self, path: Path) -> list[str]:
        """Return the header row (empty list for an empty file).

        Raises:
            CSVParseError: If the file cannot be read.
        """
        rows = self._read_rows(path)
        return rows[0] if rows else []

    def parse(
        self,
        path: Path,
        title_column: Column,
        artist_column: Column,
        album_column: Column | None = None,
        duration_column: Column | None = None,
        id_column: Column | None = None,
    ) -> list[ImportRecord]:
        """Parse the export into import records.

        Args:
            path: CSV file.
            title_column: Title column (index or header name).
            artist_column: Artist column.
            album_column: Optional album column.
            duration_column: Optional duration column (ms or m:ss).
            id_column: Optional external id column (video id or URL).

        Returns:
            Records in file order.

        Raises:
            CSVParseError: If the file cannot be read or a column is unknown.
        """
        rows = self._read_rows(path)
        if not rows:
            return []

        header, data_rows = rows[0], rows[1:]
        title_idx = self._resolve_column(header, title_column)
        artist_idx = self._resolve_column(header, artist_column)
        album_idx = self._resolve_optional(header, album_column)
        duration_idx = self._resolve_optional(header, duration_column)
        id_idx = self._resolve_optional(header, id_column)

        records: list[ImportRecord] = []
        skipped = 0
        for row in data_rows:
            title = _cell(row, title_idx)
            artist = _cell(row, artist_idx)
            if not title or not artist:
                if any(cell.strip() for cell in row):
                    skipped += 1
                continue

            duration = _cell(row, duration_idx)
            records.append(
                ImportRecord(
                    title=title,
                    artist=artist,
                    album=_cell(row, album_idx) or None,
                    duration_ms=parse_duration_value(duration) if duration else None,
                    external_id=_cell(row, id_idx) or None,
                )
            )

        logger.info(
            "Parsed %d records from %s (%d rows skipped)", len(records), path, skipped
        )
        return records

    def _read_rows(self, path: Path) -> list[list[str]]:
        try:
            with path.open(newline="", encoding=self._encoding) as f:
                return [row for row in csv.reader(f)]
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise CSVParseError(f"Could not read {path}: {e}") from e

    def _resolve_column(self, header: list[str], column: Column) -> int:
        if isinstance(column, int):
            if 0 <= column < len(header):
                return column
            raise CSVParseError(f"Column index out of range: {column}")

        wanted = column.strip().casefold()
        for idx, name in enumerate(header):
            if name.strip().casefold() == wanted:
                return idx
        raise CSVParseError(f"Unknown column: {column}")

    def _resolve_optional(self, header: list[str], column: Column | None) -> int | None:
        return None if column is None else self._resolve_column(header, column)


def _cell(row: list[str], idx: int | None) -> str:
    if idx is None or idx >= len(row):
        return ""
    return row[idx].strip()
