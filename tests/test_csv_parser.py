"""Tests for CSV export parsing."""

from pathlib import Path

import pytest
from ytmatch.exceptions import CSVParseError
from ytmatch.services.csv_parser import CSVPlaylistParser, parse_duration_value

EXPORT = (
    "Track Name,Artist Name(s),Album Name,Duration (ms),Link\n"
    "Yesterday,The Beatles,Help!,125000,https://youtu.be/jo505ZyaCbA\n"
    '"Hello, Goodbye",The Beatles,Magical Mystery Tour,208000,\n'
    ",Nobody,Nothing,1000,\n"
    "\n"
    "Stay,\"The Kid LAROI, Justin Bieber\",,2:21,\n"
)


@pytest.fixture
def export_file(tmp_path: Path) -> Path:
    path = tmp_path / "export.csv"
    path.write_text(EXPORT, encoding="utf-8")
    return path


class TestParseDurationValue:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("215000", 215000),
            ("3:35", 215000),
            ("0:05", 5000),
            ("1:02:03", 3723000),
            (" 2:21 ", 141000),
            ("", None),
            ("abc", None),
            ("3:5", None),
            ("1:2:3:4", None),
        ],
    )
    def test_values(self, value: str, expected: int | None) -> None:
        assert parse_duration_value(value) == expected


class TestCSVPlaylistParser:
    def test_parse_by_header_name(self, export_file: Path) -> None:
        records = CSVPlaylistParser().parse(
            export_file,
            title_column="Track Name",
            artist_column="Artist Name(s)",
            album_column="Album Name",
            duration_column="Duration (ms)",
            id_column="Link",
        )

        assert [r.title for r in records] == ["Yesterday", "Hello, Goodbye", "Stay"]
        first = records[0]
        assert first.artist == "The Beatles"
        assert first.album == "Help!"
        assert first.duration_ms == 125000
        assert first.external_id == "https://youtu.be/jo505ZyaCbA"
        assert records[1].external_id is None
        assert records[2].artist == "The Kid LAROI, Justin Bieber"
        assert records[2].album is None
        assert records[2].duration_ms == 141000

    def test_parse_by_index(self, export_file: Path) -> None:
        records = CSVPlaylistParser().parse(export_file, 0, 1)
        assert len(records) == 3
        assert records[0].album is None
        assert records[0].duration_ms is None

    def test_header_names_are_case_insensitive(self, export_file: Path) -> None:
        records = CSVPlaylistParser().parse(export_file, "track name", "ARTIST NAME(S)")
        assert len(records) == 3

    def test_unknown_column(self, export_file: Path) -> None:
        with pytest.raises(CSVParseError, match="Unknown column: Genre"):
            CSVPlaylistParser().parse(export_file, "Track Name", "Genre")

    def test_index_out_of_range(self, export_file: Path) -> None:
        with pytest.raises(CSVParseError, match="out of range"):
            CSVPlaylistParser().parse(export_file, 0, 9)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(CSVParseError) as exc_info:
            CSVPlaylistParser().parse(tmp_path / "missing.csv", 0, 1)
        assert exc_info.value.status_code == 400

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.csv"
        path.write_text("", encoding="utf-8")
        parser = CSVPlaylistParser()
        assert parser.parse(path, 0, 1) == []
        assert parser.get_header(path) == []

    def test_strips_byte_order_mark(self, tmp_path: Path) -> None:
        path = tmp_path / "bom.csv"
        path.write_text("Title,Artist\nYesterday,The Beatles\n", encoding="utf-8-sig")
        records = CSVPlaylistParser().parse(path, "Title", "Artist")
        assert records[0].title == "Yesterday"

    def test_get_header(self, export_file: Path) -> None:
        assert CSVPlaylistParser().get_header(export_file) == [
            "Track Name",
            "Artist Name(s)",
            "Album Name",
            "Duration (ms)",
            "Link",
        ]
