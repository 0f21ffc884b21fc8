"""Tests for batch orchestration of playlist imports."""

import threading
from unittest.mock import MagicMock

import pytest
from conftest import MockCandidateSource, make_candidate
from ytmatch.config import ImportConfig
from ytmatch.exceptions import CollectionWriteError
from ytmatch.models.cancel import CancelToken
from ytmatch.models.enums import FailureReason, MatchStage
from ytmatch.models.progress import (
    ImportComplete,
    ImportFailure,
    ImportInProgress,
    ImportStatus,
)
from ytmatch.models.records import ImportRecord
from ytmatch.services.importer import DEFAULT_COLLECTION_NAME, PlaylistImporter
from ytmatch.services.resolver import MatchResolver


def make_records(count: int) -> list[ImportRecord]:
    return [ImportRecord(title=f"Song {i}", artist="Artist") for i in range(count)]


def even_source(count: int) -> MockCandidateSource:
    """Source where only even-numbered songs exist in the catalog."""
    return MockCandidateSource(
        results={
            f"song {i} Artist": [
                make_candidate(f"vid{i:08d}", f"Song {i}", ["Artist"])
            ]
            for i in range(0, count, 2)
        }
    )


class EventRecorder:
    """Collects progress events in emission order."""

    def __init__(self) -> None:
        self.events: list[ImportStatus] = []

    def __call__(self, status: ImportStatus) -> None:
        self.events.append(status)

    @property
    def processed(self) -> list[int]:
        return [e.processed for e in self.events if isinstance(e, ImportInProgress)]

    @property
    def terminal(self) -> ImportStatus:
        return self.events[-1]


def make_importer(
    source: MockCandidateSource, batch_size: int = 10, sink: object | None = None
) -> PlaylistImporter:
    config = ImportConfig(batch_size=batch_size)
    return PlaylistImporter(MatchResolver(source, config), config, sink=sink)


class TestProgressEvents:
    """Tests for the progress event sequence."""

    def test_batches_of_ten(self) -> None:
        recorder = EventRecorder()
        importer = make_importer(even_source(25))

        result = importer.import_tracks(make_records(25), recorder)

        assert recorder.processed == [0, 10, 20, 25]
        terminal = recorder.terminal
        assert isinstance(terminal, ImportComplete)
        assert terminal.imported == 13
        assert terminal.failed == 12
        assert terminal.total == 25
        assert not terminal.cancelled
        assert result is not None
        assert result.processed == 25

    def test_failed_records_reported(self) -> None:
        recorder = EventRecorder()
        make_importer(even_source(4)).import_tracks(make_records(4), recorder)

        terminal = recorder.terminal
        assert isinstance(terminal, ImportComplete)
        assert [f.index for f in terminal.failed_records] == [1, 3]
        assert all(
            f.reason == FailureReason.NO_CANDIDATES for f in terminal.failed_records
        )

    def test_exactly_one_terminal_event(self) -> None:
        recorder = EventRecorder()
        make_importer(even_source(5), batch_size=2).import_tracks(
            make_records(5), recorder
        )

        terminal_events = [
            e for e in recorder.events if isinstance(e, ImportComplete | ImportFailure)
        ]
        assert terminal_events == [recorder.terminal]
        assert recorder.processed == [0, 2, 4, 5]

    def test_empty_input(self) -> None:
        recorder = EventRecorder()
        source = MockCandidateSource()

        result = make_importer(source).import_tracks([], recorder)

        assert recorder.processed == [0]
        terminal = recorder.terminal
        assert isinstance(terminal, ImportComplete)
        assert (terminal.imported, terminal.failed, terminal.total) == (0, 0, 0)
        assert result is not None
        assert source.search_songs_calls == []


class TestOrdering:
    """Tests for result ordering under concurrency."""

    def test_results_keep_input_order(self) -> None:
        records = make_records(25)
        result = make_importer(even_source(25)).import_tracks(records, lambda _: None)

        assert result is not None
        assert [t.index for t in result.resolved] == list(range(0, 25, 2))
        assert [f.index for f in result.failed] == list(range(1, 25, 2))
        for track in result.resolved:
            assert track.record == records[track.index]
            assert track.candidate.title == records[track.index].title
            assert track.stage == MatchStage.STRICT

    def test_batch_runs_concurrently(self) -> None:
        barrier = threading.Barrier(10)
        source = even_source(20)
        source._on_search = lambda _: barrier.wait(timeout=5)
        records = [
            ImportRecord(title=f"Song {i}", artist="Artist") for i in range(0, 20, 2)
        ]

        result = make_importer(source).import_tracks(records, lambda _: None)

        # A broken barrier would surface as ERROR failures
        assert result is not None
        assert len(result.resolved) == 10
        assert result.failed == []


class TestFailureIsolation:
    """Tests for per-record error handling."""

    def test_unexpected_error_fails_only_that_record(self) -> None:
        source = even_source(4)
        source._errors = {"song 2 Artist": RuntimeError("boom")}

        result = make_importer(source).import_tracks(make_records(4), lambda _: None)

        assert result is not None
        assert [t.index for t in result.resolved] == [0]
        reasons = {f.index: f.reason for f in result.failed}
        assert reasons == {
            1: FailureReason.NO_CANDIDATES,
            2: FailureReason.ERROR,
            3: FailureReason.NO_CANDIDATES,
        }
        assert result.failure_counts[FailureReason.ERROR] == 1


class TestSink:
    """Tests for collection persistence."""

    def test_sink_receives_resolved_tracks_once(self) -> None:
        sink = MagicMock()
        result = make_importer(even_source(6), sink=sink).import_tracks(
            make_records(6), lambda _: None, name="Road trip"
        )

        assert result is not None
        sink.save.assert_called_once_with("Road trip", result.resolved)

    def test_default_collection_name(self) -> None:
        sink = MagicMock()
        make_importer(even_source(2), sink=sink).import_tracks(
            make_records(2), lambda _: None
        )

        assert sink.save.call_args.args[0] == DEFAULT_COLLECTION_NAME

    def test_sink_skipped_when_nothing_resolved(self) -> None:
        sink = MagicMock()
        make_importer(MockCandidateSource(), sink=sink).import_tracks(
            make_records(3), lambda _: None
        )

        sink.save.assert_not_called()

    def test_sink_error_reports_failure(self) -> None:
        sink = MagicMock()
        sink.save.side_effect = CollectionWriteError("disk full")
        recorder = EventRecorder()

        result = make_importer(even_source(2), sink=sink).import_tracks(
            make_records(2), recorder
        )

        assert result is None
        assert isinstance(recorder.terminal, ImportFailure)
        assert recorder.terminal.message == "disk full"
        assert not any(isinstance(e, ImportComplete) for e in recorder.events)


class TestCancellation:
    """Tests for cooperative cancellation between batches."""

    def test_cancel_stops_before_next_batch(self) -> None:
        token = CancelToken()
        sink = MagicMock()
        recorder = EventRecorder()

        def on_progress(status: ImportStatus) -> None:
            recorder(status)
            if isinstance(status, ImportInProgress) and status.processed == 10:
                token.cancel()

        source = even_source(25)
        result = make_importer(source, sink=sink).import_tracks(
            make_records(25), on_progress, cancel_token=token
        )

        assert recorder.processed == [0, 10]
        terminal = recorder.terminal
        assert isinstance(terminal, ImportComplete)
        assert terminal.cancelled
        assert terminal.imported + terminal.failed == 10
        assert result is not None
        assert result.cancelled
        assert all(t.index < 10 for t in result.resolved)
        sink.save.assert_not_called()

    def test_cancel_before_start(self) -> None:
        token = CancelToken()
        token.cancel()
        source = even_source(5)

        result = make_importer(source).import_tracks(
            make_records(5), lambda _: None, cancel_token=token
        )

        assert result is not None
        assert result.cancelled
        assert result.processed == 0
        assert source.search_songs_calls == []


def test_batch_size_must_be_positive() -> None:
    with pytest.raises(ValueError, match="batch_size"):
        ImportConfig(batch_size=0)
