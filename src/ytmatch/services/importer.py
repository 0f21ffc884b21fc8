"""Batch orchestration for playlist imports."""

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from ytmatch.config import ImportConfig
from ytmatch.exceptions import CancellationError
from ytmatch.models.cancel import CancelToken
from ytmatch.models.enums import FailureReason
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
from ytmatch.services.collection import CollectionSink
from ytmatch.services.resolver import MatchResolver

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[ImportStatus], None]

DEFAULT_COLLECTION_NAME = "Imported playlist"


@dataclass
class _ImportState:
    """Accumulates outcomes across batches."""

    total: int
    resolved: list[ResolvedTrack] = field(default_factory=list)
    failed: list[FailedTrack] = field(default_factory=list)
    cancelled: bool = False

    @property
    def processed(self) -> int:
        return len(self.resolved) + len(self.failed)

    def add(self, outcome: ResolutionOutcome) -> None:
        if isinstance(outcome, ResolvedTrack):
            self.resolved.append(outcome)
        else:
            self.failed.append(outcome)

    def to_result(self) -> ImportResult:
        return ImportResult(
            total=self.total,
            resolved=self.resolved,
            failed=self.failed,
            cancelled=self.cancelled,
        )


class PlaylistImporter:
    """Resolves a list of import records in concurrent batches.

    Pipeline Overview:
    ==================
    1. import_tracks() - Main entry point: emits the initial progress event,
                   runs all batches, persists the result and emits the
                   terminal event
    2. _run_batches() - Splits records into fixed-size batches; batch N+1
                   starts only after every record of batch N is resolved
    3. _resolve_batch() - Fans a batch out to the worker pool and folds the
                   outcomes back in input order
    4. _resolve_one() - Task boundary: any exception becomes a failed record

    Progress events go to the callback in this order: ``ImportInProgress``
    with processed=0, one ``ImportInProgress`` per finished batch, then
    exactly one of ``ImportComplete`` or ``ImportFailure``.

    Example:
        >>> importer = PlaylistImporter(MatchResolver(YTMusicClient()))
        >>> result = importer.import_tracks(records, print, name="Road trip")
        >>> print(f"Imported {len(result.resolved)} of {result.total}")
    """

    def __init__(
        self,
        resolver: MatchResolver,
        config: ImportConfig | None = None,
        *,
        sink: CollectionSink | None = None,
    ) -> None:
        """Initialize the importer.

        Args:
            resolver: Per-record resolver.
            config: Import configuration (batch size). Uses defaults if not
                provided.
            sink: Optional persistence for the resolved tracks.
        """
        self._resolver = resolver
        self._config = config or ImportConfig()
        self._sink = sink

    def import_tracks(
        self,
        records: Sequence[ImportRecord],
        on_progress: ProgressCallback,
        *,
        name: str | None = None,
        cancel_token: CancelToken | None = None,
    ) -> ImportResult | None:
        """Resolve all records and report progress.

        Args:
            records: Records to resolve, in the order they were exported.
            on_progress: Callback receiving progress events.
            name: Collection name passed to the sink.
            cancel_token: Optional token; when cancelled, no further batch
                starts and the partial result is reported as cancelled.

        Returns:
            The import result (possibly partial if cancelled), or None if
            the import aborted with an error.
        """
        records = list(records)
        state = _ImportState(total=len(records))
        on_progress(ImportInProgress(processed=0, total=state.total))

        try:
            try:
                self._run_batches(records, state, on_progress, cancel_token)
            except CancellationError:
                logger.info(
                    "Import cancelled after %d of %d records",
                    state.processed,
                    state.total,
                )
                state.cancelled = True

            result = state.to_result()
            if self._sink and result.resolved and not result.cancelled:
                self._sink.save(name or DEFAULT_COLLECTION_NAME, result.resolved)
        except Exception as e:
            logger.exception("An error occurred during the import process")
            on_progress(ImportFailure(message=str(e) or type(e).__name__))
            return None

        logger.info(
            "Import finished: %d imported, %d failed, %d total",
            len(result.resolved),
            len(result.failed),
            result.total,
        )
        on_progress(
            ImportComplete(
                imported=len(result.resolved),
                failed=len(result.failed),
                total=result.total,
                failed_records=result.failed,
                cancelled=result.cancelled,
            )
        )
        return result

    def _run_batches(
        self,
        records: list[ImportRecord],
        state: _ImportState,
        on_progress: ProgressCallback,
        cancel_token: CancelToken | None,
    ) -> None:
        batch_size = self._config.batch_size
        if not records:
            return

        with ThreadPoolExecutor(
            max_workers=min(batch_size, len(records)),
            thread_name_prefix="ytmatch-resolve",
        ) as executor:
            for start in range(0, len(records), batch_size):
                if cancel_token:
                    cancel_token.raise_if_cancelled()

                batch = records[start : start + batch_size]
                for outcome in self._resolve_batch(executor, start, batch):
                    state.add(outcome)

                logger.debug(
                    "Batch done: %d/%d records processed",
                    state.processed,
                    state.total,
                )
                on_progress(
                    ImportInProgress(processed=state.processed, total=state.total)
                )

    def _resolve_batch(
        self,
        executor: ThreadPoolExecutor,
        offset: int,
        batch: list[ImportRecord],
    ) -> list[ResolutionOutcome]:
        """Resolve one batch concurrently; outcomes follow input order."""
        futures = [
            executor.submit(self._resolve_one, offset + i, record)
            for i, record in enumerate(batch)
        ]
        return [future.result() for future in futures]

    def _resolve_one(self, index: int, record: ImportRecord) -> ResolutionOutcome:
        try:
            return self._resolver.resolve(index, record)
        except Exception:
            logger.exception("Error while processing '%s'", record.display)
            return FailedTrack(index=index, record=record, reason=FailureReason.ERROR)
