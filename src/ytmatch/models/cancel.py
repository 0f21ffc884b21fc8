"""Cooperative cancellation for imports running on worker threads."""

import threading

from ytmatch.exceptions import CancellationError


class CancelToken:
    """Thread-safe cancellation flag backed by threading.Event.

    The importer checks the token before starting each batch. Records that
    are already being resolved are allowed to finish, so cancelling never
    leaves a half-resolved batch behind.

    Tokens are single-use: once cancelled, create a new one for the next
    import.

    Example:
        >>> token = CancelToken()
        >>> importer.import_tracks(records, on_progress, cancel_token=token)
        >>> # From a UI or signal handler thread:
        >>> token.cancel()
    """

    __slots__ = ("_event",)

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request cancellation. Safe to call from any thread."""
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        """True once cancel() has been called."""
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        """Raise CancellationError if cancellation was requested."""
        if self._event.is_set():
            raise CancellationError("Import cancelled")
