"""
Cancellation signal for the management API call.

A Cancellation is created by the caller and passed into
ManagerClient.list_communities(). Cancelling it aborts the request in
flight by running the callbacks the client registered.
"""

import logging
import signal
import threading
from contextlib import contextmanager
from typing import Callable, Iterator

from commgr.exceptions import RequestCancelledError

logger = logging.getLogger(__name__)


class Cancellation:
    """
    Thread-safe, one-shot cancellation signal.

    Examples
    --------
    >>> cancellation = Cancellation()
    >>> unregister = cancellation.on_cancel(lambda: print("aborted"))
    >>> cancellation.cancel()
    aborted
    >>> cancellation.cancelled
    True
    """

    def __init__(self):
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._callbacks: list[Callable[[], None]] = []

    @property
    def cancelled(self) -> bool:
        """Return True once cancel() has been called."""
        return self._event.is_set()

    def cancel(self) -> None:
        """Signal cancellation and run registered callbacks once."""
        with self._lock:
            if self._event.is_set():
                return
            self._event.set()
            callbacks = list(self._callbacks)
            self._callbacks.clear()

        logger.debug("Cancellation requested")
        for callback in callbacks:
            callback()

    def on_cancel(self, callback: Callable[[], None]) -> Callable[[], None]:
        """
        Register a callback to run on cancellation.

        If already cancelled, the callback runs immediately.

        Parameters
        ----------
        callback : callable
            Function taking no arguments

        Returns
        -------
        callable
            Function that unregisters the callback
        """
        with self._lock:
            if not self._event.is_set():
                self._callbacks.append(callback)

                def unregister() -> None:
                    with self._lock:
                        if callback in self._callbacks:
                            self._callbacks.remove(callback)

                return unregister

        callback()
        return lambda: None

    def raise_if_cancelled(self) -> None:
        """Raise RequestCancelledError if cancel() has been called."""
        if self.cancelled:
            raise RequestCancelledError()


@contextmanager
def cancel_on_interrupt(cancellation: Cancellation) -> Iterator[Cancellation]:
    """
    Route SIGINT into a cancellation for the duration of the block.

    The interrupt cancels the signal and raises RequestCancelledError in
    the main thread, aborting a blocking socket read. The previous
    handler is restored on exit. Outside the main thread this is a no-op
    since signal handlers cannot be installed there.

    Parameters
    ----------
    cancellation : Cancellation
        Signal to cancel on interrupt

    Yields
    ------
    Cancellation
        The same cancellation
    """
    if threading.current_thread() is not threading.main_thread():
        yield cancellation
        return

    def handler(signum, frame):
        logger.info("Interrupted, cancelling request...")
        cancellation.cancel()
        raise RequestCancelledError("request cancelled by interrupt")

    previous = signal.signal(signal.SIGINT, handler)
    try:
        yield cancellation
    finally:
        signal.signal(signal.SIGINT, previous)
