"""Connectivity Stream - Closeable channel of connectivity states."""

import queue
import threading
from typing import Callable, Iterator, Optional

# Marks the end of the stream inside the queue
_CLOSED = object()


class ConnectivityStream:
    """
    Thread-safe, iterable channel of boolean connectivity states.

    Producers on any thread may offer states; a consumer reads them with get()
    or by iterating. close() is idempotent and notifies the owner exactly once.
    Values offered before close() are still delivered; values offered after it
    are dropped.

    Usage:
        with observer.subscribe() as stream:
            for connected in stream:
                ...
    """

    def __init__(self, on_close: Optional[Callable[["ConnectivityStream"], None]] = None):
        self._queue: "queue.Queue" = queue.Queue()
        self._on_close = on_close
        self._lock = threading.Lock()
        self._closed = False

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    def offer(self, state: bool) -> bool:
        """
        Enqueue a state without blocking.

        Returns:
            False if the stream is already closed and the state was dropped
        """
        with self._lock:
            if self._closed:
                return False
            self._queue.put_nowait(bool(state))
            return True

    def get(self, timeout: Optional[float] = None) -> Optional[bool]:
        """
        Wait for the next state.

        Args:
            timeout: Seconds to wait, None waits indefinitely

        Returns:
            The next state, or None once the stream is closed and drained

        Raises:
            queue.Empty: If no state arrived within timeout
        """
        item = self._queue.get(timeout=timeout)
        if item is _CLOSED:
            # Leave the marker for subsequent readers
            self._queue.put_nowait(_CLOSED)
            return None
        return item

    def close(self):
        """Close the stream and release its upstream registration."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._queue.put_nowait(_CLOSED)

        if self._on_close:
            self._on_close(self)

    def __iter__(self) -> Iterator[bool]:
        while True:
            state = self.get()
            if state is None:
                return
            yield state

    def __enter__(self) -> "ConnectivityStream":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
