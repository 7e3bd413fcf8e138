"""
Polling Signal Source - Default network events derived from periodic polls.

Each poll records which interface carries the default route and whether a
coarse TCP check succeeds through it. Differences between consecutive polls
are translated into NetworkEvents delivered on the source's own thread.
"""

import functools
import itertools
import threading
from typing import Callable, Dict, List, Optional, Set, Tuple

from loguru import logger

from netpulse.core.constants import POLL_INTERVAL, VALIDATION_HOST, VALIDATION_PORT, VALIDATION_TIMEOUT
from netpulse.core.protocols import NetworkListener
from netpulse.core.types import NetworkEvent, NetworkSnapshot
from netpulse.utils.network_interface import DefaultNetworkDetector
from netpulse.utils.network_utils import check_tcp_reachability


def initial_events(snapshot: NetworkSnapshot) -> List[NetworkEvent]:
    """Events that bring a newly registered listener up to date."""
    if not snapshot.has_network:
        return [NetworkEvent.unavailable()]
    return [
        NetworkEvent.available(snapshot.interface),
        NetworkEvent.capabilities_changed(snapshot.validated, snapshot.interface),
    ]


def transition_events(previous: NetworkSnapshot, current: NetworkSnapshot) -> List[NetworkEvent]:
    """Events describing the change between two consecutive polls."""
    if previous == current:
        return []

    events: List[NetworkEvent] = []

    if previous.interface != current.interface:
        if previous.has_network:
            events.append(NetworkEvent.lost(previous.interface))
        if current.has_network:
            events.append(NetworkEvent.available(current.interface))
            events.append(NetworkEvent.capabilities_changed(current.validated, current.interface))
    elif current.has_network:
        # Same network, validation flipped
        events.append(NetworkEvent.capabilities_changed(current.validated, current.interface))

    return events


class PollingSignalSource:
    """
    Signal source that polls the host's default network.

    A daemon thread runs while at least one listener is registered. New
    listeners are synced on the next poll (AVAILABLE + CAPABILITIES_CHANGED, or
    UNAVAILABLE when the host has no network); afterwards they receive only
    transitions.
    """

    def __init__(
        self,
        poll_interval: float = POLL_INTERVAL,
        validation_host: str = VALIDATION_HOST,
        validation_port: int = VALIDATION_PORT,
        validation_timeout: float = VALIDATION_TIMEOUT,
        detector: Optional[DefaultNetworkDetector] = None,
        validator: Optional[Callable[[], bool]] = None,
    ):
        """
        Initialize the source.

        Args:
            poll_interval: Seconds between polls
            validation_host: Host used by the coarse TCP validation check
            validation_port: Port used by the coarse TCP validation check
            validation_timeout: Timeout of the validation check in seconds
            detector: Default interface detector
            validator: Replaces the TCP validation check
        """
        self._poll_interval = poll_interval
        self._detector = detector or DefaultNetworkDetector()
        self._validator = validator or functools.partial(
            check_tcp_reachability, validation_host, validation_port, validation_timeout
        )

        self._lock = threading.Lock()
        self._listeners: Dict[int, NetworkListener] = {}
        self._pending_sync: Set[int] = set()
        self._ids = itertools.count(1)

        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self._wake_event = threading.Event()

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._thread is not None

    def register(self, listener: NetworkListener) -> int:
        with self._lock:
            handle = next(self._ids)
            self._listeners[handle] = listener
            self._pending_sync.add(handle)

            if self._thread is None:
                self._stop_event = threading.Event()
                self._thread = threading.Thread(
                    target=self._poll_loop,
                    args=(self._stop_event,),
                    daemon=True,
                    name="PollingSignalSource",
                )
                self._thread.start()
                logger.info(f"[PollingSignalSource] Started (interval={self._poll_interval}s)")
            else:
                # Sync the new listener without waiting a full interval
                self._wake_event.set()

        return handle

    def unregister(self, handle: int):
        with self._lock:
            if self._listeners.pop(handle, None) is None:
                logger.warning(f"[PollingSignalSource] Unknown listener handle {handle}")
                return
            self._pending_sync.discard(handle)

            if not self._listeners and self._thread is not None:
                # The poll thread exits on its own; never join here, it may be delivering to us
                self._stop_event.set()
                self._wake_event.set()
                self._thread = None
                logger.info("[PollingSignalSource] Stopped")

    def take_snapshot(self) -> NetworkSnapshot:
        """Poll the default interface and, if present, its validation state."""
        interface = self._detector.get_default_interface()
        if interface is None:
            return NetworkSnapshot()
        return NetworkSnapshot(interface=interface, validated=bool(self._validator()))

    def _poll_loop(self, stop_event: threading.Event):
        """Main polling loop."""
        previous: Optional[NetworkSnapshot] = None

        while not stop_event.is_set():
            # Cleared before polling so a wake-up set from here on is never dropped
            self._wake_event.clear()
            try:
                snapshot = self.take_snapshot()
                if previous is not None and snapshot != previous:
                    logger.debug(f"[PollingSignalSource] {previous} -> {snapshot}")
                self._dispatch(previous, snapshot, stop_event)
                previous = snapshot
            except Exception as e:
                logger.error(f"[PollingSignalSource] Error in poll loop: {e}")

            self._wake_event.wait(self._poll_interval)

    def _dispatch(self, previous: Optional[NetworkSnapshot], snapshot: NetworkSnapshot, stop_event: threading.Event):
        deliveries: List[Tuple[int, NetworkListener, List[NetworkEvent]]] = []

        with self._lock:
            if stop_event.is_set():
                return

            for handle, listener in self._listeners.items():
                if handle in self._pending_sync or previous is None:
                    deliveries.append((handle, listener, initial_events(snapshot)))
                else:
                    deliveries.append((handle, listener, transition_events(previous, snapshot)))
            self._pending_sync.clear()

        for handle, listener, events in deliveries:
            for event in events:
                try:
                    listener(event)
                except Exception as e:
                    logger.error(f"[PollingSignalSource] Error in listener {handle}: {e}")
