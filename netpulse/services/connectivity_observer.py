"""
Connectivity Observer - Signal-driven connectivity detection.

Listens to a network signal source, validates capability changes with an
active reachability probe, and fans the resulting boolean states out to every
open ConnectivityStream.

Event policy:
- AVAILABLE            -> True (optimistic, refined by the next capabilities event)
- CAPABILITIES_CHANGED -> validated AND probe succeeded
- LOST / UNAVAILABLE   -> False

Threading:
- Events arrive on the source's delivery thread and are never blocked by the probe
- Probes run on a dedicated ThreadPoolExecutor
- One listener registration is shared by all streams, released when the last one closes
"""

import functools
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, List, Optional

from loguru import logger

from netpulse.core.constants import DROP_STALE_PROBES, PROBE_WORKERS
from netpulse.core.protocols import ConnectivityProbe, NetworkSignalSource
from netpulse.core.types import NetworkEvent, NetworkEventType

from .connectivity_stream import ConnectivityStream


class ConnectivityObserver:
    """
    Converts network events plus probe results into a stream of connectivity states.

    Probe failures are never surfaced as errors, only as a False state. Overlapping
    probes may complete out of order; with drop_stale_probes a probe result is
    discarded when any newer event arrived while it was running.
    """

    def __init__(
        self,
        signal_source: NetworkSignalSource,
        probe: ConnectivityProbe,
        probe_workers: int = PROBE_WORKERS,
        drop_stale_probes: bool = DROP_STALE_PROBES,
    ):
        """
        Initialize the observer. Nothing is registered until the first subscribe().

        Args:
            signal_source: Source of NetworkEvents for the default network
            probe: Blocking reachability probe run on CAPABILITIES_CHANGED
            probe_workers: Size of the probe thread pool
            drop_stale_probes: Discard probe results overtaken by a newer event
        """
        self._source = signal_source
        self._probe = probe
        self._probe_workers = probe_workers
        self._drop_stale_probes = drop_stale_probes

        self._lock = threading.RLock()
        self._streams: List[ConnectivityStream] = []

        # Registration state
        self._handle: Any = None
        self._registered = False
        self._executor: Optional[ThreadPoolExecutor] = None
        self._generation = 0  # Bumped on every register/unregister
        self._event_seq = 0  # Bumped on every accepted event

    @property
    def is_registered(self) -> bool:
        """Whether a listener is currently registered with the signal source."""
        with self._lock:
            return self._registered

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._streams)

    def subscribe(self) -> ConnectivityStream:
        """
        Open a new stream of connectivity states.

        The first open stream registers a listener with the signal source; later
        streams share that registration.

        Raises:
            Whatever the signal source raises when registration fails
        """
        stream = ConnectivityStream(on_close=self._release)

        with self._lock:
            self._streams.append(stream)
            if not self._registered:
                try:
                    self._register()
                except Exception:
                    self._streams.remove(stream)
                    raise

        return stream

    def close(self):
        """Close every open stream, releasing the registration."""
        with self._lock:
            streams = list(self._streams)

        for stream in streams:
            stream.close()

    def _register(self):
        """Register a listener for a new generation. Caller holds the lock."""
        self._generation += 1
        generation = self._generation
        self._executor = ThreadPoolExecutor(
            max_workers=self._probe_workers,
            thread_name_prefix="ConnectivityProbe",
        )
        self._registered = True

        try:
            self._handle = self._source.register(functools.partial(self._on_event, generation))
        except Exception as e:
            logger.error(f"[ConnectivityObserver] Registration failed: {e}")
            self._registered = False
            self._generation += 1
            self._executor.shutdown(wait=False)
            self._executor = None
            raise

        logger.info(f"[ConnectivityObserver] Registered listener (generation {generation})")

    def _release(self, stream: ConnectivityStream):
        """Detach a closed stream; unregister when it was the last one."""
        with self._lock:
            if stream not in self._streams:
                return
            self._streams.remove(stream)
            if self._streams or not self._registered:
                return

            handle = self._handle
            executor = self._executor
            generation = self._generation

            # Invalidate the generation first so late events and probe results are dropped
            self._generation += 1
            self._registered = False
            self._handle = None
            self._executor = None

            self._source.unregister(handle)

        # In-flight probes finish on their own, queued ones are cancelled
        executor.shutdown(wait=False, cancel_futures=True)
        logger.info(f"[ConnectivityObserver] Unregistered listener (generation {generation})")

    def _on_event(self, generation: int, event: NetworkEvent):
        """Listener invoked on the signal source's delivery thread. Must not block."""
        with self._lock:
            if generation != self._generation:
                logger.debug(f"[ConnectivityObserver] Event {event.type} ignored (stale registration)")
                return

            self._event_seq += 1
            seq = self._event_seq
            logger.debug(f"[ConnectivityObserver] Event {event.type} (network={event.network}, seq={seq})")

            if event.type == NetworkEventType.CAPABILITIES_CHANGED:
                self._executor.submit(self._run_probe, event.validated, generation, seq)
                return

        if event.type == NetworkEventType.AVAILABLE:
            self._emit(True, generation)
        elif event.type in (NetworkEventType.LOST, NetworkEventType.UNAVAILABLE):
            self._emit(False, generation)
        else:
            logger.warning(f"[ConnectivityObserver] Unknown event type: {event.type}")

    def _run_probe(self, validated: bool, generation: int, seq: int):
        """Probe task run on the probe executor."""
        try:
            reachable = self._probe.check()
        except Exception as e:
            logger.error(f"[ConnectivityObserver] Probe raised: {e}")
            reachable = False

        state = validated and reachable
        logger.debug(
            f"[ConnectivityObserver] Probe for seq {seq}: validated={validated}, reachable={reachable}"
        )
        self._emit(state, generation, seq)

    def _emit(self, state: bool, generation: int, seq: Optional[int] = None):
        """Offer a state to all open streams of the given generation."""
        with self._lock:
            if generation != self._generation:
                logger.debug(f"[ConnectivityObserver] Dropped {state} (registration released)")
                return

            if seq is not None and self._drop_stale_probes and seq != self._event_seq:
                logger.debug(
                    f"[ConnectivityObserver] Dropped stale probe result {state} "
                    f"(seq {seq}, latest {self._event_seq})"
                )
                return

            for stream in self._streams:
                stream.offer(state)

        logger.debug(f"[ConnectivityObserver] Emitted {state}")
