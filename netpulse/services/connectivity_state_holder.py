"""
Connectivity State Holder - Shared, replayable connectivity state.

Wraps a ConnectivityObserver so any number of consumers can attach and detach
freely:
- The first subscriber opens one upstream stream (and so one registration)
- Every subscriber immediately receives the cached state, then live updates
- Consecutive equal states are conflated
- After the last subscriber leaves, the upstream is kept for a grace period
  so rapid re-subscription does not re-register
"""

import itertools
import threading
from typing import Callable, Dict, List, Optional

from loguru import logger

from netpulse.core.constants import GRACE_PERIOD, INITIAL_STATE

from .connectivity_observer import ConnectivityObserver
from .connectivity_stream import ConnectivityStream

StateCallback = Callable[[bool], None]


class Subscription:
    """Handle for one consumer of a ConnectivityStateHolder."""

    def __init__(self, holder: "ConnectivityStateHolder", subscription_id: int, callback: StateCallback):
        self._holder = holder
        self._id = subscription_id
        self._callback = callback
        self._active = True
        self._lock = threading.Lock()
        # Held while this consumer's callback runs; keeps its states in order
        self._delivery_lock = threading.RLock()

    @property
    def active(self) -> bool:
        with self._lock:
            return self._active

    def cancel(self):
        """Detach from the holder. Safe to call more than once, from any thread."""
        if self._deactivate():
            self._holder._unsubscribe(self._id)

    def _deactivate(self) -> bool:
        with self._lock:
            if not self._active:
                return False
            self._active = False
            return True

    def _deliver(self, state: bool):
        with self._delivery_lock:
            if not self.active:
                return
            try:
                self._callback(state)
            except Exception as e:
                logger.error(f"[ConnectivityStateHolder] Error in subscriber {self._id} callback: {e}")

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.cancel()


class ConnectivityStateHolder:
    """
    Multicasts a ConnectivityObserver's stream with replay and delayed teardown.

    Callbacks run on the holder's pump thread (live updates) or on the
    subscribing thread (initial replay), never under the holder's lock, so a
    callback may attach or detach consumers from any thread. Every subscriber
    sees the same sequence of states, with the replay first.
    """

    def __init__(
        self,
        observer: ConnectivityObserver,
        grace_period: float = GRACE_PERIOD,
        initial_state: bool = INITIAL_STATE,
    ):
        """
        Initialize the holder. The observer is not subscribed until the first consumer attaches.

        Args:
            observer: Upstream producer of connectivity states
            grace_period: Seconds to keep the upstream after the last subscriber leaves
            initial_state: State replayed before anything has been observed
        """
        self._observer = observer
        self._grace_period = grace_period
        self._value = initial_state

        # Guards state only; no user callback runs while it is held
        self._lock = threading.RLock()
        # Serializes publishing across pump threads (old and restarted upstreams)
        self._publish_lock = threading.Lock()
        self._subscribers: Dict[int, Subscription] = {}
        self._ids = itertools.count(1)

        self._upstream: Optional[ConnectivityStream] = None
        self._pump_thread: Optional[threading.Thread] = None
        self._stop_timer: Optional[threading.Timer] = None

    @property
    def value(self) -> bool:
        """Latest known connectivity state."""
        with self._lock:
            return self._value

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    @property
    def is_active(self) -> bool:
        """Whether the upstream stream is open (including during the grace period)."""
        with self._lock:
            return self._upstream is not None

    def subscribe(self, callback: StateCallback) -> Subscription:
        """
        Attach a consumer.

        The callback is invoked with the cached state before this method
        returns, then with every subsequent change.

        Args:
            callback: Called with each connectivity state

        Returns:
            Subscription whose cancel() detaches the consumer
        """
        with self._lock:
            self._cancel_stop_timer()

            subscription = Subscription(self, next(self._ids), callback)
            self._subscribers[subscription._id] = subscription

            if self._upstream is None:
                try:
                    self._start_upstream()
                except Exception:
                    del self._subscribers[subscription._id]
                    raise

            replay = self._value
            # Taken before the pump can see this subscriber, so the replay comes first
            subscription._delivery_lock.acquire()

        try:
            logger.debug(
                f"[ConnectivityStateHolder] Subscriber {subscription._id} attached, replaying {replay}"
            )
            subscription._deliver(replay)
        finally:
            subscription._delivery_lock.release()

        return subscription

    def close(self):
        """Detach every subscriber and release the upstream immediately."""
        with self._lock:
            self._drop_subscribers()
            self._cancel_stop_timer()
            self._stop_upstream()

    def _unsubscribe(self, subscription_id: int):
        with self._lock:
            if self._subscribers.pop(subscription_id, None) is None:
                return

            logger.debug(
                f"[ConnectivityStateHolder] Subscriber {subscription_id} detached "
                f"({len(self._subscribers)} active)"
            )

            if not self._subscribers and self._upstream is not None:
                self._schedule_stop()

    def _drop_subscribers(self):
        """End every subscription. Caller holds the lock."""
        for subscription in self._subscribers.values():
            subscription._deactivate()
        self._subscribers.clear()

    def _start_upstream(self):
        """Open the upstream stream and its pump thread. Caller holds the lock."""
        stream = self._observer.subscribe()
        self._upstream = stream
        self._pump_thread = threading.Thread(
            target=self._pump,
            args=(stream,),
            daemon=True,
            name="ConnectivityStateHolder",
        )
        self._pump_thread.start()
        logger.info("[ConnectivityStateHolder] Upstream started")

    def _stop_upstream(self):
        """Close the upstream stream. Caller holds the lock."""
        stream = self._upstream
        if stream is None:
            return

        self._upstream = None
        self._pump_thread = None
        stream.close()
        logger.info("[ConnectivityStateHolder] Upstream stopped")

    def _schedule_stop(self):
        """Start the grace-period timer. Caller holds the lock."""
        self._cancel_stop_timer()
        timer = threading.Timer(self._grace_period, self._on_grace_period_elapsed)
        timer.daemon = True
        timer.name = "ConnectivityStateHolder-GracePeriod"
        self._stop_timer = timer
        timer.start()
        logger.debug(f"[ConnectivityStateHolder] No subscribers, stopping in {self._grace_period}s")

    def _cancel_stop_timer(self):
        if self._stop_timer is not None:
            self._stop_timer.cancel()
            self._stop_timer = None
            logger.debug("[ConnectivityStateHolder] Pending stop cancelled")

    def _on_grace_period_elapsed(self):
        with self._lock:
            # A subscriber may have arrived after the timer fired but before we got the lock
            if self._stop_timer is not threading.current_thread() or self._subscribers:
                return
            self._stop_timer = None
            self._stop_upstream()

    def _pump(self, stream: ConnectivityStream):
        """Forward upstream states to subscribers until the stream closes."""
        try:
            for state in stream:
                self._publish(stream, state)
        except Exception as e:
            logger.error(f"[ConnectivityStateHolder] Error in pump loop: {e}")
        finally:
            with self._lock:
                if self._upstream is stream:
                    # Closed from outside (observer shutdown): nothing will feed these subscribers
                    logger.warning(
                        f"[ConnectivityStateHolder] Upstream closed externally, "
                        f"ending {len(self._subscribers)} subscription(s)"
                    )
                    self._upstream = None
                    self._pump_thread = None
                    self._cancel_stop_timer()
                    self._drop_subscribers()

    def _publish(self, stream: ConnectivityStream, state: bool):
        with self._publish_lock:
            with self._lock:
                if stream is not self._upstream:
                    return
                if state == self._value:
                    return

                self._value = state
                recipients: List[Subscription] = list(self._subscribers.values())
                logger.info(f"[ConnectivityStateHolder] Connectivity {'UP' if state else 'DOWN'}")

            for subscription in recipients:
                subscription._deliver(state)
