"""Callback Signal Source - Network events pushed by the host application."""

import itertools
import threading
from typing import Dict, Optional

from loguru import logger

from netpulse.core.protocols import NetworkListener
from netpulse.core.types import NetworkEvent


class CallbackSignalSource:
    """
    Signal source fed by the embedding application.

    Useful when the platform already notifies the application about network
    changes (NetworkManager D-Bus signals, a GUI toolkit's network monitor...).
    Listeners are invoked synchronously on the thread calling emit(), which is
    therefore the delivery context.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._listeners: Dict[int, NetworkListener] = {}
        self._ids = itertools.count(1)
        self.register_count = 0
        self.unregister_count = 0

    @property
    def listener_count(self) -> int:
        with self._lock:
            return len(self._listeners)

    def register(self, listener: NetworkListener) -> int:
        with self._lock:
            handle = next(self._ids)
            self._listeners[handle] = listener
            self.register_count += 1
        logger.debug(f"[CallbackSignalSource] Registered listener {handle}")
        return handle

    def unregister(self, handle: int):
        with self._lock:
            if self._listeners.pop(handle, None) is None:
                logger.warning(f"[CallbackSignalSource] Unknown listener handle {handle}")
                return
            self.unregister_count += 1
        logger.debug(f"[CallbackSignalSource] Unregistered listener {handle}")

    def emit(self, event: NetworkEvent):
        """Deliver an event to every registered listener."""
        with self._lock:
            listeners = list(self._listeners.items())

        for handle, listener in listeners:
            try:
                listener(event)
            except Exception as e:
                logger.error(f"[CallbackSignalSource] Error in listener {handle}: {e}")

    def notify_available(self, network: Optional[str] = None):
        self.emit(NetworkEvent.available(network))

    def notify_capabilities_changed(self, validated: bool, network: Optional[str] = None):
        self.emit(NetworkEvent.capabilities_changed(validated, network))

    def notify_lost(self, network: Optional[str] = None):
        self.emit(NetworkEvent.lost(network))

    def notify_unavailable(self):
        self.emit(NetworkEvent.unavailable())
