"""Protocols for type-safe dependency injection."""
from typing import Any, Callable, Protocol

from netpulse.core.types import NetworkEvent

NetworkListener = Callable[[NetworkEvent], None]


class NetworkSignalSource(Protocol):
    """Platform facility reporting lifecycle events for the default network."""

    def register(self, listener: NetworkListener) -> Any:
        """Start delivering events to listener. Returns a registration handle."""
        ...

    def unregister(self, handle: Any) -> None:
        """Stop delivering events for a handle returned by register()."""
        ...


class ConnectivityProbe(Protocol):
    """Blocking end-to-end reachability check."""

    def check(self) -> bool:
        """Return True if the probe target answered successfully."""
        ...
