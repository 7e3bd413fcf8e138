"""Core types and enums."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class NetworkEventType(Enum):
    """Lifecycle events reported for the default network."""

    AVAILABLE = "available"
    CAPABILITIES_CHANGED = "capabilities_changed"
    LOST = "lost"
    UNAVAILABLE = "unavailable"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class NetworkCapabilities:
    """Capabilities reported alongside a CAPABILITIES_CHANGED event."""

    # Platform has performed its own coarse reachability check
    validated: bool = False


@dataclass(frozen=True)
class NetworkEvent:
    """
    A single event delivered by a network signal source.

    Only CAPABILITIES_CHANGED events carry capabilities. ``network`` is an
    optional identifier (interface name) used for logging.
    """

    type: NetworkEventType
    network: Optional[str] = None
    capabilities: Optional[NetworkCapabilities] = None

    @classmethod
    def available(cls, network: Optional[str] = None) -> "NetworkEvent":
        return cls(NetworkEventType.AVAILABLE, network)

    @classmethod
    def capabilities_changed(cls, validated: bool, network: Optional[str] = None) -> "NetworkEvent":
        return cls(NetworkEventType.CAPABILITIES_CHANGED, network, NetworkCapabilities(validated=validated))

    @classmethod
    def lost(cls, network: Optional[str] = None) -> "NetworkEvent":
        return cls(NetworkEventType.LOST, network)

    @classmethod
    def unavailable(cls) -> "NetworkEvent":
        return cls(NetworkEventType.UNAVAILABLE)

    @property
    def validated(self) -> bool:
        """Validated flag, False for events without capabilities."""
        return self.capabilities.validated if self.capabilities else False


@dataclass(frozen=True)
class NetworkSnapshot:
    """Default network as observed by one poll of a polling source."""

    interface: Optional[str] = None
    validated: bool = False

    @property
    def has_network(self) -> bool:
        return self.interface is not None
