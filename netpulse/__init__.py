"""netpulse - Internet connectivity detection from network signals and an active probe."""

__version__ = "0.1.0"
__description__ = "Continuously-updated internet connectivity status"

from netpulse.core.settings import ConnectivitySettings
from netpulse.core.types import NetworkCapabilities, NetworkEvent, NetworkEventType
from netpulse.services.connectivity_observer import ConnectivityObserver
from netpulse.services.connectivity_state_holder import ConnectivityStateHolder, Subscription
from netpulse.services.connectivity_stream import ConnectivityStream
from netpulse.services.reachability_probe import ReachabilityProbe
from netpulse.sources.callback_source import CallbackSignalSource
from netpulse.sources.polling_source import PollingSignalSource

__all__ = [
    "CallbackSignalSource",
    "ConnectivityObserver",
    "ConnectivitySettings",
    "ConnectivityStateHolder",
    "ConnectivityStream",
    "NetworkCapabilities",
    "NetworkEvent",
    "NetworkEventType",
    "PollingSignalSource",
    "ReachabilityProbe",
    "Subscription",
    "__version__",
]
