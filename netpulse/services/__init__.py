"""
Services subpackage - Connectivity detection.

- ReachabilityProbe: HTTP check of end-to-end internet access
- ConnectivityStream: Closeable channel of connectivity states
- ConnectivityObserver: Network events + probe -> stream of states
- ConnectivityStateHolder: Shared, replayable state with delayed teardown
"""

from netpulse.services.connectivity_observer import ConnectivityObserver
from netpulse.services.connectivity_state_holder import ConnectivityStateHolder, Subscription
from netpulse.services.connectivity_stream import ConnectivityStream
from netpulse.services.reachability_probe import ReachabilityProbe

__all__ = [
    "ConnectivityObserver",
    "ConnectivityStateHolder",
    "ConnectivityStream",
    "ReachabilityProbe",
    "Subscription",
]
