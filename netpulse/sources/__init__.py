"""
Network signal sources.

- CallbackSignalSource: events pushed by the embedding application
- PollingSignalSource: events derived from polling the default interface
"""

from netpulse.sources.callback_source import CallbackSignalSource
from netpulse.sources.polling_source import PollingSignalSource

__all__ = ["CallbackSignalSource", "PollingSignalSource"]
