"""Shared fixtures for netpulse tests."""
from unittest.mock import Mock

import pytest

from netpulse.sources.callback_source import CallbackSignalSource
from tests.helpers import GatedProbe


@pytest.fixture
def source():
    return CallbackSignalSource()


@pytest.fixture
def probe():
    probe = Mock()
    probe.check.return_value = True
    return probe


@pytest.fixture
def gated_probe():
    probe = GatedProbe()
    yield probe
    # Never leave a worker blocked after a test
    probe.gate.set()
