"""Unit tests for core types."""
from netpulse.core.types import NetworkCapabilities, NetworkEvent, NetworkEventType, NetworkSnapshot


class TestNetworkEvent:
    def test_factories_set_type(self):
        """Test each factory produces the matching event type."""
        assert NetworkEvent.available("eth0").type == NetworkEventType.AVAILABLE
        assert NetworkEvent.capabilities_changed(True).type == NetworkEventType.CAPABILITIES_CHANGED
        assert NetworkEvent.lost("eth0").type == NetworkEventType.LOST
        assert NetworkEvent.unavailable().type == NetworkEventType.UNAVAILABLE

    def test_only_capabilities_event_carries_capabilities(self):
        """Test capabilities are attached to CAPABILITIES_CHANGED only."""
        event = NetworkEvent.capabilities_changed(True, "wlan0")
        assert event.capabilities == NetworkCapabilities(validated=True)
        assert event.network == "wlan0"
        assert NetworkEvent.available().capabilities is None

    def test_validated_defaults_to_false(self):
        """Test events without capabilities report validated=False."""
        assert NetworkEvent.available().validated is False
        assert NetworkEvent.capabilities_changed(False).validated is False
        assert NetworkEvent.capabilities_changed(True).validated is True

    def test_events_compare_by_value(self):
        assert NetworkEvent.lost("eth0") == NetworkEvent.lost("eth0")
        assert NetworkEvent.lost("eth0") != NetworkEvent.lost("wlan0")

    def test_event_type_str(self):
        assert str(NetworkEventType.CAPABILITIES_CHANGED) == "capabilities_changed"


class TestNetworkSnapshot:
    def test_has_network(self):
        assert NetworkSnapshot().has_network is False
        assert NetworkSnapshot(interface="eth0").has_network is True
