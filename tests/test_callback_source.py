"""Unit tests for CallbackSignalSource."""
from unittest.mock import Mock

from netpulse.core.types import NetworkEvent


class TestCallbackSignalSource:
    def test_emit_reaches_registered_listeners(self, source):
        first, second = Mock(), Mock()
        source.register(first)
        source.register(second)

        source.notify_available("eth0")

        first.assert_called_once_with(NetworkEvent.available("eth0"))
        second.assert_called_once_with(NetworkEvent.available("eth0"))

    def test_helpers_build_matching_events(self, source):
        listener = Mock()
        source.register(listener)

        source.notify_capabilities_changed(True, "wlan0")
        source.notify_lost("wlan0")
        source.notify_unavailable()

        assert [c.args[0] for c in listener.call_args_list] == [
            NetworkEvent.capabilities_changed(True, "wlan0"),
            NetworkEvent.lost("wlan0"),
            NetworkEvent.unavailable(),
        ]

    def test_unregister_stops_delivery(self, source):
        listener = Mock()
        handle = source.register(listener)

        source.unregister(handle)
        source.notify_available()

        listener.assert_not_called()
        assert source.listener_count == 0
        assert source.register_count == 1
        assert source.unregister_count == 1

    def test_unknown_handle_is_ignored(self, source):
        source.unregister(12345)
        assert source.unregister_count == 0

    def test_listener_exception_does_not_stop_delivery(self, source):
        broken = Mock(side_effect=RuntimeError("boom"))
        healthy = Mock()
        source.register(broken)
        source.register(healthy)

        source.notify_lost()

        healthy.assert_called_once_with(NetworkEvent.lost())

    def test_handles_are_unique(self, source):
        assert source.register(Mock()) != source.register(Mock())
