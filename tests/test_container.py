"""Unit tests for the DI container."""
from dependency_injector import providers

from netpulse.core.container import ApplicationContainer
from netpulse.core.settings import ConnectivitySettings
from netpulse.services.connectivity_observer import ConnectivityObserver
from netpulse.services.connectivity_state_holder import ConnectivityStateHolder
from netpulse.services.reachability_probe import ReachabilityProbe
from netpulse.sources.polling_source import PollingSignalSource


class TestApplicationContainer:
    def test_wires_the_connectivity_stack(self):
        container = ApplicationContainer()

        holder = container.state_holder()

        assert isinstance(holder, ConnectivityStateHolder)
        assert isinstance(container.connectivity_observer(), ConnectivityObserver)
        assert isinstance(container.probe(), ReachabilityProbe)
        assert isinstance(container.signal_source(), PollingSignalSource)

    def test_services_are_singletons(self):
        container = ApplicationContainer()

        assert container.state_holder() is container.state_holder()
        assert container.connectivity_observer() is container.connectivity_observer()

    def test_settings_override(self):
        container = ApplicationContainer()
        settings = ConnectivitySettings(probe_url="https://probe.test", grace_period=1.5)
        container.settings.override(providers.Object(settings))

        assert container.probe().url == "https://probe.test"
        assert container.state_holder()._grace_period == 1.5

    def test_nothing_registered_until_subscribed(self):
        container = ApplicationContainer()

        assert container.connectivity_observer().is_registered is False
        assert container.signal_source().is_running is False
