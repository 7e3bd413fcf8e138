"""Dependency Injection Container for netpulse."""
from dependency_injector import containers, providers

from netpulse.core.settings import ConnectivitySettings
from netpulse.services.connectivity_observer import ConnectivityObserver
from netpulse.services.connectivity_state_holder import ConnectivityStateHolder
from netpulse.services.reachability_probe import ReachabilityProbe
from netpulse.sources.polling_source import PollingSignalSource


class ApplicationContainer(containers.DeclarativeContainer):
    """DI Container wiring the connectivity stack from settings."""

    # Override with providers.Object(...) to inject custom settings
    settings = providers.Singleton(ConnectivitySettings)

    signal_source = providers.Singleton(
        PollingSignalSource,
        poll_interval=settings.provided.poll_interval,
        validation_host=settings.provided.validation_host,
        validation_port=settings.provided.validation_port,
        validation_timeout=settings.provided.validation_timeout,
    )

    probe = providers.Singleton(
        ReachabilityProbe,
        url=settings.provided.probe_url,
        connect_timeout=settings.provided.probe_connect_timeout,
        read_timeout=settings.provided.probe_read_timeout,
    )

    connectivity_observer = providers.Singleton(
        ConnectivityObserver,
        signal_source=signal_source,
        probe=probe,
        probe_workers=settings.provided.probe_workers,
        drop_stale_probes=settings.provided.drop_stale_probes,
    )

    state_holder = providers.Singleton(
        ConnectivityStateHolder,
        observer=connectivity_observer,
        grace_period=settings.provided.grace_period,
    )
