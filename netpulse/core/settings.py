"""Connectivity settings."""
from dataclasses import dataclass, fields, replace
from typing import Optional

from netpulse.core import constants


@dataclass(frozen=True)
class ConnectivitySettings:
    """
    Tunables for the probe, the observer, the state holder and the polling source.

    Defaults come from ``netpulse.core.constants`` (environment / .env).
    """

    probe_url: str = constants.PROBE_URL
    probe_connect_timeout: float = constants.PROBE_CONNECT_TIMEOUT
    probe_read_timeout: float = constants.PROBE_READ_TIMEOUT
    probe_workers: int = constants.PROBE_WORKERS
    drop_stale_probes: bool = constants.DROP_STALE_PROBES
    grace_period: float = constants.GRACE_PERIOD
    poll_interval: float = constants.POLL_INTERVAL
    validation_host: str = constants.VALIDATION_HOST
    validation_port: int = constants.VALIDATION_PORT
    validation_timeout: float = constants.VALIDATION_TIMEOUT
    log_level: str = constants.LOG_LEVEL
    log_file: Optional[str] = constants.LOG_FILE

    def __post_init__(self):
        if self.probe_connect_timeout <= 0:
            raise ValueError(f"probe_connect_timeout must be positive, got {self.probe_connect_timeout}")
        if self.probe_workers < 1:
            raise ValueError(f"probe_workers must be at least 1, got {self.probe_workers}")
        if self.grace_period < 0:
            raise ValueError(f"grace_period must not be negative, got {self.grace_period}")
        if self.poll_interval <= 0:
            raise ValueError(f"poll_interval must be positive, got {self.poll_interval}")

    def with_overrides(self, **overrides) -> "ConnectivitySettings":
        """
        Return a copy with the given fields replaced.

        Overrides whose value is None are ignored, so unset CLI options can be
        passed straight through.

        Raises:
            TypeError: If an override names an unknown field
        """
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise TypeError(f"Unknown settings: {', '.join(sorted(unknown))}")
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes) if changes else self
