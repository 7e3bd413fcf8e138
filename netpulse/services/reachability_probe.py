"""Reachability Probe - Application-level HTTP check of internet access."""

from typing import Callable, Optional

import requests
from loguru import logger

from netpulse.core.constants import PROBE_CONNECT_TIMEOUT, PROBE_READ_TIMEOUT, PROBE_URL


class ReachabilityProbe:
    """
    Confirms end-to-end internet access with a single HTTP GET.

    The probe succeeds only if a connection is established and the server
    answers with status 200. Every failure (timeout, refused connection, TLS
    error, non-200 status) is reported as False, never raised.
    """

    def __init__(
        self,
        url: str = PROBE_URL,
        connect_timeout: float = PROBE_CONNECT_TIMEOUT,
        read_timeout: Optional[float] = PROBE_READ_TIMEOUT,
        session_factory: Callable[[], requests.Session] = requests.Session,
    ):
        """
        Initialize the probe.

        Args:
            url: Probe target
            connect_timeout: Seconds allowed to establish the connection
            read_timeout: Seconds allowed between bytes of the response (None waits forever)
            session_factory: Creates the short-lived session used by one check
        """
        self._url = url
        self._connect_timeout = connect_timeout
        self._read_timeout = read_timeout
        self._session_factory = session_factory

    @property
    def url(self) -> str:
        return self._url

    def check(self) -> bool:
        """
        Run one probe. Blocks for up to connect_timeout + read_timeout seconds.

        Returns:
            True if the target answered HTTP 200, False otherwise
        """
        try:
            # Session and response are closed on every exit path
            with self._session_factory() as session:
                with session.get(
                    self._url,
                    timeout=(self._connect_timeout, self._read_timeout),
                    stream=True,
                ) as response:
                    status = response.status_code
        except requests.exceptions.Timeout as e:
            logger.debug(f"[ReachabilityProbe] Timed out reaching {self._url}: {e}")
            return False
        except Exception as e:
            logger.debug(f"[ReachabilityProbe] Probe to {self._url} failed: {e}")
            return False

        if status != requests.codes.ok:
            logger.debug(f"[ReachabilityProbe] {self._url} returned HTTP {status}")
            return False

        logger.debug(f"[ReachabilityProbe] {self._url} reachable")
        return True
