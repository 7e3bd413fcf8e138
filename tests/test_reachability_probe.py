"""Unit tests for ReachabilityProbe."""
from unittest.mock import MagicMock, Mock

import pytest
import requests

from netpulse.services.reachability_probe import ReachabilityProbe


def make_session(status_code=200, error=None):
    """Build a session mock usable as a context manager, like requests.Session."""
    session = MagicMock()
    session.__enter__.return_value = session

    response = MagicMock()
    response.status_code = status_code
    response.__enter__.return_value = response

    if error is not None:
        session.get.side_effect = error
    else:
        session.get.return_value = response

    return session, response


class TestReachabilityProbe:
    def test_http_200_is_reachable(self):
        """Test a 200 answer counts as success."""
        session, _ = make_session(200)
        probe = ReachabilityProbe(url="https://probe.test", session_factory=Mock(return_value=session))

        assert probe.check() is True

    @pytest.mark.parametrize("status_code", [204, 301, 404, 500, 503])
    def test_non_200_is_unreachable(self, status_code):
        """Test only an exact 200 counts as success."""
        session, _ = make_session(status_code)
        probe = ReachabilityProbe(session_factory=Mock(return_value=session))

        assert probe.check() is False

    @pytest.mark.parametrize(
        "error",
        [
            requests.exceptions.ConnectTimeout("connect timed out"),
            requests.exceptions.ReadTimeout("read timed out"),
            requests.exceptions.ConnectionError("refused"),
            requests.exceptions.SSLError("bad certificate"),
            OSError("network unreachable"),
        ],
    )
    def test_transport_errors_are_unreachable(self, error):
        """Test failures are reported as False instead of raised."""
        session, _ = make_session(error=error)
        probe = ReachabilityProbe(session_factory=Mock(return_value=session))

        assert probe.check() is False

    def test_request_uses_connect_and_read_timeouts(self):
        session, _ = make_session(200)
        probe = ReachabilityProbe(
            url="https://probe.test",
            connect_timeout=3.0,
            read_timeout=7.0,
            session_factory=Mock(return_value=session),
        )

        probe.check()

        session.get.assert_called_once_with("https://probe.test", timeout=(3.0, 7.0), stream=True)

    def test_session_and_response_closed_on_success(self):
        session, response = make_session(200)
        probe = ReachabilityProbe(session_factory=Mock(return_value=session))

        probe.check()

        session.__exit__.assert_called_once()
        response.__exit__.assert_called_once()

    def test_session_closed_on_failure(self):
        session, _ = make_session(error=requests.exceptions.ConnectTimeout())
        probe = ReachabilityProbe(session_factory=Mock(return_value=session))

        probe.check()

        session.__exit__.assert_called_once()

    def test_new_session_per_check(self):
        """Test each check owns its own short-lived session."""
        factory = Mock(side_effect=lambda: make_session(200)[0])
        probe = ReachabilityProbe(session_factory=factory)

        probe.check()
        probe.check()

        assert factory.call_count == 2

    def test_default_target(self):
        assert ReachabilityProbe().url == "https://www.google.com"

    def test_default_connect_timeout_is_three_seconds(self):
        session, _ = make_session(200)
        probe = ReachabilityProbe(session_factory=Mock(return_value=session))

        probe.check()

        connect_timeout, _ = session.get.call_args.kwargs["timeout"]
        assert connect_timeout == 3.0
