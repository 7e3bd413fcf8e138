"""Network utilities."""
import socket

from loguru import logger


def check_tcp_reachability(host: str = "8.8.8.8", port: int = 53, timeout: float = 1.5) -> bool:
    """
    Coarse reachability check by opening a TCP connection.
    Default is Google DNS (8.8.8.8) on port 53 (DNS).

    Args:
        host: Host to connect to
        port: Port to connect to
        timeout: Timeout in seconds

    Returns:
        True if the connection succeeds, False otherwise
    """
    try:
        with socket.create_connection((host, port), timeout=timeout):
            return True
    except OSError as e:
        logger.debug(f"TCP check to {host}:{port} failed: {e}")
        return False
