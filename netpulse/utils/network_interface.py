"""Default network interface detection - Cross-platform support."""
import platform
import socket
import subprocess
from typing import Optional

import psutil
from loguru import logger

# Constants
ROUTE_COMMAND_TIMEOUT = 5  # seconds
TUN_INTERFACE_KEYWORDS = {"tun", "tap", "utun", "wg", "sing"}
LOOPBACK_PREFIXES = ("lo", "Loopback")


class DefaultNetworkDetector:
    """Finds the interface currently carrying general traffic."""

    def get_default_interface(self) -> Optional[str]:
        """
        Get the name of the default network interface.

        On Linux the interface holding the default route is used; elsewhere,
        or when no route is found, the first interface that is up and has a
        non-loopback IPv4 address.

        Returns:
            Interface name, or None if the host has no usable network
        """
        if platform.system() == "Linux":
            interface = self._get_default_route_interface_linux()
            if interface:
                return interface
        return self._get_first_active_interface()

    def _get_default_route_interface_linux(self) -> Optional[str]:
        """Get the default route's interface using 'ip route'."""
        try:
            result = subprocess.run(
                ["ip", "route", "show", "default"],
                capture_output=True,
                text=True,
                timeout=ROUTE_COMMAND_TIMEOUT,
                check=False,
            )
        except subprocess.TimeoutExpired:
            logger.warning("[DefaultNetworkDetector] Timeout while getting route table")
            return None
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug(f"[DefaultNetworkDetector] 'ip route' unavailable: {e}")
            return None

        if result.returncode != 0:
            logger.debug(f"[DefaultNetworkDetector] 'ip route' failed: {result.stderr.strip()}")
            return None

        # Parse output like: "default via 192.168.1.1 dev wlp3s0 proto dhcp metric 600"
        for line in result.stdout.strip().split("\n"):
            parts = line.split()
            if not parts or parts[0] != "default":
                continue
            for i, part in enumerate(parts):
                if part == "dev" and i + 1 < len(parts):
                    interface = parts[i + 1]
                    if self._is_tunnel(interface):
                        logger.debug(f"[DefaultNetworkDetector] Ignored tunnel interface: {interface}")
                        break
                    return interface
        return None

    def _get_first_active_interface(self) -> Optional[str]:
        """Scan interfaces with psutil for one that is up with an IPv4 address."""
        try:
            stats = psutil.net_if_stats()
            addresses = psutil.net_if_addrs()
        except Exception as e:
            logger.error(f"[DefaultNetworkDetector] Error reading interfaces: {e}")
            return None

        for name in sorted(addresses):
            if name.startswith(LOOPBACK_PREFIXES) or self._is_tunnel(name):
                continue
            if name not in stats or not stats[name].isup:
                continue
            for addr in addresses[name]:
                if addr.family == socket.AF_INET and not addr.address.startswith("127."):
                    return name
        return None

    @staticmethod
    def _is_tunnel(interface: str) -> bool:
        lowered = interface.lower()
        return any(lowered.startswith(keyword) for keyword in TUN_INTERFACE_KEYWORDS)
