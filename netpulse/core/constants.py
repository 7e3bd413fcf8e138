import os
from pathlib import Path

# Load environment variables from .env file
from dotenv import load_dotenv

# Load .env from project root
_project_root = Path(__file__).parent.parent.parent
load_dotenv(_project_root / ".env")


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# Reachability probe
PROBE_URL = os.getenv("NETPULSE_PROBE_URL", "https://www.google.com")
PROBE_CONNECT_TIMEOUT = float(os.getenv("NETPULSE_PROBE_CONNECT_TIMEOUT", "3.0"))
PROBE_READ_TIMEOUT = float(os.getenv("NETPULSE_PROBE_READ_TIMEOUT", "10.0"))
PROBE_WORKERS = int(os.getenv("NETPULSE_PROBE_WORKERS", "2"))
DROP_STALE_PROBES = _env_bool("NETPULSE_DROP_STALE_PROBES", "false")

# State holder
GRACE_PERIOD = float(os.getenv("NETPULSE_GRACE_PERIOD", "5.0"))
INITIAL_STATE = False

# Polling signal source
POLL_INTERVAL = float(os.getenv("NETPULSE_POLL_INTERVAL", "2.0"))
VALIDATION_HOST = os.getenv("NETPULSE_VALIDATION_HOST", "8.8.8.8")
VALIDATION_PORT = int(os.getenv("NETPULSE_VALIDATION_PORT", "53"))
VALIDATION_TIMEOUT = float(os.getenv("NETPULSE_VALIDATION_TIMEOUT", "1.5"))

# Logging
LOG_LEVEL = os.getenv("NETPULSE_LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("NETPULSE_LOG_FILE") or None
