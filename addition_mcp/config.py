"""
Configuration

All settings come from the process environment (optionally seeded from a
.env file by the entrypoint). Values are read when requested, never cached,
so credentials added or removed at runtime are picked up on the next call.
"""

import logging
import os
import sys
from dataclasses import dataclass
from typing import Mapping, Optional

from .base import ConfigurationError

logger = logging.getLogger(__name__)

SERVER_NAME = "Number Addition"
SERVER_VERSION = "1.0.0"
SERVER_DESCRIPTION = (
    "This MCP server provides a tool for adding numbers. It can be used to add numbers "
    "in an expression, or to provide help on how to use the 'add' tool."
)

HIGHSPOT_SEARCH_URL = "https://api-su2.highspot.com/v1.0/search/items"
DEFAULT_HIGHSPOT_TIMEOUT = 60.0

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class HighspotCredentials:
    """HTTP Basic Auth credentials for the Highspot API."""
    username: str
    password: str

    def __repr__(self) -> str:
        return f"HighspotCredentials(username={self.username!r}, password='***')"


@dataclass(frozen=True)
class ServerSettings:
    """Channel adapter settings."""
    transport: str = "stdio"
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"


def _environ(environ: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    return os.environ if environ is None else environ


def load_highspot_credentials(environ: Optional[Mapping[str, str]] = None) -> HighspotCredentials:
    """
    Resolve Highspot credentials.
    Raises ConfigurationError naming every missing variable.
    """
    env = _environ(environ)
    username = env.get("HIGHSPOT_USERNAME")
    password = env.get("HIGHSPOT_PASSWORD")

    missing = [
        name for name, value in (("HIGHSPOT_USERNAME", username), ("HIGHSPOT_PASSWORD", password))
        if not value
    ]
    if missing:
        raise ConfigurationError(
            f"Highspot credentials are not configured. Set {' and '.join(missing)} in the environment."
        )

    return HighspotCredentials(username=username, password=password)


def load_highspot_timeout(environ: Optional[Mapping[str, str]] = None) -> float:
    """HTTP timeout in seconds for Highspot requests."""
    raw = _environ(environ).get("HIGHSPOT_TIMEOUT")
    if not raw:
        return DEFAULT_HIGHSPOT_TIMEOUT
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid HIGHSPOT_TIMEOUT={raw!r}")
        return DEFAULT_HIGHSPOT_TIMEOUT


def load_server_settings(environ: Optional[Mapping[str, str]] = None) -> ServerSettings:
    """Read adapter settings (MCP_TRANSPORT, MCP_HOST, MCP_PORT, LOG_LEVEL)."""
    env = _environ(environ)
    raw_port = env.get("MCP_PORT", "8000")
    try:
        port = int(raw_port)
    except ValueError:
        raise ConfigurationError(f"MCP_PORT must be an integer, got {raw_port!r}")

    return ServerSettings(
        transport=env.get("MCP_TRANSPORT", "stdio"),
        host=env.get("MCP_HOST", "127.0.0.1"),
        port=port,
        log_level=env.get("LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    """Log to stderr; stdout is reserved for the stdio channel."""
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)
