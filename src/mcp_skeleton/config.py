"""Configuration for the MCP skeleton server.

Values are read from environment variables, optionally loaded from a
``.env`` file next to the process working directory.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

load_dotenv()

# Protocol versions the engine can speak. Clients asking for anything else
# are answered with the default.
SUPPORTED_PROTOCOL_VERSIONS = ("2024-11-05", "2025-03-26", "2025-06-18")
DEFAULT_PROTOCOL_VERSION = "2025-06-18"

DEBUG_ENV_VAR = "MCP_DEBUG"
DEBUG_TRUE_VALUES = ("1", "true")

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"


@dataclass(frozen=True)
class ServerIdentity:
    """Name and version reported to clients in ``serverInfo``."""

    name: str = "skeleton-mcp-server"
    version: str = "1.0.0"


def debug_enabled(environ: Optional[Mapping[str, str]] = None) -> bool:
    """Return True when the debug toggle is switched on.

    Args:
        environ: Mapping to read from. Defaults to ``os.environ``.
    """
    if environ is None:
        environ = os.environ
    return environ.get(DEBUG_ENV_VAR, "").strip().lower() in DEBUG_TRUE_VALUES
