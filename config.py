"""
Configuration for the Trello MCP and HTTP servers.
Credentials are read once from the environment (optionally seeded from
.env.local or .env) and passed explicitly to the Trello client.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from trello_api.errors import MissingCredentials


DEFAULT_PORT = 3001

# Checked in order; the first file found wins
ENV_FILES = (".env.local", ".env")

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


@dataclass(frozen=True)
class Credentials:
    api_key: str = ""
    token: str = ""
    default_board_id: str | None = None

    def is_complete(self) -> bool:
        return bool(self.api_key) and bool(self.token)

    def masked_key(self) -> str:
        """Key prefix safe to show in logs and status output."""
        if not self.api_key:
            return "(not set)"
        return self.api_key[:8] + "..."


def ensure_credentials(credentials: Credentials) -> None:
    """Raise MissingCredentials unless both the API key and token are set."""
    if not credentials.is_complete():
        raise MissingCredentials()


def _load_env_file(cwd: Path | None = None) -> Path | None:
    """Load the first env file found in the working directory."""
    base = cwd or Path.cwd()
    for name in ENV_FILES:
        path = base / name
        if path.is_file():
            load_dotenv(path)
            return path
    return None


def load_credentials(cwd: Path | None = None) -> Credentials:
    """
    Build Credentials from TRELLO_API_KEY, TRELLO_TOKEN and TRELLO_BOARD_ID.

    Values already present in the process environment take precedence over
    the env file. Missing values are not an error here; callers decide
    whether to fail at startup or per request.
    """
    env_file = _load_env_file(cwd)
    if env_file:
        logging.getLogger(__name__).debug("Loaded environment from %s", env_file)

    return Credentials(
        api_key=os.getenv("TRELLO_API_KEY", "").strip(),
        token=os.getenv("TRELLO_TOKEN", "").strip(),
        default_board_id=os.getenv("TRELLO_BOARD_ID", "").strip() or None,
    )


def get_port() -> int:
    """HTTP port from PORT, defaulting to 3001."""
    raw = os.getenv("PORT", "").strip()
    if not raw:
        return DEFAULT_PORT
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"PORT must be an integer, got {raw!r}")


def configure_logging() -> None:
    """Send log output to stderr; stdout is reserved for the MCP transport."""
    if os.getenv("MCP_DEBUG", "0").lower() in {"1", "true", "yes"}:
        level = logging.DEBUG
    else:
        level = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    # Request lines from httpx would otherwise include the key/token query string
    logging.getLogger("httpx").setLevel(logging.WARNING)
