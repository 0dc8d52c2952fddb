"""
trello://info resource - Server information and configuration status.
"""

from mcp.types import Resource

from config import Credentials
from trello_api import __version__


RESOURCE = Resource(
    uri="trello://info",
    name="Trello Server Info",
    mimeType="text/plain",
    description="Version and configuration status of this Trello MCP server"
)


def read(credentials: Credentials) -> str:
    """Read the info resource."""
    key_status = f"set ({credentials.masked_key()})" if credentials.api_key else "missing"
    token_status = "set" if credentials.token else "missing"
    return f"""Trello MCP Server v{__version__}

Model Context Protocol server for Trello boards, lists, cards and attachments.

API key: {key_status}
Token: {token_status}
Default board: {credentials.default_board_id or "not set"}

Set TRELLO_API_KEY and TRELLO_TOKEN (and optionally TRELLO_BOARD_ID) in the
environment or in a .env.local / .env file.
"""
