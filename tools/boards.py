"""
get_boards tool - List Trello boards accessible with the configured key/token.
"""

from mcp.types import Tool, TextContent

from trello_api.client import TrelloClient
from trello_api.errors import TrelloError
from utils import ToolError, text_result


TOOL = Tool(
    name="get_boards",
    description="Get all Trello boards accessible to the user.",
    inputSchema={
        "type": "object",
        "properties": {},
        "additionalProperties": False
    }
)


async def handle(client: TrelloClient, arguments: dict) -> list[TextContent]:
    """Handle get_boards tool call."""
    try:
        boards = await client.request("/members/me/boards", query={"fields": "name,url,closed,idOrganization"})
    except TrelloError as e:
        raise ToolError(f"Error fetching boards: {e}") from e

    if not boards:
        return text_result("No accessible boards found.")

    lines = [f"Found {len(boards)} accessible boards:", ""]
    for board in boards:
        closed = " [closed]" if board.get("closed") else ""
        lines.append(f"- {board.get('name', 'Untitled')}{closed} (ID: {board['id']})")
        lines.append(f"  URL: {board.get('url', 'N/A')}")

    return text_result("\n".join(lines))
