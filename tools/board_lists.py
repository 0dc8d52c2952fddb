"""
get_lists tool - Lists on a board (defaults to TRELLO_BOARD_ID).
"""

from mcp.types import Tool, TextContent

from trello_api.client import TrelloClient
from trello_api.errors import TrelloError
from utils import ToolError, resolve_board_id, text_result


TOOL = Tool(
    name="get_lists",
    description="Get all lists in a Trello board. If boardId is omitted, uses TRELLO_BOARD_ID.",
    inputSchema={
        "type": "object",
        "properties": {
            "boardId": {
                "type": "string",
                "description": "Board ID (optional, uses TRELLO_BOARD_ID environment variable if not provided)"
            }
        },
        "additionalProperties": False
    }
)


async def handle(client: TrelloClient, arguments: dict) -> list[TextContent]:
    """Handle get_lists tool call."""
    board_id = resolve_board_id(arguments, client.default_board_id)

    try:
        lists = await client.request(f"/boards/{board_id}/lists", query={"fields": "name,closed,pos"})
    except TrelloError as e:
        raise ToolError(f"Error fetching lists: {e}") from e

    if not lists:
        return text_result(f"No lists found in board {board_id}.")

    lines = [f"Lists in board {board_id}:", ""]
    for lst in lists:
        lines.append(f"- {lst.get('name', 'Untitled')} (ID: {lst['id']})")
        lines.append(f"  Position: {lst.get('pos', 'N/A')}")

    return text_result("\n".join(lines))
