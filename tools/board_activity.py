"""
get_board_activity tool - Recent actions on a board.
"""

from datetime import datetime

from mcp.types import Tool, TextContent

from trello_api.client import TrelloClient
from trello_api.errors import TrelloError, ValidationError
from utils import ToolError, resolve_board_id, text_result

DEFAULT_LIMIT = 10
MAX_LIMIT = 50

TOOL = Tool(
    name="get_board_activity",
    description="Get recent activity on a Trello board. If boardId is omitted, uses TRELLO_BOARD_ID.",
    inputSchema={
        "type": "object",
        "properties": {
            "boardId": {
                "type": "string",
                "description": "Board ID (optional, uses TRELLO_BOARD_ID environment variable if not provided)"
            },
            "limit": {
                "type": "number",
                "description": f"Number of activities to return (default: {DEFAULT_LIMIT}, max: {MAX_LIMIT})",
                "default": DEFAULT_LIMIT
            }
        },
        "additionalProperties": False
    }
)


def _clamp_limit(value) -> int:
    if value is None:
        return DEFAULT_LIMIT
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 1:
        raise ValidationError("limit must be a positive number.")
    return min(int(value), MAX_LIMIT)


def _format_action(action: dict) -> str:
    date = action.get("date", "")
    try:
        date = datetime.fromisoformat(date.replace("Z", "+00:00")).strftime("%Y-%m-%d %H:%M")
    except (ValueError, AttributeError):
        pass
    member = (action.get("memberCreator") or {}).get("fullName", "Unknown")
    data = action.get("data") or {}
    target = ""
    for key in ("card", "list", "board"):
        if (data.get(key) or {}).get("name"):
            target = data[key]["name"]
            break
    return f"- {date} - {member} {action.get('type', 'unknown')} {target}".rstrip()


async def handle(client: TrelloClient, arguments: dict) -> list[TextContent]:
    """Handle get_board_activity tool call."""
    board_id = resolve_board_id(arguments, client.default_board_id)
    limit = _clamp_limit(arguments.get("limit"))

    try:
        actions = await client.request(f"/boards/{board_id}/actions", query={"limit": limit})
    except TrelloError as e:
        raise ToolError(f"Error fetching board activity: {e}") from e

    if not actions:
        return text_result("No recent activity found on this board.")

    lines = [f"Recent board activity (last {len(actions)} actions):", ""]
    lines.extend(_format_action(action) for action in actions)
    return text_result("\n".join(lines))
