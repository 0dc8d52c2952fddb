"""
get_cards tool - Cards in a Trello list.
"""

from mcp.types import Tool, TextContent

from trello_api.client import TrelloClient
from trello_api.errors import TrelloError
from utils import ToolError, require_str, text_result


TOOL = Tool(
    name="get_cards",
    description="Get all cards in a Trello list.",
    inputSchema={
        "type": "object",
        "properties": {
            "listId": {
                "type": "string",
                "description": "List ID to get cards from"
            }
        },
        "required": ["listId"],
        "additionalProperties": False
    }
)


async def handle(client: TrelloClient, arguments: dict) -> list[TextContent]:
    """Handle get_cards tool call."""
    list_id = require_str(arguments, "listId")

    try:
        cards = await client.request(f"/lists/{list_id}/cards", query={"fields": "name,desc,url,idList,due"})
    except TrelloError as e:
        raise ToolError(f"Error fetching cards: {e}") from e

    if not cards:
        return text_result("No cards found in this list.")

    lines = [f"Found {len(cards)} cards in list:", ""]
    for card in cards:
        due_str = f" (due: {card['due'][:10]})" if card.get("due") else ""
        lines.append(f"- {card.get('name', 'Untitled')}{due_str} (ID: {card['id']})")
        lines.append(f"  Description: {card.get('desc') or 'No description'}")
        lines.append(f"  URL: {card.get('url', 'N/A')}")

    return text_result("\n".join(lines))
