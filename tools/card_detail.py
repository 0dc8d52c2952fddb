"""
get_card tool - Full card object as JSON.
"""

from mcp.types import Tool, TextContent

from trello_api.client import TrelloClient
from trello_api.errors import TrelloError
from utils import ToolError, json_result, require_str


TOOL = Tool(
    name="get_card",
    description="Get a Trello card by ID, returned as JSON.",
    inputSchema={
        "type": "object",
        "properties": {
            "cardId": {
                "type": "string",
                "description": "The Trello card ID"
            }
        },
        "required": ["cardId"],
        "additionalProperties": False
    }
)


async def handle(client: TrelloClient, arguments: dict) -> list[TextContent]:
    """Handle get_card tool call."""
    card_id = require_str(arguments, "cardId")

    try:
        card = await client.request(f"/cards/{card_id}")
    except TrelloError as e:
        raise ToolError(f"Error fetching card: {e}") from e

    return json_result(card)
