"""
create_card tool - Create a card in a list.
"""

from mcp.types import Tool, TextContent

from trello_api.client import TrelloClient
from trello_api.errors import TrelloError
from utils import ToolError, optional_str, require_str, text_result, validate_position

TOOL = Tool(
    name="create_card",
    description="Create a new card in a Trello list.",
    inputSchema={
        "type": "object",
        "properties": {
            "listId": {
                "type": "string",
                "description": "List ID to create the card in"
            },
            "idList": {
                "type": "string",
                "description": "Alias of listId"
            },
            "name": {
                "type": "string",
                "description": "Card title"
            },
            "desc": {
                "type": "string",
                "description": "Card description (optional, Markdown supported)"
            },
            "pos": {
                "type": ["string", "number"],
                "description": "Position in list: 'top', 'bottom', or a positive number (optional)"
            }
        },
        "required": ["name"],
        "additionalProperties": False
    }
)


async def handle(client: TrelloClient, arguments: dict) -> list[TextContent]:
    """Handle create_card tool call."""
    list_id = require_str(arguments, "listId", "idList")
    name = require_str(arguments, "name")
    desc = optional_str(arguments, "desc")
    pos = validate_position(arguments.get("pos"))

    # None values are dropped by the client, so desc/pos only go out when given
    create_params = {
        "idList": list_id,
        "name": name,
        "desc": desc,
        "pos": pos,
    }

    try:
        card = await client.request("/cards", method="POST", query=create_params)
    except TrelloError as e:
        raise ToolError(f"Error creating card: {e}") from e

    return text_result(
        f"Card created: {card.get('name', name)}\n"
        f"ID: {card.get('id', 'N/A')}\n"
        f"URL: {card.get('url') or card.get('shortUrl', 'N/A')}"
    )
