"""
Card update tools - rename/describe, move between lists, archive.
"""

from mcp.types import Tool, TextContent

from trello_api.client import TrelloClient
from trello_api.errors import TrelloError, ValidationError
from utils import ToolError, optional_str, require_str, text_result, validate_position


UPDATE_TOOL = Tool(
    name="update_card",
    description="Update an existing Trello card's name and/or description.",
    inputSchema={
        "type": "object",
        "properties": {
            "cardId": {
                "type": "string",
                "description": "Card ID to update"
            },
            "name": {
                "type": "string",
                "description": "New card title (optional)"
            },
            "desc": {
                "type": "string",
                "description": "New card description (optional)"
            }
        },
        "required": ["cardId"],
        "additionalProperties": False
    }
)

MOVE_TOOL = Tool(
    name="move_card",
    description="Move a card to a different list.",
    inputSchema={
        "type": "object",
        "properties": {
            "cardId": {
                "type": "string",
                "description": "Card ID to move"
            },
            "listId": {
                "type": "string",
                "description": "Target list ID"
            },
            "pos": {
                "type": ["string", "number"],
                "description": "Position in target list: 'top', 'bottom', or a positive number (optional)"
            }
        },
        "required": ["cardId", "listId"],
        "additionalProperties": False
    }
)

ARCHIVE_TOOL = Tool(
    name="archive_card",
    description="Archive (close) a Trello card.",
    inputSchema={
        "type": "object",
        "properties": {
            "cardId": {
                "type": "string",
                "description": "Card ID to archive"
            }
        },
        "required": ["cardId"],
        "additionalProperties": False
    }
)

TOOLS = [UPDATE_TOOL, MOVE_TOOL, ARCHIVE_TOOL]


def _summary(verb: str, card: dict, card_id: str) -> str:
    return (
        f"Card {verb}: {card.get('name', 'Untitled')}\n"
        f"ID: {card.get('id', card_id)}\n"
        f"URL: {card.get('url') or card.get('shortUrl', 'N/A')}"
    )


async def handle_update(client: TrelloClient, arguments: dict) -> list[TextContent]:
    """Handle update_card tool call."""
    card_id = require_str(arguments, "cardId")

    update_params = {}
    name = optional_str(arguments, "name")
    if name is not None:
        update_params["name"] = name
    desc = optional_str(arguments, "desc")
    if desc is not None:
        update_params["desc"] = desc

    if not update_params:
        raise ValidationError("No updates provided. Specify name or desc to update.")

    try:
        card = await client.request(f"/cards/{card_id}", method="PUT", query=update_params)
    except TrelloError as e:
        raise ToolError(f"Error updating card: {e}") from e

    return text_result(_summary("updated", card, card_id))


async def handle_move(client: TrelloClient, arguments: dict) -> list[TextContent]:
    """Handle move_card tool call."""
    card_id = require_str(arguments, "cardId")
    list_id = require_str(arguments, "listId")
    pos = validate_position(arguments.get("pos"))

    try:
        card = await client.request(
            f"/cards/{card_id}", method="PUT",
            query={"idList": list_id, "pos": pos}
        )
    except TrelloError as e:
        raise ToolError(f"Error moving card: {e}") from e

    return text_result(_summary("moved", card, card_id) + f"\nList: {card.get('idList', list_id)}")


async def handle_archive(client: TrelloClient, arguments: dict) -> list[TextContent]:
    """Handle archive_card tool call."""
    card_id = require_str(arguments, "cardId")

    try:
        card = await client.request(f"/cards/{card_id}", method="PUT", query={"closed": True})
    except TrelloError as e:
        raise ToolError(f"Error archiving card: {e}") from e

    return text_result(_summary("archived", card, card_id))
