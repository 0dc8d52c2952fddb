"""
Trello MCP Tools - Tool definitions and dispatcher.
"""

import logging

from mcp.types import Tool, TextContent, ImageContent

from tools import (
    boards, board_lists, board_activity, cards_list, card_detail,
    card_create, card_update, card_attachments,
)
from trello_api.client import TrelloClient
from trello_api.errors import ValidationError
from utils import ToolError

logger = logging.getLogger(__name__)


# Collect all tools
TOOLS: list[Tool] = [
    boards.TOOL,
    board_lists.TOOL,
    cards_list.TOOL,
    card_detail.TOOL,
    *card_attachments.TOOLS,
    card_create.TOOL,
    *card_update.TOOLS,
    board_activity.TOOL,
]

# Map tool names to handlers
_HANDLERS = {
    "get_boards": boards.handle,
    "get_lists": board_lists.handle,
    "get_cards": cards_list.handle,
    "get_card": card_detail.handle,
    "get_card_attachments": card_attachments.handle_list,
    "get_attachment_content": card_attachments.handle_content,
    "create_card": card_create.handle,
    "update_card": card_update.handle_update,
    "move_card": card_update.handle_move,
    "archive_card": card_update.handle_archive,
    "get_board_activity": board_activity.handle,
}

# camelCase names used by earlier clients
ALIASES = {
    "listBoards": "get_boards",
    "getBoardLists": "get_lists",
    "getListCards": "get_cards",
    "getCard": "get_card",
    "getCardAttachments": "get_card_attachments",
    "getAttachmentContent": "get_attachment_content",
    "createCard": "create_card",
}


async def call_tool(
    client: TrelloClient, name: str, arguments: dict | None
) -> list[TextContent | ImageContent]:
    """Dispatch a tool call to the appropriate handler."""
    canonical = ALIASES.get(name, name)
    handler = _HANDLERS.get(canonical)
    if handler is None:
        raise ValueError(f"Unknown tool: {name}")

    logger.debug("Tool call %s", canonical)
    try:
        return await handler(client, arguments or {})
    except ValidationError as e:
        raise ToolError(f"Invalid arguments for {canonical}: {e}") from e
