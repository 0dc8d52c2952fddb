"""
Attachment tools - list a card's attachments and fetch attachment content.
"""

import json

from mcp.types import Tool, TextContent, ImageContent

from trello_api.attachments import build_attachment_payload
from trello_api.client import TrelloClient
from trello_api.errors import TrelloError, ValidationError
from utils import ToolError, json_result, optional_bool, require_str


LIST_TOOL = Tool(
    name="get_card_attachments",
    description="List attachments on a Trello card, returned as JSON.",
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

CONTENT_TOOL = Tool(
    name="get_attachment_content",
    description=(
        "Download an attachment from a Trello card and return it base64-encoded "
        "with its MIME type, size and file name. Image attachments are also "
        "returned as image content."
    ),
    inputSchema={
        "type": "object",
        "properties": {
            "cardId": {
                "type": "string",
                "description": "The Trello card ID"
            },
            "attachmentId": {
                "type": "string",
                "description": "The attachment ID (see get_card_attachments)"
            },
            "includeDataUri": {
                "type": "boolean",
                "description": "Also return a data: URI (default: false)",
                "default": False
            },
            "includeMetadata": {
                "type": "boolean",
                "description": "Also return the raw attachment object (default: false)",
                "default": False
            }
        },
        "required": ["cardId", "attachmentId"],
        "additionalProperties": False
    }
)

TOOLS = [LIST_TOOL, CONTENT_TOOL]


async def handle_list(client: TrelloClient, arguments: dict) -> list[TextContent]:
    """Handle get_card_attachments tool call."""
    card_id = require_str(arguments, "cardId")

    try:
        attachments = await client.request(f"/cards/{card_id}/attachments")
    except TrelloError as e:
        raise ToolError(f"Error fetching attachments: {e}") from e

    return json_result(attachments)


async def handle_content(client: TrelloClient, arguments: dict) -> list[TextContent | ImageContent]:
    """Handle get_attachment_content tool call."""
    card_id = require_str(arguments, "cardId")
    attachment_id = require_str(arguments, "attachmentId")
    include_data_uri = optional_bool(arguments, "includeDataUri")
    include_metadata = optional_bool(arguments, "includeMetadata")

    try:
        metadata = await client.request(f"/cards/{card_id}/attachments/{attachment_id}")
        url = metadata.get("url")
        if not url:
            raise ValidationError(f"Attachment {attachment_id} has no downloadable URL.")
        response = await client.download_attachment(url)
    except TrelloError as e:
        raise ToolError(f"Error fetching attachment content: {e}") from e

    payload = build_attachment_payload(
        metadata, response,
        include_data_uri=include_data_uri,
        include_metadata=include_metadata,
    )

    result = [TextContent(type="text", text=json.dumps(payload, indent=2, ensure_ascii=False))]
    if payload["mimeType"].startswith("image/"):
        result.append(ImageContent(
            type="image",
            data=payload["base64"],
            mimeType=payload["mimeType"]
        ))
    return result
