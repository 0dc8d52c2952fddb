"""
Shared utilities for the Trello MCP tools: argument checks and result helpers.
"""

import json
from typing import Any

from mcp.types import TextContent

from trello_api.errors import ValidationError

# Named positions Trello accepts for cards
NAMED_POSITIONS = ("top", "bottom")


class ToolError(Exception):
    """Raised by a tool handler; the MCP server reports it as an error result."""


def text_result(text: str) -> list[TextContent]:
    return [TextContent(type="text", text=text)]


def json_result(data: Any) -> list[TextContent]:
    return text_result(json.dumps(data, indent=2, ensure_ascii=False))


def require_str(arguments: dict, key: str, *aliases: str) -> str:
    """Return a non-empty string argument, checking aliases in order."""
    for name in (key, *aliases):
        value = arguments.get(name)
        if value is None:
            continue
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(f"{name} must be a non-empty string.")
        return value
    raise ValidationError(f"{key} is required.")


def optional_str(arguments: dict, key: str) -> str | None:
    value = arguments.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{key} must be a string.")
    return value


def optional_bool(arguments: dict, key: str, default: bool = False) -> bool:
    value = arguments.get(key, default)
    if not isinstance(value, bool):
        raise ValidationError(f"{key} must be a boolean.")
    return value


def validate_position(value: Any) -> str | int | float | None:
    """
    Check a card position: 'top', 'bottom', a positive number, or any other
    non-empty string (numeric strings are passed through to Trello).
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValidationError("pos must be 'top', 'bottom', a positive number, or a non-empty string.")
    if isinstance(value, (int, float)):
        if value <= 0:
            raise ValidationError("pos must be a positive number.")
        return value
    if isinstance(value, str) and value.strip():
        return value
    raise ValidationError("pos must be 'top', 'bottom', a positive number, or a non-empty string.")


def resolve_board_id(arguments: dict, default_board_id: str | None) -> str:
    """Board from arguments, falling back to TRELLO_BOARD_ID."""
    board_id = optional_str(arguments, "boardId") or default_board_id
    if not board_id:
        raise ValidationError("boardId is required (or set TRELLO_BOARD_ID).")
    return board_id
