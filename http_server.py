#!/usr/bin/env python3
"""
Trello HTTP proxy - a small JSON API in front of the Trello REST API.
"""

import logging
import sys
from urllib.parse import quote

import uvicorn
from fastapi import FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field, field_validator, model_validator

from config import configure_logging, get_port, load_credentials
from trello_api import __version__
from trello_api.attachments import resolve_file_name, resolve_mime_type
from trello_api.client import TrelloClient
from trello_api.errors import TrelloError, ValidationError

logger = logging.getLogger("trello_http")


# --- Request bodies ---
def _check_position(value):
    """'top', 'bottom', any number, or a non-empty string; Trello judges the value."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError("pos must be 'top', 'bottom', a number, or a non-empty string")
    if isinstance(value, str) and not value:
        raise ValueError("pos must not be an empty string")
    return value


class CreateCardRequest(BaseModel):
    listId: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    desc: str | None = None
    pos: int | float | str | None = None

    @field_validator("pos", mode="before")
    @classmethod
    def valid_position(cls, v):
        return _check_position(v)


class UpdateCardRequest(BaseModel):
    name: str | None = Field(None, min_length=1)
    desc: str | None = None
    listId: str | None = Field(None, min_length=1)
    pos: int | float | str | None = None
    closed: bool | None = None

    @field_validator("pos", mode="before")
    @classmethod
    def valid_position(cls, v):
        return _check_position(v)

    @model_validator(mode="after")
    def has_changes(self):
        if all(v is None for v in (self.name, self.desc, self.listId, self.pos, self.closed)):
            raise ValueError("No updates provided. Specify name, desc, listId, pos or closed.")
        return self


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else err.get("msg", "invalid input"))
    return "; ".join(parts) or "Invalid request"


def create_app(client: TrelloClient) -> FastAPI:
    """Build the proxy app around a configured Trello client."""
    app = FastAPI(title="Trello HTTP Proxy", version=__version__)

    # --- Error translation ---
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": _format_validation_errors(exc)})

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError):
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(TrelloError)
    async def trello_error_handler(request: Request, exc: TrelloError):
        # Upstream statuses are reported in the message, not proxied
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=500, content={"error": str(exc)})

    # --- Boards ---
    @app.get("/boards")
    async def list_boards():
        return await client.request("/members/me/boards")

    @app.get("/boards/{board_id}/lists")
    async def board_lists(board_id: str):
        return await client.request(f"/boards/{board_id}/lists")

    @app.get("/boards/{board_id}/actions")
    async def board_actions(board_id: str, limit: int = Query(10, ge=1, le=50)):
        return await client.request(f"/boards/{board_id}/actions", query={"limit": limit})

    # --- Lists ---
    @app.get("/lists/{list_id}/cards")
    async def list_cards(list_id: str):
        return await client.request(f"/lists/{list_id}/cards")

    # --- Cards ---
    @app.get("/cards/{card_id}")
    async def get_card(card_id: str):
        return await client.request(f"/cards/{card_id}")

    @app.post("/cards")
    async def create_card(body: CreateCardRequest):
        return await client.request(
            "/cards", method="POST",
            query={"idList": body.listId, "name": body.name, "desc": body.desc, "pos": body.pos}
        )

    @app.put("/cards/{card_id}")
    async def update_card(card_id: str, body: UpdateCardRequest):
        return await client.request(
            f"/cards/{card_id}", method="PUT",
            query={
                "name": body.name,
                "desc": body.desc,
                "idList": body.listId,
                "pos": body.pos,
                "closed": body.closed,
            }
        )

    # --- Attachments ---
    @app.get("/cards/{card_id}/attachments")
    async def card_attachments(card_id: str):
        return await client.request(f"/cards/{card_id}/attachments")

    @app.get("/cards/{card_id}/attachments/{attachment_id}/content")
    async def attachment_content(card_id: str, attachment_id: str):
        metadata = await client.request(f"/cards/{card_id}/attachments/{attachment_id}")
        url = metadata.get("url")
        if not url:
            raise ValidationError(f"Attachment {attachment_id} has no downloadable URL.")
        download = await client.download_attachment(url)

        file_name = resolve_file_name(metadata, url)
        return Response(
            content=download.content,
            media_type=resolve_mime_type(metadata, download),
            headers={"Content-Disposition": f"inline; filename*=UTF-8''{quote(file_name)}"},
        )

    return app


def main():
    """Run the HTTP proxy; missing credentials are fatal at startup."""
    configure_logging()
    credentials = load_credentials()
    if not credentials.is_complete():
        logger.error("TRELLO_API_KEY and TRELLO_TOKEN environment variables are required")
        logger.error("Create a .env file with your Trello credentials")
        sys.exit(1)

    port = get_port()
    logger.info("Trello HTTP proxy listening on port %s (default board: %s)",
                port, credentials.default_board_id or "not set")
    uvicorn.run(create_app(TrelloClient(credentials)), host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
