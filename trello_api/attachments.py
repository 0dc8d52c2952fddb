"""
Attachment content payloads - downloaded bytes reshaped for tool output.
"""

import base64
from collections.abc import Mapping
from typing import Any

import httpx

DEFAULT_MIME_TYPE = "application/octet-stream"


def resolve_mime_type(metadata: Mapping[str, Any], response: httpx.Response) -> str:
    """Prefer Trello's recorded MIME type, then the download's Content-Type."""
    mime_type = metadata.get("mimeType")
    if mime_type:
        return mime_type
    content_type = response.headers.get("content-type", "")
    mime_type = content_type.split(";", 1)[0].strip()
    return mime_type or DEFAULT_MIME_TYPE


def resolve_file_name(metadata: Mapping[str, Any], url: str) -> str:
    name = metadata.get("fileName") or metadata.get("name")
    if name:
        return name
    last_segment = httpx.URL(url).path.rstrip("/").rsplit("/", 1)[-1]
    return last_segment or "attachment"


def build_attachment_payload(
    metadata: Mapping[str, Any],
    response: httpx.Response,
    include_data_uri: bool = False,
    include_metadata: bool = False,
) -> dict:
    """
    Build the content payload for a downloaded attachment.

    Args:
        metadata: Attachment object from GET /cards/{id}/attachments/{id}
        response: Successful download response
        include_data_uri: Add a data: URI built from the same base64 string
        include_metadata: Add the raw attachment object under "attachment"

    Returns:
        dict with mimeType, bytes, fileName, url and base64 keys.
    """
    content = response.content
    url = metadata.get("url") or str(response.url)
    mime_type = resolve_mime_type(metadata, response)
    encoded = base64.standard_b64encode(content).decode("ascii")

    payload = {
        "mimeType": mime_type,
        "bytes": len(content),
        "fileName": resolve_file_name(metadata, url),
        "url": url,
        "base64": encoded,
    }
    if include_data_uri:
        payload["dataUri"] = f"data:{mime_type};base64,{encoded}"
    if include_metadata:
        payload["attachment"] = dict(metadata)
    return payload
