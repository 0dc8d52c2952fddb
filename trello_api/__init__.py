"""
Trello API forwarding layer - shared by the MCP tools and the HTTP proxy.

Modules:
    client       authenticated requests and attachment downloads
    attachments  base64 payloads for downloaded attachment content
    errors       exception hierarchy
"""

__version__ = "1.0.0"
