"""
Errors raised by the Trello forwarding layer.
"""


class TrelloError(Exception):
    """Base class for every failure surfaced by the Trello client."""


class MissingCredentials(TrelloError):
    def __init__(self, message: str = "Missing TRELLO_API_KEY or TRELLO_TOKEN in environment"):
        super().__init__(message)


class UpstreamError(TrelloError):
    """Trello answered with a non-2xx status."""

    def __init__(self, status: int, body: str = ""):
        self.status = status
        self.body = body
        super().__init__(f"Trello API error {status}: {body}" if body else f"Trello API error {status}")


class DecodeError(TrelloError):
    """A successful response whose body is not valid JSON."""


class InvalidUrl(TrelloError):
    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Invalid attachment URL: {url!r}")


class RequestFailed(TrelloError):
    """The request never got a response (connection error, timeout)."""


class ValidationError(TrelloError):
    """Tool or route input rejected before any network call."""
