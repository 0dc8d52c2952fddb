"""
Trello API client - async httpx wrapper with query-param auth (?key=...&token=...).

Shared by the MCP tool modules and the HTTP proxy routes.
"""

import enum
import json
import logging
from collections.abc import Mapping
from typing import Any

import httpx

from config import Credentials, ensure_credentials
from trello_api import __version__
from trello_api.errors import DecodeError, InvalidUrl, RequestFailed, UpstreamError

logger = logging.getLogger(__name__)

# Trello API base URL
API_BASE = "https://api.trello.com/1"

USER_AGENT = f"trello-mcp-server/{__version__}"

DEFAULT_TIMEOUT = 30.0

# Statuses on which an attachment download is retried with key/token
AUTH_RETRY_STATUSES = frozenset({401, 403})


class AuthState(enum.Enum):
    """Where an attachment download is in its credential fallback."""
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class TrelloClient:
    """
    Forwards requests to the Trello REST API.

    Every call opens its own AsyncClient, so one instance can be shared by
    concurrent tool calls or route handlers.
    """

    def __init__(
        self,
        credentials: Credentials,
        *,
        base_url: str = API_BASE,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.credentials = credentials
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @property
    def default_board_id(self) -> str | None:
        return self.credentials.default_board_id

    def _http(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            transport=self._transport,
            headers={"User-Agent": USER_AGENT},
        )

    def authenticate_url(self, url: httpx.URL | str) -> httpx.URL:
        """Add key and token to a URL, leaving any value already present untouched."""
        url = httpx.URL(url)
        if "key" not in url.params:
            url = url.copy_add_param("key", self.credentials.api_key)
        if "token" not in url.params:
            url = url.copy_add_param("token", self.credentials.token)
        return url

    def build_url(self, endpoint: str, query: Mapping[str, Any] | None = None) -> httpx.URL:
        """Base URL + endpoint, with non-None query values and auth appended."""
        url = httpx.URL(f"{self.base_url}{endpoint}")
        for name, value in (query or {}).items():
            if value is None:
                continue
            url = url.copy_set_param(name, _stringify(value))
        return self.authenticate_url(url)

    async def request(
        self,
        endpoint: str,
        method: str = "GET",
        query: Mapping[str, Any] | None = None,
        body: Mapping[str, Any] | httpx.QueryParams | None = None,
    ) -> Any:
        """
        Make one authenticated Trello API request.

        Args:
            endpoint: API path (e.g. "/boards/{id}/lists")
            method: HTTP method (GET, POST, PUT)
            query: Extra query parameters; None values are dropped
            body: httpx.QueryParams is sent form-encoded, any other mapping as
                JSON. Ignored for GET.

        Returns:
            Parsed JSON response.

        Raises:
            MissingCredentials: API key or token not configured.
            UpstreamError: Trello answered with a non-2xx status.
            DecodeError: The success body is not JSON.
            RequestFailed: No response (connection error, timeout).
        """
        ensure_credentials(self.credentials)

        method = method.upper()
        url = self.build_url(endpoint, query)

        kwargs: dict[str, Any] = {}
        if body is not None and method != "GET":
            if isinstance(body, httpx.QueryParams):
                kwargs["content"] = str(body).encode()
                kwargs["headers"] = {"Content-Type": "application/x-www-form-urlencoded"}
            else:
                kwargs["json"] = dict(body)

        logger.debug("Trello %s %s", method, endpoint)
        try:
            async with self._http() as client:
                resp = await client.request(method, url, **kwargs)
        except httpx.RequestError as e:
            raise RequestFailed(f"Failed to reach Trello ({method} {endpoint}): {e}") from e

        if not resp.is_success:
            logger.warning("Trello %s %s returned %s", method, endpoint, resp.status_code)
            raise UpstreamError(resp.status_code, _safe_text(resp))

        if resp.status_code == 204:
            return {}
        try:
            return resp.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise DecodeError(f"Trello returned invalid JSON for {method} {endpoint}: {e}") from e

    async def download_attachment(self, url: str) -> httpx.Response:
        """
        Download attachment content.

        The URL is fetched as-is first, since signed URLs break when extra
        query parameters are added. Only a 401/403 moves the download to the
        authenticated state, which is tried exactly once.
        """
        target = _parse_absolute_url(url)
        ensure_credentials(self.credentials)

        state = AuthState.UNAUTHENTICATED
        async with self._http() as client:
            while True:
                request_url = target if state is AuthState.UNAUTHENTICATED else self.authenticate_url(target)
                try:
                    resp = await client.get(request_url, follow_redirects=True)
                except httpx.RequestError as e:
                    raise RequestFailed(f"Failed to download attachment: {e}") from e

                if resp.is_success:
                    return resp

                # The retry sends key/token to whatever host the attachment URL names
                if state is AuthState.UNAUTHENTICATED and resp.status_code in AUTH_RETRY_STATUSES:
                    logger.debug("Attachment download returned %s, retrying with credentials", resp.status_code)
                    state = AuthState.AUTHENTICATED
                    continue

                logger.warning("Attachment download failed with %s (%s)", resp.status_code, state.value)
                raise UpstreamError(resp.status_code, _safe_text(resp))


def _parse_absolute_url(url: str) -> httpx.URL:
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError) as e:
        raise InvalidUrl(str(url)) from e
    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise InvalidUrl(url)
    return parsed


def _safe_text(resp: httpx.Response) -> str:
    try:
        return resp.text
    except (UnicodeDecodeError, httpx.ResponseNotRead):
        return ""
