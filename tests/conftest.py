"""Shared fixtures: fake credentials and an in-memory Trello API."""

import httpx
import pytest

from config import Credentials
from trello_api.client import TrelloClient


API_KEY = "test-key-123456"
TOKEN = "test-token-abcdef"


class FakeTrello:
    """Answers requests from a (method, path) route table and records them."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], dict] = {}

    def add(self, method: str, path: str, status: int = 200, **response_kwargs):
        """Register a response; kwargs go to httpx.Response (json=, content=, headers=)."""
        self._routes[(method.upper(), path)] = {"status_code": status, **response_kwargs}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self._routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, text="not found")
        return httpx.Response(**route)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def credentials():
    return Credentials(api_key=API_KEY, token=TOKEN, default_board_id="board-default")


@pytest.fixture
def fake_trello():
    return FakeTrello()


@pytest.fixture
def client(credentials, fake_trello):
    return TrelloClient(credentials, transport=httpx.MockTransport(fake_trello))
