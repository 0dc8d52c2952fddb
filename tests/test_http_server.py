"""Tests for the HTTP proxy routes."""

import pytest
from fastapi.testclient import TestClient

import http_server
from http_server import create_app
from tests.conftest import API_KEY, TOKEN


@pytest.fixture
def api(client):
    return TestClient(create_app(client))


def _params(fake_trello) -> dict:
    return dict(fake_trello.last.url.params)


class TestReadRoutes:

    def test_boards_pass_through(self, api, fake_trello):
        boards = [{"id": "b1", "name": "Roadmap", "prefs": {"background": "blue"}}]
        fake_trello.add("GET", "/1/members/me/boards", json=boards)

        resp = api.get("/boards")

        assert resp.status_code == 200
        assert resp.json() == boards

    @pytest.mark.parametrize("path,upstream", [
        ("/boards/b1/lists", "/1/boards/b1/lists"),
        ("/lists/l1/cards", "/1/lists/l1/cards"),
        ("/cards/c1", "/1/cards/c1"),
        ("/cards/c1/attachments", "/1/cards/c1/attachments"),
    ])
    def test_forwarded_paths(self, api, fake_trello, path, upstream):
        fake_trello.add("GET", upstream, json={"ok": True})

        resp = api.get(path)

        assert resp.status_code == 200
        assert resp.json() == {"ok": True}
        assert fake_trello.last.url.path == upstream
        assert _params(fake_trello) == {"key": API_KEY, "token": TOKEN}

    def test_board_actions_limit(self, api, fake_trello):
        fake_trello.add("GET", "/1/boards/b1/actions", json=[])

        resp = api.get("/boards/b1/actions", params={"limit": 5})

        assert resp.status_code == 200
        assert _params(fake_trello)["limit"] == "5"

    def test_board_actions_limit_out_of_range(self, api, fake_trello):
        resp = api.get("/boards/b1/actions", params={"limit": 500})

        assert resp.status_code == 400
        assert "limit" in resp.json()["error"]
        assert fake_trello.requests == []


class TestErrors:

    def test_upstream_404_becomes_500(self, api, fake_trello):
        resp = api.get("/cards/unknown")

        assert resp.status_code == 500
        assert "404" in resp.json()["error"]

    def test_invalid_json_becomes_500(self, api, fake_trello):
        fake_trello.add("GET", "/1/cards/c1", content=b"not json")

        resp = api.get("/cards/c1")

        assert resp.status_code == 500
        assert "invalid JSON" in resp.json()["error"]


class TestCreateCard:

    def test_minimal_body(self, api, fake_trello):
        fake_trello.add("POST", "/1/cards", json={"id": "c1", "name": "Fix bug"})

        resp = api.post("/cards", json={"listId": "L1", "name": "Fix bug"})

        assert resp.status_code == 200
        assert resp.json() == {"id": "c1", "name": "Fix bug"}
        assert fake_trello.last.method == "POST"
        assert _params(fake_trello) == {"idList": "L1", "name": "Fix bug", "key": API_KEY, "token": TOKEN}

    @pytest.mark.parametrize("pos,expected", [
        ("top", "top"), ("bottom", "bottom"), (42, "42"), ("65535.5", "65535.5"),
        (0, "0"), (-1, "-1"), (-2.5, "-2.5"),
    ])
    def test_positions(self, api, fake_trello, pos, expected):
        fake_trello.add("POST", "/1/cards", json={"id": "c1"})

        resp = api.post("/cards", json={"listId": "L1", "name": "Task", "desc": "d", "pos": pos})

        assert resp.status_code == 200
        assert _params(fake_trello)["pos"] == expected
        assert _params(fake_trello)["desc"] == "d"

    @pytest.mark.parametrize("body", [
        {"name": "Fix bug"},
        {"listId": "", "name": "Fix bug"},
        {"listId": "L1", "name": ""},
        {"listId": "L1", "name": "x", "pos": ""},
        {"listId": "L1", "name": "x", "pos": True},
    ])
    def test_invalid_bodies(self, api, fake_trello, body):
        resp = api.post("/cards", json=body)

        assert resp.status_code == 400
        assert resp.json()["error"]
        assert fake_trello.requests == []

    def test_whitespace_name_is_forwarded(self, api, fake_trello):
        fake_trello.add("POST", "/1/cards", json={"id": "c1"})

        resp = api.post("/cards", json={"listId": "L1", "name": "   "})

        assert resp.status_code == 200
        assert _params(fake_trello)["name"] == "   "


class TestUpdateCard:

    def test_move_and_archive(self, api, fake_trello):
        fake_trello.add("PUT", "/1/cards/c1", json={"id": "c1", "closed": True})

        resp = api.put("/cards/c1", json={"listId": "l2", "closed": True})

        assert resp.status_code == 200
        assert _params(fake_trello) == {"idList": "l2", "closed": "true", "key": API_KEY, "token": TOKEN}

    def test_empty_update_rejected(self, api, fake_trello):
        resp = api.put("/cards/c1", json={})

        assert resp.status_code == 400
        assert "No updates provided" in resp.json()["error"]


class TestAttachmentContent:

    DOWNLOAD_PATH = "/1/cards/c1/attachments/a1/download/report.pdf"

    def test_binary_response(self, api, fake_trello):
        fake_trello.add("GET", "/1/cards/c1/attachments/a1", json={
            "id": "a1", "fileName": "report.pdf", "mimeType": "application/pdf",
            "url": f"https://api.trello.com{self.DOWNLOAD_PATH}",
        })
        fake_trello.add("GET", self.DOWNLOAD_PATH, content=b"%PDF-1.7 data")

        resp = api.get("/cards/c1/attachments/a1/content")

        assert resp.status_code == 200
        assert resp.content == b"%PDF-1.7 data"
        assert resp.headers["content-type"] == "application/pdf"
        assert resp.headers["content-length"] == str(len(b"%PDF-1.7 data"))
        assert "report.pdf" in resp.headers["content-disposition"]

    def test_attachment_without_url(self, api, fake_trello):
        fake_trello.add("GET", "/1/cards/c1/attachments/a1", json={"id": "a1"})

        resp = api.get("/cards/c1/attachments/a1/content")

        assert resp.status_code == 400

    def test_download_failure(self, api, fake_trello):
        fake_trello.add("GET", "/1/cards/c1/attachments/a1", json={
            "id": "a1", "url": f"https://api.trello.com{self.DOWNLOAD_PATH}",
        })

        resp = api.get("/cards/c1/attachments/a1/content")

        assert resp.status_code == 500
        assert "404" in resp.json()["error"]


class TestMain:

    def test_missing_credentials_is_fatal(self, monkeypatch, tmp_path):
        monkeypatch.delenv("TRELLO_API_KEY", raising=False)
        monkeypatch.delenv("TRELLO_TOKEN", raising=False)
        monkeypatch.chdir(tmp_path)
        started = []
        monkeypatch.setattr(http_server.uvicorn, "run", lambda *args, **kwargs: started.append(args))

        with pytest.raises(SystemExit) as exc_info:
            http_server.main()

        assert exc_info.value.code == 1
        assert started == []

    def test_starts_on_configured_port(self, monkeypatch, tmp_path):
        monkeypatch.setenv("TRELLO_API_KEY", API_KEY)
        monkeypatch.setenv("TRELLO_TOKEN", TOKEN)
        monkeypatch.setenv("PORT", "4010")
        monkeypatch.chdir(tmp_path)
        started = []
        monkeypatch.setattr(http_server.uvicorn, "run", lambda app, **kwargs: started.append(kwargs))

        http_server.main()

        assert started == [{"host": "0.0.0.0", "port": 4010}]
