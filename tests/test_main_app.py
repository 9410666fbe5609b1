"""Tests for application-level auth and WebSocket rate limiting."""

import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from lingua_franca.config import get_settings


async def _accept_and_close(websocket, settings, store) -> None:
    await websocket.accept()
    await websocket.send_json({"type": "state"})
    await websocket.close()


@pytest.fixture
def app_module(monkeypatch, tmp_path):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    get_settings.cache_clear()
    from lingua_franca import main

    main._ws_connection_times.clear()
    monkeypatch.setattr(main.settings, "app_secret", None)
    monkeypatch.setattr(main, "handle_browser_websocket", _accept_and_close)
    yield main
    main._ws_connection_times.clear()
    get_settings.cache_clear()


@pytest.fixture
def client(app_module):
    with TestClient(app_module.app) as c:
        yield c


class TestWebSocketAuth:
    def test_missing_secret_rejected(self, app_module, client, monkeypatch):
        monkeypatch.setattr(app_module.settings, "app_secret", "s3cret")

        with pytest.raises(WebSocketDisconnect) as exc_info:
            with client.websocket_connect("/ws"):
                pass

        assert exc_info.value.code == 1008

    def test_correct_secret_accepted(self, app_module, client, monkeypatch):
        monkeypatch.setattr(app_module.settings, "app_secret", "s3cret")

        with client.websocket_connect("/ws", headers={"X-App-Secret": "s3cret"}) as ws:
            assert ws.receive_json() == {"type": "state"}

    def test_no_secret_configured(self, client):
        with client.websocket_connect("/ws") as ws:
            assert ws.receive_json() == {"type": "state"}


class TestWebSocketRateLimit:
    def test_connections_over_limit_are_closed(self, app_module, client):
        for _ in range(app_module._WS_RATE_LIMIT):
            with client.websocket_connect("/ws") as ws:
                ws.receive_json()

        with pytest.raises(WebSocketDisconnect) as exc_info:
            with client.websocket_connect("/ws"):
                pass

        assert exc_info.value.code == 1008


class TestHttpAuth:
    def test_api_requires_secret_when_configured(self, app_module, client, monkeypatch):
        monkeypatch.setattr(app_module.settings, "app_secret", "s3cret")

        assert client.get("/api/health").status_code == 401
        response = client.get("/api/health", headers={"X-App-Secret": "s3cret"})
        assert response.status_code == 200

    def test_api_open_without_secret(self, client):
        assert client.get("/api/health").status_code == 200
