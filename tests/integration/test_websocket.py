"""Tests for the chat WebSocket endpoint."""

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from src.pipeline_api.main import create_app
from tests.helpers import make_token

pytestmark = pytest.mark.integration


@pytest.fixture
def ws_client() -> Generator[TestClient]:
    yield TestClient(create_app())


def test_authenticated_private_message(ws_client: TestClient):
    alice_token = make_token("alice")
    bob_token = make_token("bob")

    with ws_client.websocket_connect(f"/ws?token={alice_token}") as alice:
        assert alice.receive_json()["message"] == "User alice joined the chat"

        with ws_client.websocket_connect(f"/ws?token={bob_token}") as bob:
            assert bob.receive_json()["message"] == "User bob joined the chat"
            assert alice.receive_json()["message"] == "User bob joined the chat"

            alice.send_json({"type": "private", "recipient": "bob", "content": "psst"})

            assert bob.receive_json() == {
                "type": "private",
                "sender": "alice",
                "recipient": "bob",
                "content": "psst",
            }

        assert alice.receive_json()["message"] == "User bob left the chat"


def test_hello_frame_is_broadcast(ws_client: TestClient):
    with ws_client.websocket_connect("/ws") as anon:
        assert anon.receive_json()["message"] == "User anonymous joined the chat"

        anon.send_json({"type": "hello", "name": "World"})

        assert anon.receive_json() == {"type": "greeting", "content": "Hello, World!"}


def test_malformed_json_gets_error_frame(ws_client: TestClient):
    with ws_client.websocket_connect("/ws") as ws:
        ws.receive_json()

        ws.send_text("{not json")

        assert ws.receive_json() == {"type": "error", "message": "Malformed JSON"}


def test_invalid_token_closes_with_policy_violation(ws_client: TestClient):
    with pytest.raises(WebSocketDisconnect) as exc_info:
        with ws_client.websocket_connect("/ws?token=garbage") as ws:
            ws.receive_json()

    assert exc_info.value.code == 1008
