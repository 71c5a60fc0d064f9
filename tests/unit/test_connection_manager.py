"""Tests for the WebSocket connection manager."""

from unittest.mock import AsyncMock

import pytest
from fastapi import WebSocketDisconnect

from src.pipeline_api.realtime import ConnectionManager
from src.pipeline_api.realtime.connection_manager import SYSTEM_SENDER

pytestmark = pytest.mark.unit


def _socket() -> AsyncMock:
    return AsyncMock()


def _sent(ws: AsyncMock) -> list[dict]:
    return [call.args[0] for call in ws.send_json.await_args_list]


@pytest.fixture
def manager() -> ConnectionManager:
    return ConnectionManager()


async def test_connect_accepts_and_announces(manager):
    alice, bob = _socket(), _socket()
    await manager.connect(alice, "alice")
    await manager.connect(bob, "bob")

    alice.accept.assert_awaited_once()
    assert manager.usernames() == {"alice", "bob"}
    assert manager.connection_count == 2
    assert _sent(alice)[-1] == {
        "type": "notification",
        "from": SYSTEM_SENDER,
        "message": "User bob joined the chat",
    }


async def test_disconnect_announces_departure(manager):
    alice, bob = _socket(), _socket()
    await manager.connect(alice, "alice")
    await manager.connect(bob, "bob")

    await manager.disconnect(bob, "bob")

    assert manager.usernames() == {"alice"}
    assert _sent(alice)[-1]["message"] == "User bob left the chat"


async def test_disconnect_unknown_socket_is_silent(manager):
    alice = _socket()
    await manager.connect(alice, "alice")
    alice.send_json.reset_mock()

    await manager.disconnect(_socket(), "ghost")

    alice.send_json.assert_not_awaited()


async def test_hello_frame_broadcasts_greeting(manager):
    alice, bob = _socket(), _socket()
    await manager.connect(alice, "alice")
    await manager.connect(bob, "bob")

    await manager.handle_frame(alice, "alice", {"type": "hello", "name": "Alice"})

    greeting = {"type": "greeting", "content": "Hello, Alice!"}
    assert _sent(alice)[-1] == greeting
    assert _sent(bob)[-1] == greeting


async def test_private_frame_reaches_only_recipient(manager):
    alice, bob, carol = _socket(), _socket(), _socket()
    for ws, name in ((alice, "alice"), (bob, "bob"), (carol, "carol")):
        await manager.connect(ws, name)
    for ws in (alice, bob, carol):
        ws.send_json.reset_mock()

    await manager.handle_frame(
        alice, "alice", {"type": "private", "recipient": "bob", "content": "psst"}
    )

    assert _sent(bob) == [
        {"type": "private", "sender": "alice", "recipient": "bob", "content": "psst"}
    ]
    carol.send_json.assert_not_awaited()
    alice.send_json.assert_not_awaited()


async def test_private_frame_reaches_every_socket_of_recipient(manager):
    bob_phone, bob_laptop = _socket(), _socket()
    await manager.connect(bob_phone, "bob")
    await manager.connect(bob_laptop, "bob")

    delivered = await manager.send_to_user("bob", {"type": "private", "content": "hi"})

    assert delivered == 2


async def test_unknown_frame_type_returns_error(manager):
    alice = _socket()
    await manager.connect(alice, "alice")

    await manager.handle_frame(alice, "alice", {"type": "shout"})

    assert _sent(alice)[-1] == {"type": "error", "message": "Unsupported frame type: shout"}


async def test_non_object_frame_returns_error(manager):
    alice = _socket()
    await manager.connect(alice, "alice")

    await manager.handle_frame(alice, "alice", ["hello"])

    assert _sent(alice)[-1]["type"] == "error"


async def test_failed_send_drops_stale_socket(manager):
    alice, stale = _socket(), _socket()
    await manager.connect(alice, "alice")
    await manager.connect(stale, "bob")
    stale.send_json.side_effect = RuntimeError("socket closed")

    await manager.broadcast({"type": "notification", "message": "ping"})

    assert manager.usernames() == {"alice"}


async def test_peer_disconnected_mid_send_is_dropped_not_raised(manager):
    alice, bob = _socket(), _socket()
    await manager.connect(alice, "alice")
    await manager.connect(bob, "bob")
    bob.send_json.side_effect = WebSocketDisconnect(code=1006)

    await manager.handle_frame(alice, "alice", {"type": "hello"})

    assert manager.usernames() == {"alice"}
    assert _sent(alice)[-1] == {"type": "greeting", "content": "Hello, alice!"}


async def test_private_frame_to_disconnected_peer_returns_zero(manager):
    alice, bob = _socket(), _socket()
    await manager.connect(alice, "alice")
    await manager.connect(bob, "bob")
    bob.send_json.side_effect = WebSocketDisconnect(code=1006)

    delivered = await manager.send_to_user("bob", {"type": "private", "content": "hi"})

    assert delivered == 0
    assert manager.usernames() == {"alice"}
