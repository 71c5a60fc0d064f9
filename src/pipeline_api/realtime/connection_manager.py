"""WebSocket connection manager.

Tracks open sockets per username and fans out chat frames: broadcasts to
everyone, private messages to every socket of one user.
"""

import asyncio
from typing import Any

from fastapi import WebSocket, WebSocketDisconnect

from src.pipeline_api.core.logging import get_logger

logger = get_logger(__name__)

ANONYMOUS = "anonymous"
SYSTEM_SENDER = "SYSTEM"


def notification(message: str) -> dict[str, Any]:
    return {"type": "notification", "from": SYSTEM_SENDER, "message": message}


class ConnectionManager:
    """Registry of live sockets. One instance per application."""

    def __init__(self) -> None:
        self._connections: dict[str, set[WebSocket]] = {}
        self._lock = asyncio.Lock()

    @property
    def connection_count(self) -> int:
        return sum(len(sockets) for sockets in self._connections.values())

    def usernames(self) -> set[str]:
        return set(self._connections)

    async def connect(self, websocket: WebSocket, username: str) -> None:
        """Accept the socket, register it and announce the user."""
        await websocket.accept()
        async with self._lock:
            self._connections.setdefault(username, set()).add(websocket)
        logger.info("WebSocket connected", username=username)
        await self.broadcast(notification(f"User {username} joined the chat"))

    async def disconnect(self, websocket: WebSocket, username: str) -> None:
        """Forget the socket and announce the departure."""
        async with self._lock:
            removed = self._discard(websocket, username)
        if removed:
            logger.info("WebSocket disconnected", username=username)
            await self.broadcast(notification(f"User {username} left the chat"))

    def _discard(self, websocket: WebSocket, username: str) -> bool:
        sockets = self._connections.get(username)
        if not sockets or websocket not in sockets:
            return False
        sockets.discard(websocket)
        if not sockets:
            del self._connections[username]
        return True

    async def broadcast(self, frame: dict[str, Any]) -> None:
        """Send a frame to every connected socket."""
        async with self._lock:
            targets = [
                (username, ws) for username, sockets in self._connections.items() for ws in sockets
            ]
        await self._send_all(targets, frame)

    async def send_to_user(self, username: str, frame: dict[str, Any]) -> int:
        """Send a frame to every socket of one user. Returns sockets reached."""
        async with self._lock:
            targets = [(username, ws) for ws in self._connections.get(username, ())]
        return await self._send_all(targets, frame)

    async def _send_all(self, targets: list[tuple[str, WebSocket]], frame: dict[str, Any]) -> int:
        delivered = 0
        stale: list[tuple[str, WebSocket]] = []
        for username, websocket in targets:
            # A disconnect raised here belongs to the peer, not to the caller
            try:
                await websocket.send_json(frame)
                delivered += 1
            except (WebSocketDisconnect, RuntimeError, ConnectionError) as e:
                logger.warning("WebSocket send failed", username=username, error=str(e))
                stale.append((username, websocket))
        if stale:
            async with self._lock:
                for username, websocket in stale:
                    self._discard(websocket, username)
        return delivered

    async def handle_frame(
        self, websocket: WebSocket, username: str, frame: Any
    ) -> None:
        """Dispatch one inbound frame from ``username``."""
        if not isinstance(frame, dict):
            await websocket.send_json({"type": "error", "message": "Frame must be a JSON object"})
            return

        frame_type = frame.get("type")
        if frame_type == "hello":
            name = str(frame.get("name") or username)
            await self.broadcast({"type": "greeting", "content": f"Hello, {name}!"})
        elif frame_type == "private":
            recipient = frame.get("recipient")
            content = frame.get("content")
            if not isinstance(recipient, str) or not recipient or not isinstance(content, str):
                await websocket.send_json(
                    {"type": "error", "message": "Private frames need recipient and content"}
                )
                return
            await self.send_to_user(
                recipient,
                {
                    "type": "private",
                    "sender": username,
                    "recipient": recipient,
                    "content": content,
                },
            )
        else:
            await websocket.send_json(
                {"type": "error", "message": f"Unsupported frame type: {frame_type}"}
            )
