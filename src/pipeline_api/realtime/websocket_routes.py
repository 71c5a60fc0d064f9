"""WebSocket endpoint for the chat side channel.

Connect with: ws://host/ws?token=<jwt>  (token optional)

Inbound frames:
- {"type": "hello", "name": "..."}
- {"type": "private", "recipient": "...", "content": "..."}
"""

import json
from typing import Annotated

from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect, status

from src.pipeline_api.core.logging import get_logger
from src.pipeline_api.core.security import authenticate_token
from src.pipeline_api.realtime.connection_manager import ANONYMOUS, ConnectionManager

logger = get_logger(__name__)

websocket_router = APIRouter(tags=["websocket"])


def get_connection_manager(websocket: WebSocket) -> ConnectionManager:
    return websocket.app.state.connection_manager  # type: ignore[no-any-return]


@websocket_router.websocket("/ws")
async def websocket_endpoint(
    websocket: WebSocket,
    token: Annotated[str | None, Query(description="Bearer token")] = None,
) -> None:
    """Chat socket. Sockets without a token join as ``anonymous``."""
    username = ANONYMOUS
    if token:
        principal = authenticate_token(token)
        if principal is None:
            await websocket.close(code=status.WS_1008_POLICY_VIOLATION, reason="Invalid token")
            return
        username = principal.username

    manager = get_connection_manager(websocket)
    await manager.connect(websocket, username)
    try:
        while True:
            raw = await websocket.receive_text()
            try:
                frame = json.loads(raw)
            except json.JSONDecodeError:
                await websocket.send_json({"type": "error", "message": "Malformed JSON"})
                continue
            await manager.handle_frame(websocket, username, frame)
    except WebSocketDisconnect:
        logger.debug("WebSocket closed by client", username=username)
    finally:
        await manager.disconnect(websocket, username)
