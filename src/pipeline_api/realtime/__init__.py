"""Realtime chat side channel over WebSocket."""

from src.pipeline_api.realtime.connection_manager import ConnectionManager
from src.pipeline_api.realtime.websocket_routes import websocket_router

__all__ = ["ConnectionManager", "websocket_router"]
