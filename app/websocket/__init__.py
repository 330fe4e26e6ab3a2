# =============================================================================
# app/websocket/__init__.py - WebSocket Module
# =============================================================================
# Provides real-time updates for signed-in users.
#
# Usage:
#   # Broadcast an event to all connections for a user (from FastAPI)
#   from app.websocket import websocket_manager
#
#   await websocket_manager.broadcast(user_id, {
#       "type": "karma_awarded",
#       "points": 10
#   })
#
#   # Publish events from any process
#   from app.websocket.broadcast import publish_karma_awarded
#
#   publish_karma_awarded(user_id, points, total_points, level, level_name, level_up)
# =============================================================================

from app.websocket.manager import websocket_manager
from app.websocket.broadcast import (
    publish_event,
    publish_karma_awarded,
    WEBSOCKET_CHANNEL,
)

__all__ = [
    "websocket_manager",
    "publish_event",
    "publish_karma_awarded",
    "WEBSOCKET_CHANNEL",
]
