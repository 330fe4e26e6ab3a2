# =============================================================================
# app/websocket/manager.py - WebSocket Connection Manager
# =============================================================================
# Manages WebSocket connections per user and handles broadcasting.
#
# Usage:
#   from app.websocket import websocket_manager
#
#   await websocket_manager.connect(user_id, websocket)
#   await websocket_manager.broadcast(user_id, {"type": "karma_awarded", ...})
#   websocket_manager.disconnect(user_id, websocket)
# =============================================================================

import logging
from typing import Dict, Set
from fastapi import WebSocket

logger = logging.getLogger(__name__)


class ConnectionManager:
    """
    Manages WebSocket connections organized by user ID.

    A user can be connected from several devices at once. Events for the
    user are sent to every one of them.
    """

    def __init__(self):
        # user_id -> set of WebSocket connections
        self.connections: Dict[str, Set[WebSocket]] = {}
        self._total_connections = 0

    async def connect(self, user_id: str, websocket: WebSocket) -> None:
        """Accept a new WebSocket connection and track it under the user."""
        await websocket.accept()

        if user_id not in self.connections:
            self.connections[user_id] = set()

        self.connections[user_id].add(websocket)
        self._total_connections += 1

        logger.info(
            f"WebSocket connected for user {user_id}. "
            f"Total connections: {self._total_connections}"
        )

    def disconnect(self, user_id: str, websocket: WebSocket) -> None:
        """Remove a WebSocket connection from tracking."""
        if user_id in self.connections and websocket in self.connections[user_id]:
            self.connections[user_id].discard(websocket)
            self._total_connections -= 1

            if not self.connections[user_id]:
                del self.connections[user_id]

        logger.info(
            f"WebSocket disconnected for user {user_id}. "
            f"Total connections: {self._total_connections}"
        )

    async def broadcast(self, user_id: str, message: dict) -> int:
        """
        Send a message to all of a user's connections.

        Connections that fail to receive are dropped.

        Returns:
            int: Number of clients the message was sent to
        """
        if user_id not in self.connections:
            logger.debug(f"No connections for user {user_id}, skipping broadcast")
            return 0

        dead_connections: Set[WebSocket] = set()
        sent_count = 0

        for websocket in list(self.connections[user_id]):
            try:
                await websocket.send_json(message)
                sent_count += 1
            except Exception as e:
                logger.warning(f"Failed to send to WebSocket: {e}")
                dead_connections.add(websocket)

        for ws in dead_connections:
            self.connections[user_id].discard(ws)
            self._total_connections -= 1

        if dead_connections:
            logger.info(f"Cleaned up {len(dead_connections)} dead connections")

        if user_id in self.connections and not self.connections[user_id]:
            del self.connections[user_id]

        logger.debug(
            f"Broadcast to user {user_id}: "
            f"type={message.get('type')}, sent to {sent_count} clients"
        )

        return sent_count

    def get_connection_count(self, user_id: str | None = None) -> int:
        """Number of active connections, for one user or in total."""
        if user_id:
            return len(self.connections.get(user_id, set()))
        return self._total_connections

    def get_connected_users(self) -> list[str]:
        """User IDs with at least one open connection."""
        return list(self.connections.keys())


# Global singleton instance
websocket_manager = ConnectionManager()
