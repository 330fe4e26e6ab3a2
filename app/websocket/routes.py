# =============================================================================
# app/websocket/routes.py - WebSocket Routes
# =============================================================================
# Per-user channel for karma notifications.
#
# Connect: ws://host/ws/karma?token={jwt}
#
# Events:
#   - {"type": "connected", "user_id": "..."}
#   - {"type": "karma_awarded", "points": 10, "total_points": 60, "level": 2,
#      "level_name": "Supporter", "level_up": true, "action": "message"}
# =============================================================================

import logging

from fastapi import APIRouter, HTTPException, WebSocket, WebSocketDisconnect, Query

from app.auth.dependencies import decode_token
from app.websocket.manager import websocket_manager

logger = logging.getLogger(__name__)

router = APIRouter()

# Close code for failed authentication
WS_CLOSE_UNAUTHORIZED = 4001


@router.websocket("/ws/karma")
async def karma_websocket(
    websocket: WebSocket,
    token: str = Query(..., description="Supabase access token"),
):
    """
    Receive karma awards as they happen.

    The app shows a toast (and a level-up celebration) for each event.
    Sending "ping" returns "pong" for keepalive.
    """
    try:
        user = decode_token(token)
    except HTTPException as e:
        logger.warning(f"WebSocket auth failed: {e.detail}")
        await websocket.close(code=WS_CLOSE_UNAUTHORIZED, reason="Invalid token")
        return

    user_id = str(user.id)
    await websocket_manager.connect(user_id, websocket)

    try:
        await websocket.send_json({
            "type": "connected",
            "user_id": user_id,
            "message": "Connected to karma updates"
        })

        while True:
            data = await websocket.receive_text()
            if data == "ping":
                await websocket.send_text("pong")
            else:
                logger.debug(f"WebSocket received: {data[:100]}")

    except WebSocketDisconnect:
        logger.info(f"WebSocket client disconnected for user {user_id}")
    finally:
        websocket_manager.disconnect(user_id, websocket)


@router.get("/ws/status")
async def websocket_status():
    """Connection counts for monitoring."""
    users = websocket_manager.get_connected_users()
    return {
        "total_connections": websocket_manager.get_connection_count(),
        "connected_users": len(users),
    }
