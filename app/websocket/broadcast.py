# =============================================================================
# app/websocket/broadcast.py - Cross-Process Broadcasting
# =============================================================================
# Publishes realtime events for connected users.
#
# Uses Redis pub/sub for cross-process communication:
# - Services call publish_event() when something happens to a user
# - Every API worker subscribes (see app/main.py lifespan) and forwards the
#   event to that user's WebSocket connections, whichever worker holds them
#
# Events:
#   - karma_awarded: The user earned karma (replaces the in-app karma toast)
# =============================================================================

import json
import logging
from typing import Any

logger = logging.getLogger(__name__)

# Redis channel for WebSocket events
WEBSOCKET_CHANNEL = "ibelieveinyou:websocket:events"


def get_redis_client():
    """Get a Redis client for pub/sub operations."""
    import redis
    from app.config import settings
    return redis.from_url(settings.REDIS_URL)


def publish_event(user_id: str, event_type: str, data: dict[str, Any]) -> bool:
    """
    Publish an event that will be broadcast to a user's WebSocket clients.

    Publishing is best-effort: a Redis outage must never fail the request
    that produced the event.

    Args:
        user_id: The auth user to notify
        event_type: Event type (karma_awarded)
        data: Event data to include

    Returns:
        bool: True if published successfully
    """
    try:
        client = get_redis_client()

        message = json.dumps({
            "user_id": str(user_id),
            "type": event_type,
            **data
        }, default=str)

        client.publish(WEBSOCKET_CHANNEL, message)

        logger.debug(f"Published {event_type} event for user {user_id}")
        return True

    except Exception as e:
        logger.error(f"Failed to publish event: {e}")
        return False


def publish_karma_awarded(
    user_id: str,
    points: int,
    total_points: int,
    level: int,
    level_name: str,
    level_up: bool,
    action: str | None = None,
) -> bool:
    """
    Publish a karma_awarded event.

    Called by KarmaService after points are persisted.
    """
    return publish_event(
        user_id=user_id,
        event_type="karma_awarded",
        data={
            "points": points,
            "total_points": total_points,
            "level": level,
            "level_name": level_name,
            "level_up": level_up,
            "action": action,
        }
    )
