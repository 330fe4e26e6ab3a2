# =============================================================================
# tests/test_realtime.py - Auth Token and Karma WebSocket Tests
# =============================================================================

import asyncio
import base64
import json
import time
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient
from jose import jwt
from starlette.websockets import WebSocketDisconnect

from app.auth.dependencies import _get_signing_key, decode_token
from app.config import settings
from app.main import app, redis_pubsub_listener, relay_event
from app.websocket.broadcast import WEBSOCKET_CHANNEL, publish_event
from app.websocket.manager import ConnectionManager, websocket_manager


def make_token(sub: str | None = None, secret: str | None = None, expires_in: int = 3600, **claims) -> str:
    payload = {
        "aud": "authenticated",
        "exp": int(time.time()) + expires_in,
        "email": "grace@example.com",
        **claims,
    }
    if sub is not None:
        payload["sub"] = sub
    return jwt.encode(payload, secret or settings.SUPABASE_JWT_SECRET, algorithm="HS256")


def _b64(data: dict) -> str:
    return base64.urlsafe_b64encode(json.dumps(data).encode()).rstrip(b"=").decode()


# =============================================================================
# Token Verification
# =============================================================================

class TestDecodeToken:
    """Tests for Supabase JWT verification."""

    def test_valid_token(self):
        user_id = str(uuid4())
        user = decode_token(make_token(sub=user_id))

        assert str(user.id) == user_id
        assert user.email == "grace@example.com"

    def test_expired_token(self):
        with pytest.raises(HTTPException) as exc_info:
            decode_token(make_token(sub=str(uuid4()), expires_in=-60))

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Token has expired"

    def test_wrong_secret(self):
        with pytest.raises(HTTPException) as exc_info:
            decode_token(make_token(sub=str(uuid4()), secret="not-the-secret"))
        assert exc_info.value.status_code == 401

    def test_wrong_audience(self):
        with pytest.raises(HTTPException):
            decode_token(make_token(sub=str(uuid4()), aud="anon"))

    @pytest.mark.parametrize("sub", [None, "not-a-uuid"])
    def test_bad_subject(self, sub):
        with pytest.raises(HTTPException) as exc_info:
            decode_token(make_token(sub=sub))
        assert exc_info.value.status_code == 401

    def test_empty_token(self):
        with pytest.raises(HTTPException):
            decode_token("")

    def test_es256_key_from_jwks(self):
        """Asymmetric tokens are verified with the matching JWKS key."""
        key = {"kty": "EC", "kid": "key-1", "crv": "P-256", "x": "x", "y": "y"}
        token = ".".join([_b64({"alg": "ES256", "kid": "key-1"}), _b64({}), "c2ln"])

        with patch("app.auth.dependencies._fetch_jwks", return_value={"keys": [key]}):
            assert _get_signing_key(token) == (key, "ES256")

    def test_unknown_kid_falls_back(self):
        token = ".".join([_b64({"alg": "ES256", "kid": "gone"}), _b64({}), "c2ln"])

        with patch("app.auth.dependencies._fetch_jwks", return_value={"keys": []}):
            assert _get_signing_key(token) == (settings.SUPABASE_JWT_SECRET, "HS256")

    def test_hs256_rejected_without_secret(self):
        """With no JWT secret configured, a token signed with an empty key is refused."""
        payload = {"sub": str(uuid4()), "aud": "authenticated", "exp": int(time.time()) + 600}
        forged = jwt.encode(payload, "", algorithm="HS256")

        with patch.object(settings, "SUPABASE_JWT_SECRET", ""):
            with pytest.raises(HTTPException) as exc_info:
                decode_token(forged)

        assert exc_info.value.status_code == 401

    def test_unknown_kid_rejected_without_secret(self):
        token = ".".join([_b64({"alg": "ES256", "kid": "gone"}), _b64({}), "c2ln"])

        with patch.object(settings, "SUPABASE_JWT_SECRET", ""), \
                patch("app.auth.dependencies._fetch_jwks", return_value={"keys": []}):
            with pytest.raises(HTTPException) as exc_info:
                decode_token(token)

        assert exc_info.value.status_code == 401


# =============================================================================
# Publishing and Relaying
# =============================================================================

class TestBroadcast:
    """Tests for the Redis bridge."""

    def test_publish_event(self, redis_client):
        assert publish_event("user-1", "karma_awarded", {"points": 5}) is True

        channel, payload = redis_client.publish.call_args.args
        assert channel == WEBSOCKET_CHANNEL
        assert json.loads(payload) == {"user_id": "user-1", "type": "karma_awarded", "points": 5}

    def test_publish_failure_returns_false(self, redis_client):
        redis_client.publish.side_effect = ConnectionError("down")
        assert publish_event("user-1", "karma_awarded", {}) is False

    def test_relay_event(self):
        """Channel messages go to the addressed user's sockets."""
        with patch.object(websocket_manager, "broadcast", new=AsyncMock(return_value=1)) as broadcast:
            asyncio.run(relay_event(json.dumps({"user_id": "user-1", "type": "karma_awarded", "points": 5})))

        broadcast.assert_awaited_once_with("user-1", {"type": "karma_awarded", "points": 5})

    def test_relay_without_user_is_dropped(self):
        with patch.object(websocket_manager, "broadcast", new=AsyncMock()) as broadcast:
            asyncio.run(relay_event(json.dumps({"type": "karma_awarded"})))

        broadcast.assert_not_awaited()

    def test_relay_non_object_is_dropped(self):
        with patch.object(websocket_manager, "broadcast", new=AsyncMock()) as broadcast:
            asyncio.run(relay_event("[1, 2]"))

        broadcast.assert_not_awaited()


class FakePubSub:
    """Replays a fixed list of channel payloads, then ends."""

    def __init__(self, payloads: list[str]):
        self.payloads = payloads
        self.closed = False

    async def subscribe(self, channel):
        self.channel = channel

    async def listen(self):
        yield {"type": "subscribe", "data": 1}
        for payload in self.payloads:
            yield {"type": "message", "data": payload}

    async def aclose(self):
        self.closed = True


class TestPubSubListener:
    """Tests for the background Redis relay."""

    def test_bad_messages_do_not_stop_the_listener(self):
        """Malformed or failing messages are skipped and later events still arrive."""
        pubsub = FakePubSub([
            "[1, 2]",
            "{not json",
            json.dumps({"user_id": "user-0", "type": "karma_awarded"}),
            json.dumps({"user_id": "user-1", "type": "karma_awarded", "points": 5}),
        ])
        redis_conn = MagicMock()
        redis_conn.pubsub.return_value = pubsub
        redis_conn.aclose = AsyncMock()
        broadcast = AsyncMock(side_effect=[RuntimeError("socket gone"), 1])

        with patch("redis.asyncio.from_url", return_value=redis_conn), \
                patch.object(websocket_manager, "broadcast", new=broadcast):
            asyncio.run(redis_pubsub_listener())

        assert [c.args[0] for c in broadcast.await_args_list] == ["user-0", "user-1"]
        assert pubsub.channel == WEBSOCKET_CHANNEL
        assert pubsub.closed is True
        redis_conn.aclose.assert_awaited_once()


class FakeSocket:
    """Just enough of a WebSocket for ConnectionManager."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent = []
        self.accepted = False

    async def accept(self):
        self.accepted = True

    async def send_json(self, message):
        if self.fail:
            raise RuntimeError("socket closed")
        self.sent.append(message)


class TestConnectionManager:
    """Tests for per-user connection tracking."""

    def test_broadcast_to_all_devices(self):
        manager = ConnectionManager()
        phone, tablet = FakeSocket(), FakeSocket()

        async def scenario():
            await manager.connect("user-1", phone)
            await manager.connect("user-1", tablet)
            return await manager.broadcast("user-1", {"type": "karma_awarded"})

        assert asyncio.run(scenario()) == 2
        assert phone.sent == tablet.sent == [{"type": "karma_awarded"}]
        assert manager.get_connection_count("user-1") == 2

    def test_dead_connections_dropped(self):
        manager = ConnectionManager()
        dead = FakeSocket(fail=True)

        async def scenario():
            await manager.connect("user-1", dead)
            return await manager.broadcast("user-1", {"type": "karma_awarded"})

        assert asyncio.run(scenario()) == 0
        assert manager.get_connected_users() == []
        assert manager.get_connection_count() == 0

    def test_no_connections(self):
        assert asyncio.run(ConnectionManager().broadcast("nobody", {})) == 0


# =============================================================================
# WebSocket Endpoint
# =============================================================================

class TestKarmaWebSocket:
    """Tests for /ws/karma."""

    def test_connect_and_ping(self):
        user_id = str(uuid4())
        client = TestClient(app)

        with client.websocket_connect(f"/ws/karma?token={make_token(sub=user_id)}") as ws:
            hello = ws.receive_json()
            assert hello["type"] == "connected"
            assert hello["user_id"] == user_id

            status = client.get("/ws/status").json()
            assert status["connected_users"] >= 1

            ws.send_text("ping")
            assert ws.receive_text() == "pong"

    def test_rejects_bad_token(self):
        client = TestClient(app)

        with pytest.raises(WebSocketDisconnect) as exc_info:
            with client.websocket_connect("/ws/karma?token=garbage") as ws:
                ws.receive_json()

        assert exc_info.value.code == 4001
