# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the I Believe In You API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import asyncio
import json
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.websocket import websocket_manager, WEBSOCKET_CHANNEL
from app.exceptions import (
    IBelieveException,
    ibelieve_exception_handler,
    validation_exception_handler,
)
from app.routers import health, builders, projects, posts, milestones, support, follows, karma
from app.auth import routes as auth_routes
from app.websocket import routes as websocket_routes

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"

# Global handles for the Redis listener task
_redis_listener_task = None
_shutdown_event = None


async def relay_event(raw: bytes | str) -> None:
    """Forward one pub/sub payload to the target user's WebSockets."""
    data = json.loads(raw)
    if not isinstance(data, dict):
        logger.warning(f"Ignoring non-object Redis message: {raw!r}")
        return

    user_id = data.pop("user_id", None)

    if user_id:
        sent = await websocket_manager.broadcast(user_id, data)
        logger.debug(f"Relayed {data.get('type')} to {sent} socket(s) of user {user_id}")


async def redis_pubsub_listener():
    """
    Background task that relays Redis pub/sub events to WebSockets.

    Karma is awarded in whichever worker handled the request, but the user's
    socket may be held by another worker, so every worker subscribes.
    """
    import redis.asyncio as aioredis

    logger.info("Starting Redis pub/sub listener for WebSocket broadcasts")

    redis_client = aioredis.from_url(settings.REDIS_URL)
    pubsub = redis_client.pubsub()

    try:
        await pubsub.subscribe(WEBSOCKET_CHANNEL)

        async for message in pubsub.listen():
            if _shutdown_event and _shutdown_event.is_set():
                break

            if message["type"] != "message":
                continue

            try:
                await relay_event(message["data"])
            except json.JSONDecodeError as e:
                logger.warning(f"Invalid JSON in Redis message: {e}")
            except Exception as e:
                logger.error(f"Error processing Redis message: {e}")

    except asyncio.CancelledError:
        logger.info("Redis pub/sub listener cancelled")
    except Exception as e:
        logger.error(f"Redis pub/sub listener error: {e}")
    finally:
        await pubsub.aclose()
        await redis_client.aclose()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: log config, start the Redis relay
    - Shutdown: stop the Redis relay
    """
    global _redis_listener_task, _shutdown_event

    logger.info(f"Starting I Believe In You API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    _shutdown_event = asyncio.Event()
    _redis_listener_task = asyncio.create_task(redis_pubsub_listener())

    yield

    logger.info("Shutting down I Believe In You API")

    _shutdown_event.set()
    _redis_listener_task.cancel()
    try:
        await _redis_listener_task
    except asyncio.CancelledError:
        logger.debug("Redis listener stopped")


# Create FastAPI application
app = FastAPI(
    title="I Believe In You API",
    description="""
## Support for people building things

Creators share projects and post updates; supporters follow them, like
updates and send words of encouragement. Every bit of support earns karma.

### Key Features

- **Discover**: Search and browse trending or new projects
- **Project Pages**: Public by slug, with updates, milestones and a mood
- **Feed**: Updates from the projects you follow
- **Karma**: Points and levels for supporting others, pushed live over WebSocket
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Auth", "description": "Verify Supabase tokens and get the signed-in user"},
        {"name": "Builders", "description": "Profiles and onboarding"},
        {"name": "Projects", "description": "Discover, project pages and edits"},
        {"name": "Posts", "description": "Project updates, feed and likes"},
        {"name": "Milestones", "description": "Project roadmaps"},
        {"name": "Support", "description": "Support messages and history"},
        {"name": "Follows", "description": "Following projects"},
        {"name": "Karma", "description": "Karma points and levels"},
        {"name": "WebSocket", "description": "Real-time karma notifications"},
        {"name": "Health", "description": "API health and readiness checks"},
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - the Expo web build and local dev servers call the API
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(IBelieveException)
async def handle_ibelieve_exception(request: Request, exc: IBelieveException):
    """Handle custom API exceptions."""
    return await ibelieve_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_exception(request: Request, exc: RequestValidationError):
    """Handle request body/query validation errors."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

app.include_router(auth_routes.router, prefix=API_PREFIX, tags=["Auth"])
app.include_router(health.router, prefix=API_PREFIX, tags=["Health"])
app.include_router(builders.router, prefix=API_PREFIX, tags=["Builders"])
app.include_router(projects.router, prefix=API_PREFIX, tags=["Projects"])
app.include_router(posts.router, prefix=API_PREFIX, tags=["Posts"])
app.include_router(milestones.router, prefix=API_PREFIX, tags=["Milestones"])
app.include_router(support.router, prefix=API_PREFIX, tags=["Support"])
app.include_router(follows.router, prefix=API_PREFIX, tags=["Follows"])
app.include_router(karma.router, prefix=API_PREFIX, tags=["Karma"])

# WebSocket endpoints (Real-time karma)
app.include_router(websocket_routes.router, tags=["WebSocket"])


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "I Believe In You API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": f"{API_PREFIX}/health",
    }
