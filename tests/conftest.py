# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Swaps the Supabase client for an in-memory fake
# - Patches Redis so karma events are captured instead of published
# =============================================================================

import os
from unittest.mock import MagicMock, patch
from uuid import uuid4

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/0")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest

from lib.supabase_client import SupabaseClient
from tests.fakes import FakeSupabase

UNIQUE_CONSTRAINTS = {
    "builders": [("user_id",)],
    "karma": [("user_id",)],
    "projects": [("public_slug",)],
    "follows": [("user_id", "project_id")],
    "likes": [("user_id", "post_id")],
}


# =============================================================================
# Infrastructure Fixtures
# =============================================================================

@pytest.fixture
def fake_db():
    """In-memory database injected as the Supabase singleton."""
    db = FakeSupabase(unique=UNIQUE_CONSTRAINTS)
    SupabaseClient._instance = db
    yield db
    SupabaseClient._instance = None


@pytest.fixture(autouse=True)
def redis_client():
    """Capture realtime publishes instead of talking to Redis."""
    client = MagicMock()
    with patch("app.websocket.broadcast.get_redis_client", return_value=client):
        yield client


# =============================================================================
# Data Fixtures
# =============================================================================

def make_builder(db: FakeSupabase, name: str = "Ada", is_creator: bool = False) -> dict:
    """Seed a builder profile for a fresh auth user."""
    return db.seed(
        "builders",
        user_id=str(uuid4()),
        name=name,
        bio=None,
        avatar_url=f"https://img.example.com/{name.lower()}.png",
        website_url=None,
        twitter_handle=None,
        is_creator=is_creator,
    )


def make_project(db: FakeSupabase, builder: dict, title: str = "Tiny Synth", **fields) -> dict:
    """Seed a project owned by `builder`."""
    data = {
        "builder_id": builder["id"],
        "title": title,
        "tagline": "A pocket synthesizer made from scrap",
        "description": None,
        "cover_image_url": None,
        "public_slug": title.lower().replace(" ", "-"),
        "mood": None,
        "follower_count": 0,
    }
    data.update(fields)
    return db.seed("projects", **data)


@pytest.fixture
def creator(fake_db):
    """A builder who shares projects."""
    return make_builder(fake_db, name="Ada", is_creator=True)


@pytest.fixture
def supporter(fake_db):
    """A builder who supports others."""
    return make_builder(fake_db, name="Grace", is_creator=False)


@pytest.fixture
def project(fake_db, creator):
    """A project owned by the creator."""
    return make_project(fake_db, creator)


@pytest.fixture
def post(fake_db, project):
    """An update on the creator's project."""
    return fake_db.seed(
        "posts",
        project_id=project["id"],
        content="Soldered the first oscillator!",
        images=[],
        like_count=0,
    )
