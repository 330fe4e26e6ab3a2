# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the I Believe In You API:
# - fakes.py: In-memory stand-in for the Supabase client
# - test_karma.py / test_slugs.py / test_models.py: Pure logic and schemas
# - test_*_service.py: Services against the in-memory database
# - test_routes.py: API endpoints through FastAPI's TestClient
# - test_realtime.py: JWT verification and the karma WebSocket
#
# Run tests with: pytest
# =============================================================================
