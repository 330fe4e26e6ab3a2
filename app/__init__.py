# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the FastAPI web application:
# - main.py: App entry point, middleware setup, error handlers
# - config.py: Environment variable loading and settings
# - exceptions.py: API errors and their JSON handlers
# - auth/: Supabase JWT verification
# - routers/: API endpoint definitions organized by feature
# - websocket/: Realtime karma notifications
#
# The app layer is thin - it handles HTTP concerns and delegates
# business logic to the core/ package.
# =============================================================================
