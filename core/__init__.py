# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the business logic:
# - models/: Pydantic schemas for data validation
# - services/: Builders, projects, posts, milestones, support and karma
#
# Routes stay thin; rules like ownership checks, counter reconciliation and
# karma awards live here.
# =============================================================================
