# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains framework-agnostic logic:
# - models/: Pydantic schemas (users, response envelope)
# - services/: The in-memory user store
#
# Code in this package should NOT import from FastAPI.
# This keeps the logic testable and reusable.
# =============================================================================
