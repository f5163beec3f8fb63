# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoint
# - users.py: User listing, creation and lookup
#
# Each router is mounted in main.py with a URL prefix under /api.
# =============================================================================

from . import health
from . import users

__all__ = [
    "health",
    "users",
]
