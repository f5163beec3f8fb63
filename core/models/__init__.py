# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - user.py: User record and create-user input
# - response.py: Generic success/failure response envelope
#
# These models define the "contract" between API and clients.
# =============================================================================

from .response import ApiResponse
from .user import User, UserCreate

__all__ = [
    "ApiResponse",
    "User",
    "UserCreate",
]
