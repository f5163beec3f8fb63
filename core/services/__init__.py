# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .user_store import SAMPLE_USERS, UserStore

__all__ = [
    "SAMPLE_USERS",
    "UserStore",
]
