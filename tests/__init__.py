# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the UserHub API:
# - test_models.py: Unit tests for Pydantic model validation
# - test_user_store.py: Tests for the in-memory user store
# - test_config.py: Settings loading and defaults
# - test_middleware.py: Request ids, client IPs, error recovery, CORS
# - test_api.py: Integration tests for API endpoints
# - test_main.py: Server runner (port handling, startup banner)
#
# Run tests with: pytest
# =============================================================================
