# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the FastAPI web application:
# - main.py: App factory, middleware setup, error handlers, uvicorn runner
# - config.py: Environment variable loading and settings
# - middleware.py: Request logging, error recovery, request ids, client IPs
# - routers/: API endpoint definitions organized by feature
#
# The app layer is thin - it handles HTTP concerns and delegates
# state to the core/ package.
# =============================================================================
