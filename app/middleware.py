# =============================================================================
# app/middleware.py - Request Middleware Chain
# =============================================================================
# Cross-cutting behavior applied to every request, outermost first:
#
#   1. log_requests      - one access log line (method, path, status, latency)
#   2. recover_errors    - unhandled exceptions become a 500 envelope
#   3. assign_request_id - X-Request-ID in, X-Request-ID out
#   4. resolve_real_ip   - client IP from proxy headers (informational)
#
# CORS is added separately in main.py and sits inside this chain.
#
# Usage:
#   register_middleware(app)
# =============================================================================

import logging
import time
import uuid

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.logging_config import request_id_var
from core.models.response import ApiResponse

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Checked in order; X-Forwarded-For is handled separately (first hop wins)
CLIENT_IP_HEADERS = ("True-Client-IP", "X-Real-IP")


# =============================================================================
# Helpers
# =============================================================================

def resolve_client_ip(request: Request) -> str | None:
    """
    Determine the originating client IP.

    Prefers proxy headers over the socket peer address.
    """
    for header in CLIENT_IP_HEADERS:
        value = request.headers.get(header)
        if value:
            return value.strip()

    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    return request.client.host if request.client else None


def new_request_id() -> str:
    return uuid.uuid4().hex


# =============================================================================
# Middleware
# =============================================================================

async def resolve_real_ip(request: Request, call_next):
    request.state.client_ip = resolve_client_ip(request)
    return await call_next(request)


async def assign_request_id(request: Request, call_next):
    """Reuse the caller's request id or mint a new one, and echo it back."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or new_request_id()
    request.state.request_id = request_id
    token = request_id_var.set(request_id)
    try:
        response = await call_next(request)
    finally:
        request_id_var.reset(token)

    response.headers[REQUEST_ID_HEADER] = request_id
    return response


async def recover_errors(request: Request, call_next):
    """
    Turn any unhandled exception into a generic 500 envelope.

    The exception is logged with its traceback and the server keeps running.
    """
    try:
        return await call_next(request)
    except Exception as e:
        logger.exception(
            f"Unhandled error on {request.method} {request.url.path}: {e}",
            extra={"request_id": getattr(request.state, "request_id", "-")},
        )
        return JSONResponse(
            status_code=500,
            content=ApiResponse.fail("Internal server error").to_content(),
        )


async def log_requests(request: Request, call_next):
    """Log one line per request once the response status is known."""
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000

    logger.info(
        f'"{request.method} {request.url.path}" {response.status_code} '
        f"from {getattr(request.state, 'client_ip', None) or '-'} "
        f"in {elapsed_ms:.2f}ms",
        extra={"request_id": getattr(request.state, "request_id", "-")},
    )
    return response


def register_middleware(app: FastAPI) -> None:
    """
    Install the middleware chain.

    Starlette wraps each newly added middleware around the existing ones,
    so they are added innermost first.
    """
    app.middleware("http")(resolve_real_ip)
    app.middleware("http")(assign_request_id)
    app.middleware("http")(recover_errors)
    app.middleware("http")(log_requests)
