# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error leaves the API in the same envelope shape as a success:
#     {"success": false, "message": "..."}
# Clients tell errors apart by the HTTP status and the success flag.
# =============================================================================

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.models.response import ApiResponse


class UserHubException(Exception):
    """
    Base exception for the UserHub API.

    All custom exceptions inherit from this class and carry the HTTP
    status they map to.
    """

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def to_response(self) -> ApiResponse:
        """Convert exception to a failure envelope."""
        return ApiResponse.fail(self.message)


# =============================================================================
# Request Exceptions
# =============================================================================

class InvalidRequestBodyError(UserHubException):
    """Raised when the request body is not a JSON object of the right shape."""

    def __init__(self):
        super().__init__(message="Invalid request body", status_code=400)


class MissingUserFieldsError(UserHubException):
    """Raised when name or email is empty or absent."""

    def __init__(self):
        super().__init__(message="Name and email are required", status_code=400)


# =============================================================================
# User Exceptions
# =============================================================================

class InvalidUserIdError(UserHubException):
    """Raised when the {id} path segment is not an integer."""

    def __init__(self, raw_id: str):
        super().__init__(message="Invalid user ID", status_code=400)
        self.raw_id = raw_id


class UserNotFoundError(UserHubException):
    """Raised when a user ID doesn't exist."""

    def __init__(self, user_id: int):
        super().__init__(message="User not found", status_code=404)
        self.user_id = user_id


# =============================================================================
# Exception Handlers
# =============================================================================

async def userhub_exception_handler(
    request: Request,
    exc: UserHubException
) -> JSONResponse:
    """Convert UserHubException to a JSON envelope."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().to_content()
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """
    Wrap framework HTTP errors (unknown route, wrong method) in the envelope.

    Headers set by the framework (e.g. `Allow` on 405) are preserved.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=ApiResponse.fail(str(exc.detail)).to_content(),
        headers=getattr(exc, "headers", None),
    )
