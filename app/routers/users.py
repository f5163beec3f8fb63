# =============================================================================
# app/routers/users.py - User Endpoints
# =============================================================================
# Handles listing, creating and fetching users.
# All state lives in the UserStore injected via app.dependencies.
#
# The create endpoint reads the raw body instead of declaring a pydantic body
# parameter, so malformed input yields our own 400 envelope rather than
# FastAPI's 422 validation error.
# =============================================================================

import re

from fastapi import APIRouter, Request, status

from app.dependencies import UserStoreDep
from app.exceptions import (
    InvalidRequestBodyError,
    InvalidUserIdError,
    MissingUserFieldsError,
    UserNotFoundError,
)
from core.models.response import ApiResponse
from core.models.user import User, UserCreate

router = APIRouter()

# Optional sign followed by ASCII digits
USER_ID_PATTERN = re.compile(r"[+-]?[0-9]+")

# Ids are 64-bit on the wire
MAX_USER_ID = 2**63 - 1


def parse_user_id(raw_id: str) -> int:
    """
    Parse the {id} path segment.

    Raises:
        InvalidUserIdError: If the segment is not a 64-bit integer
    """
    if not USER_ID_PATTERN.fullmatch(raw_id):
        raise InvalidUserIdError(raw_id)

    user_id = int(raw_id)
    if not -MAX_USER_ID - 1 <= user_id <= MAX_USER_ID:
        raise InvalidUserIdError(raw_id)
    return user_id


# =============================================================================
# Endpoints
# =============================================================================

@router.get("", response_model=ApiResponse[list[User]])
@router.get("/", response_model=ApiResponse[list[User]], include_in_schema=False)
async def list_users(store: UserStoreDep):
    """
    List all users in creation order.

    Returns an empty list (not an error) when there are no users.
    """
    return ApiResponse[list[User]].ok("Users retrieved successfully", store.list_users())


@router.post("", response_model=ApiResponse[User], status_code=status.HTTP_201_CREATED)
@router.post(
    "/",
    response_model=ApiResponse[User],
    status_code=status.HTTP_201_CREATED,
    include_in_schema=False,
)
async def create_user(request: Request, store: UserStoreDep):
    """
    Create a new user.

    Expects a JSON object with non-empty `name` and `email` strings.
    Nothing is stored unless both checks pass.
    """
    body = await request.body()
    try:
        payload = UserCreate.from_json_body(body)
    except ValueError:
        raise InvalidRequestBodyError()

    if not payload.is_complete:
        raise MissingUserFieldsError()

    user = store.create_user(name=payload.name, email=payload.email)
    return ApiResponse[User].ok("User created successfully", user)


@router.get("/{user_id}", response_model=ApiResponse[User])
async def get_user(user_id: str, store: UserStoreDep):
    """
    Get a single user by id.

    Returns 400 if the id is not an integer and 404 if no user has it.
    """
    parsed_id = parse_user_id(user_id)

    user = store.get_user(parsed_id)
    if user is None:
        raise UserNotFoundError(parsed_id)

    return ApiResponse[User].ok("User found", user)
