# =============================================================================
# core/models/user.py - User Schemas
# =============================================================================
# These models define the API contract for user operations:
# - User: A registered person as stored and returned by the API
# - UserCreate: Input body for POST /api/users
#
# Validation is deliberately minimal. UserCreate only checks that the body is
# a JSON object whose name/email (when present) are strings or null. The "required"
# check (non-empty, no trimming) happens in the router so it can produce its
# own error message.
# =============================================================================

import json
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class User(BaseModel):
    """
    Schema for a user record.

    Returned by:
    - GET /api/users (as a list)
    - POST /api/users (the created user)
    - GET /api/users/{id}

    Example:
        {
            "id": 1,
            "name": "John Doe",
            "email": "john@example.com",
            "created_at": "2024-01-15T10:30:00Z"
        }
    """

    # Assigned by the store, never reused
    id: int = Field(
        ...,
        ge=1,
        description="Unique user identifier"
    )

    name: str = Field(
        ...,
        description="Display name"
    )

    email: str = Field(
        ...,
        description="Email address (not validated)"
    )

    # Fixed at creation time
    created_at: datetime = Field(
        ...,
        description="Timestamp when the user was created"
    )

    model_config = ConfigDict(frozen=True)


class UserCreate(BaseModel):
    """
    Schema for creating a user.

    Decoding is lenient in the same ways as a typical JSON-to-struct decoder:
    - only the first JSON value in the body is read (trailing data is ignored)
    - keys match field names case-insensitively ("Name", "EMAIL")
    - a null body or a null field counts as absent
    Missing fields default to empty strings so the router can report
    "Name and email are required" instead of a validation error.
    Unknown fields are ignored. Non-string values are rejected (strict mode).
    """

    name: str = Field(
        default="",
        examples=["Ann"],
        description="Display name"
    )

    email: str = Field(
        default="",
        examples=["ann@x.com"],
        description="Email address"
    )

    model_config = ConfigDict(strict=True)

    @model_validator(mode="before")
    @classmethod
    def normalize_keys(cls, data: Any) -> Any:
        """Fold key case and drop nulls; a null body becomes an empty object."""
        if data is None:
            return {}
        if not isinstance(data, dict):
            return data

        normalized: dict[str, Any] = {}
        for key, value in data.items():
            field = key.lower() if isinstance(key, str) else key
            if field in cls.model_fields and value is None:
                continue
            normalized[field] = value
        return normalized

    @classmethod
    def from_json_body(cls, body: bytes) -> "UserCreate":
        """
        Decode a request body.

        Raises:
            ValueError: If the body does not start with a JSON value, or the
                value is not an object with string name/email
                (pydantic.ValidationError is a ValueError)
        """
        text = body.decode("utf-8").lstrip()
        value, _ = json.JSONDecoder().raw_decode(text)
        return cls.model_validate(value)

    @property
    def is_complete(self) -> bool:
        """True when both name and email are non-empty."""
        return bool(self.name) and bool(self.email)
