# =============================================================================
# core/models/response.py - Response Envelope
# =============================================================================
# Every API response (success or failure) is wrapped in the same envelope:
#
#     {"success": true, "message": "User found", "data": {...}}
#     {"success": false, "message": "User not found"}
#
# ApiResponse is generic over its payload so each endpoint declares exactly
# what it returns (ApiResponse[User], ApiResponse[list[User]], ...).
# =============================================================================

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """
    Uniform response envelope.

    `data` is omitted from the JSON output when it is None. An empty list is
    still a payload and is always serialized.
    """

    success: bool = Field(
        ...,
        description="Whether the request succeeded"
    )

    message: str = Field(
        ...,
        description="Human-readable status message"
    )

    data: T | None = Field(
        default=None,
        description="Response payload (absent on failure)"
    )

    @classmethod
    def ok(cls, message: str, data: T) -> "ApiResponse[T]":
        """Build a success envelope."""
        return cls(success=True, message=message, data=data)

    @classmethod
    def fail(cls, message: str) -> "ApiResponse[Any]":
        """Build a failure envelope (no payload)."""
        return cls(success=False, message=message)

    def to_content(self) -> dict[str, Any]:
        """Serialize to a JSON-ready dict, dropping `data` when absent."""
        content = self.model_dump(mode="json")
        if self.data is None:
            content.pop("data", None)
        return content
