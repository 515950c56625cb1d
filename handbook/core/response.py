"""Uniform response envelope shared by every endpoint."""

from typing import Generic, Literal, TypeVar

from pydantic import BaseModel


T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Envelope of the form ``{status, data?, message?, error?}``."""

    status: Literal["success", "error"]
    data: T | None = None
    message: str | None = None
    error: str | None = None


def success_response(data: T | None = None, message: str | None = None) -> ApiResponse[T]:
    """Wrap a result in a success envelope."""
    return ApiResponse(status="success", data=data, message=message)


def error_content(message: str, error: str | None = None) -> dict[str, str]:
    """Build the JSON body of an error envelope."""
    return ApiResponse(status="error", message=message, error=error or message).model_dump(exclude_none=True)
