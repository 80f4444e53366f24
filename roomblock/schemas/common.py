"""Tagged response envelope shared by every endpoint."""

from typing import Generic, TypeVar

from pydantic import BaseModel

from roomblock.domain.errors import ErrorCode

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """``{"success": true, "value": ...}`` or ``{"success": false, "error": "<CODE>"}``."""

    success: bool = True
    value: T | None = None
    error: ErrorCode | None = None
