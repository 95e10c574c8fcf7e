"""
Standalone Builder - Client Result Type
========================================

What:  Success/error value returned by every client method that touches the
       network.
Why:   Callers branch on `result.ok` instead of wrapping each call in
       try/except; `unwrap()` is there for code that prefers exceptions.

Example:
    result = await pages.get_page(page_id)
    if result.ok:
        render(result.data)
    else:
        show_error(result.error)        # server's {"error": ...} text
"""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ClientError(Exception):
    """Raised by ServiceResult.unwrap() on an error result."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ServiceResult(BaseModel, Generic[T]):
    ok: bool
    data: Optional[T] = None
    error: Optional[str] = None
    status_code: Optional[int] = None

    model_config = {"arbitrary_types_allowed": True}

    @classmethod
    def success(cls, data: Optional[T] = None, status_code: Optional[int] = None) -> "ServiceResult[T]":
        return cls(ok=True, data=data, status_code=status_code)

    @classmethod
    def failure(cls, error: str, status_code: Optional[int] = None) -> "ServiceResult[T]":
        return cls(ok=False, error=error, status_code=status_code)

    def unwrap(self) -> T:
        if not self.ok:
            raise ClientError(self.error or "Request failed", self.status_code)
        return self.data
