"""
Standalone Builder - Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for every failure the handlers report.
Why:   Each exception carries the HTTP status and the client-safe message, so
       the global handlers in main.py can produce the flat `{"error": ...}`
       body without any try/except in the routes.
How:   Services and dependencies raise; handlers registered in main.py catch.

Exception Hierarchy:
    StandaloneBuilderError (base)      → 500
    ├── ValidationError                → 400 Bad Request
    ├── AuthenticationError            → 401 (no / malformed bearer token)
    ├── InvalidTokenError              → 401 (backend rejected the token)
    ├── ForbiddenError                 → 403 (admin-only route)
    ├── NotFoundError                  → 404 (missing or not owned)
    ├── MethodNotAllowedError          → 405
    ├── ConfigurationError             → 500 (server settings missing)
    └── BackendServiceError            → 500 (Supabase call failed)

`context` is logged server-side only. `details` is the one extra field that
may be returned to the client (save failures report the backend message,
matching what the editor has always displayed).
"""

from typing import Any, Dict, Optional


class StandaloneBuilderError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:     Client-facing error description
        status_code: HTTP status used by the global handler
        context:     Additional debug info (logged, NOT returned)
        details:     Optional extra text returned next to `error`
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "Internal server error",
        context: Optional[Dict[str, Any]] = None,
        details: Optional[str] = None,
    ):
        self.message = message
        self.context = context or {}
        self.details = details
        super().__init__(self.message)

    def to_payload(self) -> Dict[str, Any]:
        """Response body for this error."""
        payload: Dict[str, Any] = {"error": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class ValidationError(StandaloneBuilderError):
    """
    Raised when client input fails validation.

    When:    Missing title on save, missing page id on query-string routes.
    HTTP:    400 Bad Request (not 422; the editor only knows 400)
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class AuthenticationError(StandaloneBuilderError):
    """No `Authorization: Bearer <token>` header on an authenticated route."""

    status_code = 401

    def __init__(self, message: str = "Missing authentication token"):
        super().__init__(message=message)


class InvalidTokenError(StandaloneBuilderError):
    """
    The backend could not resolve the bearer token to a user.

    Expired sessions land here too; the client's answer to both is the
    same (sign in again), so one message covers them.
    """

    status_code = 401

    def __init__(
        self,
        message: str = "Invalid or expired token",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ForbiddenError(StandaloneBuilderError):
    status_code = 403

    def __init__(self, message: str = "Admin access required"):
        super().__init__(message=message)


class NotFoundError(StandaloneBuilderError):
    """
    Raised when a page does not exist OR belongs to someone else.

    Both cases share the 404 so callers cannot fish for other users' ids.
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "Page",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = str(resource_id)
        super().__init__(message=f"{resource} not found", context=ctx)


class MethodNotAllowedError(StandaloneBuilderError):
    status_code = 405

    def __init__(self, message: str = "Method not allowed"):
        super().__init__(message=message)


class ConfigurationError(StandaloneBuilderError):
    """
    Server-side Supabase settings are missing.

    HTTP: 500. The message never names the missing variable; that goes to
    the server log instead.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "Server configuration error",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class BackendServiceError(StandaloneBuilderError):
    """
    A Supabase auth or table call failed.

    What:    Wraps SDK exceptions (PostgREST API errors, auth API errors,
             transport failures) so nothing SDK-specific leaks past the
             backend service.
    HTTP:    500. Services usually re-raise with an operation-specific
             message ("Failed to fetch pages").
    """

    status_code = 500

    def __init__(
        self,
        message: str = "Backend request failed",
        context: Optional[Dict[str, Any]] = None,
        details: Optional[str] = None,
    ):
        super().__init__(message=message, context=context, details=details)
