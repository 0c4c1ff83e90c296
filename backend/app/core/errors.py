"""
Typed failures raised by services and repositories.

Each error carries the HTTP status and the user-facing message it maps to;
app.main registers one exception handler that renders them as
{"message": ..., "field": ...}.
"""
from typing import Optional


class AppError(Exception):
    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.message
        super().__init__(self.message)

    def to_body(self) -> dict:
        return {"message": self.message}


class ValidationError(AppError):
    """Malformed input. `field` names the first offending field."""
    status_code = 400

    def __init__(self, field: str, message: Optional[str] = None):
        self.field = field
        super().__init__(message or f"Invalid value for {field}")

    def to_body(self) -> dict:
        return {"message": self.message, "field": self.field}


class Unauthorized(AppError):
    status_code = 401
    message = "Unauthorized"


class NotFound(AppError):
    # Same answer for "never existed" and "belongs to someone else"
    status_code = 404
    message = "Place not found"


class NoRouteError(AppError):
    status_code = 404
    message = "Could not calculate route"


class UpstreamError(AppError):
    status_code = 500
    message = "Failed to fetch map data"
