"""Application error taxonomy.

Every error that reaches the HTTP boundary is one of these kinds.
Messages are shown to users; details never include secrets or parse errors.
"""

from typing import Any, Dict, Optional

from pydantic import ValidationError as PydanticValidationError

from tax_invoice_api.config import constants


class AppError(Exception):
    """Base class for errors that map to an HTTP response."""

    code = "INTERNAL_SERVER_ERROR"
    status_code = 500

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details
        self.headers = headers or {}

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.message, "code": self.code}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class ValidationError(AppError):
    """Malformed or missing input."""

    code = "VALIDATION_ERROR"
    status_code = 400

    @classmethod
    def from_pydantic(cls, message: str, error: PydanticValidationError) -> "ValidationError":
        """Field-level details from a pydantic error, never echoing the submitted value."""
        details = [
            {"field": ".".join(str(p) for p in e["loc"]), "message": e["msg"]}
            for e in error.errors()
        ]
        return cls(message, details=details)


class AuthenticationError(AppError):
    """Credentials did not match."""

    code = "UNAUTHORIZED"
    status_code = 401


class RateLimitError(AppError):
    """Too many requests from one client key."""

    code = "RATE_LIMIT_EXCEEDED"
    status_code = 429

    def __init__(self, message: str = constants.MSG_RATE_LIMITED, retry_after: Optional[int] = None):
        headers = {"Retry-After": str(retry_after)} if retry_after is not None else None
        super().__init__(message, headers=headers)
        self.retry_after = retry_after


class ConfigurationError(AppError):
    """Server secrets missing or invalid. Never says which one."""

    code = "SERVER_NOT_CONFIGURED"
    status_code = 500


class UpstreamError(AppError):
    """Shopify transport failure; carries the upstream status code."""

    code = "BAD_REQUEST"
    status_code = 502


class GraphQLError(AppError):
    """Shopify accepted the call but returned query-level errors."""

    code = "GRAPHQL_ERROR"
    status_code = 400


class MethodNotAllowedError(AppError):
    """HTTP method not supported by the resource."""

    code = "METHOD_NOT_ALLOWED"
    status_code = 405


class InternalError(AppError):
    """Unclassified failure."""

    code = "INTERNAL_SERVER_ERROR"
    status_code = 500

    def __init__(self, message: str = constants.MSG_INTERNAL_ERROR):
        super().__init__(message)
