"""
Error taxonomy for the catalog MCP server.

Every error raised by the dispatch framework or the catalog client carries an
explicit ErrorType tag, a stable code and an HTTP-like status code.
"""

import re
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

SENSITIVE_KEYS = ("password", "token", "secret", "key")

_WORD_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])|[^A-Za-z0-9]+")


def is_sensitive_key(name: Any) -> bool:
    """
    Return True if a mapping key names a credential.

    The last word of the key decides, so "apiToken", "client_secret" and
    "private-key" match while "monkey" does not. A bare "key" is a plain
    field name, as in entity filters.
    """
    words = [word.lower() for word in _WORD_BOUNDARY.split(str(name)) if word]
    if not words or words[-1] not in SENSITIVE_KEYS:
        return False
    return words[-1] != "key" or len(words) > 1


class ErrorType(str, Enum):
    """Error classification shared by the error handler and the formatter."""

    VALIDATION = "VALIDATION_ERROR"
    AUTHENTICATION = "AUTHENTICATION_ERROR"
    AUTHORIZATION = "AUTHORIZATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    RATE_LIMIT = "RATE_LIMIT"
    NETWORK = "NETWORK_ERROR"
    BACKSTAGE_API = "BACKSTAGE_API_ERROR"
    INTERNAL = "INTERNAL_ERROR"
    UNKNOWN = "UNKNOWN_ERROR"


class CatalogMCPError(Exception):
    """Base class for all tagged errors."""

    error_type = ErrorType.INTERNAL

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int,
        is_operational: bool = True,
        details: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize the error.

        Args:
            message: Human readable message
            code: Stable machine readable code
            status_code: HTTP-like status code
            is_operational: True for expected/recoverable failures, False for defects
            details: Optional extra context
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.is_operational = is_operational
        self.details = details
        self.timestamp = datetime.now(timezone.utc)

    def to_log_dict(self) -> Dict[str, Any]:
        """Convert the error to a structured log record."""
        return {
            "name": type(self).__name__,
            "message": self.message,
            "code": self.code,
            "status_code": self.status_code,
            "is_operational": self.is_operational,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
        }

    def to_client_dict(self) -> Dict[str, Any]:
        """Convert the error to a client-safe dictionary without sensitive details."""
        result = {
            "name": type(self).__name__,
            "message": self.message,
            "code": self.code,
            "status_code": self.status_code,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.details:
            result["details"] = {k: v for k, v in self.details.items() if not is_sensitive_key(k)}
        return result


class ValidationError(CatalogMCPError):
    error_type = ErrorType.VALIDATION

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "VALIDATION_ERROR", 400, True, details)


class MetadataValidationError(ValidationError):
    """Raised when tool metadata does not satisfy the metadata contract."""


class AuthenticationError(CatalogMCPError):
    error_type = ErrorType.AUTHENTICATION

    def __init__(self, message: str = "Authentication required", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "AUTHENTICATION_ERROR", 401, True, details)


class AuthorizationError(CatalogMCPError):
    error_type = ErrorType.AUTHORIZATION

    def __init__(self, message: str = "Insufficient permissions", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "AUTHORIZATION_ERROR", 403, True, details)


class NotFoundError(CatalogMCPError):
    error_type = ErrorType.NOT_FOUND

    def __init__(self, resource: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(f"{resource} not found", "NOT_FOUND_ERROR", 404, True, details)


class ConflictError(CatalogMCPError):
    error_type = ErrorType.CONFLICT

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "CONFLICT_ERROR", 409, True, details)


class RateLimitError(CatalogMCPError):
    error_type = ErrorType.RATE_LIMIT

    def __init__(self, message: str, retry_after: Optional[float] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "RATE_LIMIT_ERROR", 429, True, {"retry_after": retry_after, **(details or {})})
        self.retry_after = retry_after


class NetworkError(CatalogMCPError):
    error_type = ErrorType.NETWORK

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "NETWORK_ERROR", 502, True, details)


class CatalogAPIError(CatalogMCPError):
    """Error reported by the remote catalog service."""

    error_type = ErrorType.BACKSTAGE_API

    def __init__(self, message: str, status_code: int = 502, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "BACKSTAGE_API_ERROR", status_code, True, details)


class ConfigurationError(CatalogMCPError):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "CONFIGURATION_ERROR", 500, False, details)


class InternalServerError(CatalogMCPError):
    def __init__(self, message: str = "Internal server error", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "INTERNAL_SERVER_ERROR", 500, False, details)


class ToolExecutionError(CatalogMCPError):
    def __init__(
        self,
        tool_name: str,
        operation: str,
        original_error: Optional[BaseException] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            f"Tool execution failed: {tool_name}.{operation}",
            "TOOL_EXECUTION_ERROR",
            500,
            True,
            {
                "tool": tool_name,
                "operation": operation,
                "original_error": str(original_error) if original_error is not None else None,
                **(details or {}),
            },
        )


class OperationTimeoutError(CatalogMCPError):
    error_type = ErrorType.NETWORK

    def __init__(self, operation: str, timeout: float, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            f"Operation timed out: {operation}",
            "TIMEOUT_ERROR",
            408,
            True,
            {"operation": operation, "timeout": timeout, **(details or {})},
        )
