"""
Tool error handling.

Classifies exceptions raised during tool execution and converts them into
uniform MCP error results.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Optional

import aiohttp

from catalog_mcp.errors import CatalogMCPError, ErrorType, is_sensitive_key
from catalog_mcp.tools.formatter import ToolResponseFormatter

logger = logging.getLogger(__name__)

REDACTED = "[REDACTED]"

ERROR_FORMAT_STANDARD = "standard"
ERROR_FORMAT_SIMPLE = "simple"

# Checked in order against the lower-cased message of untagged exceptions.
_KEYWORD_GROUPS = (
    (ErrorType.VALIDATION, ("validation", "invalid")),
    (ErrorType.AUTHENTICATION, ("unauthorized", "authentication")),
    (ErrorType.AUTHORIZATION, ("forbidden", "permission")),
    (ErrorType.NOT_FOUND, ("not found", "404")),
    (ErrorType.CONFLICT, ("conflict", "already exists")),
    (ErrorType.RATE_LIMIT, ("rate limit", "429")),
    (ErrorType.NETWORK, ("network", "timeout", "connection")),
    (ErrorType.BACKSTAGE_API, ("backstage", "api")),
)

_STATUS_TYPES = {
    400: ErrorType.VALIDATION,
    401: ErrorType.AUTHENTICATION,
    403: ErrorType.AUTHORIZATION,
    404: ErrorType.NOT_FOUND,
    409: ErrorType.CONFLICT,
    429: ErrorType.RATE_LIMIT,
}


def classify_error(error: Any) -> ErrorType:
    """
    Classify an error.

    Tagged errors report their own type and aiohttp errors are mapped from
    their status or class. Anything else is classified best-effort from its
    message.

    Args:
        error: The raised object

    Returns:
        The ErrorType for the error
    """
    if not isinstance(error, BaseException):
        return ErrorType.UNKNOWN

    if isinstance(error, CatalogMCPError):
        return error.error_type

    if isinstance(error, aiohttp.ClientResponseError):
        return _STATUS_TYPES.get(error.status, ErrorType.BACKSTAGE_API)

    if isinstance(error, (aiohttp.ClientConnectionError, asyncio.TimeoutError)):
        return ErrorType.NETWORK

    message = str(error).lower()
    for error_type, keywords in _KEYWORD_GROUPS:
        if any(keyword in message for keyword in keywords):
            return error_type

    return ErrorType.INTERNAL


def sanitize_args(args: Any) -> Any:
    """Redact values of sensitive keys, recursively."""
    if isinstance(args, dict):
        return {key: REDACTED if is_sensitive_key(key) else sanitize_args(value) for key, value in args.items()}
    if isinstance(args, list):
        return [sanitize_args(item) for item in args]
    return args


class ToolErrorHandler:
    """Executes tool functions and converts failures into structured results."""

    def __init__(self, error_format: str = ERROR_FORMAT_STANDARD, formatter: Optional[ToolResponseFormatter] = None):
        """
        Initialize the error handler.

        Args:
            error_format: "standard" for taxonomy-tagged payloads, "simple" for the legacy shape
            formatter: Response formatter, or None to create one
        """
        if error_format not in (ERROR_FORMAT_STANDARD, ERROR_FORMAT_SIMPLE):
            raise ValueError(f"Unsupported error format: {error_format}")
        self.error_format = error_format
        self.formatter = formatter if formatter is not None else ToolResponseFormatter()

    async def execute_tool(
        self,
        tool_name: str,
        operation: str,
        tool_fn: Callable[..., Awaitable[Dict[str, Any]]],
        args: Dict[str, Any],
        *fn_args: Any,
    ) -> Dict[str, Any]:
        """
        Execute a tool function with standardized error handling.

        Args:
            tool_name: Name of the tool for error reporting
            operation: Operation being performed
            tool_fn: Coroutine function to run, called with (args, *fn_args)
            args: The tool arguments
            *fn_args: Extra positional arguments for tool_fn

        Returns:
            The tool's result, or an error result if it raised
        """
        try:
            logger.debug(f"Executing tool: {tool_name} ({operation})")
            result = await tool_fn(args, *fn_args)
            logger.debug(f"Tool execution successful: {tool_name}")
            return result
        except Exception as e:
            return self.handle_tool_error(e, tool_name, operation, args)

    def handle_tool_error(self, error: Any, tool_name: str, operation: str, args: Any = None) -> Dict[str, Any]:
        """
        Convert an error raised by a tool into an MCP error result.

        Args:
            error: The error that occurred
            tool_name: Name of the tool that failed
            operation: Operation being performed
            args: Arguments passed to the tool

        Returns:
            MCP call result carrying the error payload
        """
        error_type = classify_error(error)
        log_record = error.to_log_dict() if isinstance(error, CatalogMCPError) else {"message": str(error)}
        logger.error(f"Tool execution failed: {tool_name} [{error_type.value}] {log_record}")

        if self.error_format == ERROR_FORMAT_SIMPLE:
            message = str(error) if isinstance(error, BaseException) else "Unknown error"
            payload = self.formatter.simple_error(f"Failed to {operation}: {message}")
        else:
            details: Dict[str, Any] = {"args": sanitize_args(args)}
            if isinstance(error, CatalogMCPError) and error.details:
                details["details"] = error.to_client_dict()["details"]
            payload = self.formatter.standard_error(error, error_type, tool_name, operation, details)

        return self.formatter.json(payload, is_error=True)
