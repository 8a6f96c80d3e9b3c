"""
Tool response formatter for the MCP protocol.

This module builds the MCP call results returned by tools, both for successful
executions and for the taxonomy-tagged error payloads.
"""

import json
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from catalog_mcp.errors import ErrorType

SUCCESS_PREFIX = "✅ Success"
ERROR_PREFIX = "❌ Error"
UNKNOWN_ERROR = "Unknown error occurred"

STATUS_SUCCESS = "success"
STATUS_ERROR = "error"

_HTTP_STATUS = {
    ErrorType.VALIDATION: "400",
    ErrorType.AUTHENTICATION: "401",
    ErrorType.AUTHORIZATION: "403",
    ErrorType.NOT_FOUND: "404",
    ErrorType.CONFLICT: "409",
    ErrorType.RATE_LIMIT: "429",
    ErrorType.NETWORK: "502",
    ErrorType.BACKSTAGE_API: "502",
    ErrorType.INTERNAL: "500",
    ErrorType.UNKNOWN: "500",
}

_TITLES = {
    ErrorType.VALIDATION: "Validation Error",
    ErrorType.AUTHENTICATION: "Authentication Failed",
    ErrorType.AUTHORIZATION: "Access Denied",
    ErrorType.NOT_FOUND: "Resource Not Found",
    ErrorType.CONFLICT: "Resource Conflict",
    ErrorType.RATE_LIMIT: "Rate Limit Exceeded",
    ErrorType.NETWORK: "Network Error",
    ErrorType.BACKSTAGE_API: "Backstage API Error",
    ErrorType.INTERNAL: "Internal Server Error",
    ErrorType.UNKNOWN: "Unknown Error",
}


def get_http_status_code(error_type: ErrorType) -> str:
    return _HTTP_STATUS.get(error_type, "500")


def get_error_title(error_type: ErrorType) -> str:
    return _TITLES.get(error_type, "Unknown Error")


class ToolResponseFormatter:
    """Formatter for MCP tool responses."""

    def text(self, text: str, is_error: bool = False) -> Dict[str, Any]:
        """
        Wrap text in an MCP call result.

        Args:
            text: The text content
            is_error: Whether the result reports a failure

        Returns:
            A dictionary shaped like an MCP CallToolResult
        """
        result: Dict[str, Any] = {"content": [{"type": "text", "text": text}]}
        if is_error:
            result["isError"] = True
        return result

    def json(self, data: Dict[str, Any], is_error: bool = False) -> Dict[str, Any]:
        """Serialize a response payload as pretty-printed JSON text."""
        return self.text(self.dumps(data), is_error=is_error)

    def formatted(
        self, data: Dict[str, Any], formatter: Optional[Callable[[Dict[str, Any]], str]] = None
    ) -> Dict[str, Any]:
        """
        Create a text result optimized for LLM consumption.

        Args:
            data: Response payload with a "status" key
            formatter: Optional function rendering a success payload

        Returns:
            An MCP call result with a single text item
        """
        if data.get("status") == STATUS_ERROR:
            message = (data.get("data") or {}).get("message") or UNKNOWN_ERROR
            return self.text(f"{ERROR_PREFIX}: {message}", is_error=True)
        if formatter is not None:
            return self.text(formatter(data))
        return self.text(self._default_success_text(data))

    def multi_content(
        self, data: Dict[str, Any], formatter: Optional[Callable[[Dict[str, Any]], str]] = None
    ) -> Dict[str, Any]:
        """Create a result with a human readable item followed by the raw JSON payload."""
        summary = self.formatted(data, formatter)
        summary["content"].append({"type": "text", "text": self.dumps(data)})
        return summary

    def standard_error(
        self,
        error: Any,
        error_type: ErrorType,
        tool_name: str,
        operation: str,
        additional_details: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Create a standardized error payload with JSON:API style metadata.

        Args:
            error: The error that occurred
            error_type: Classification of the error
            tool_name: Name of the tool where the error occurred
            operation: Operation being performed
            additional_details: Extra context merged into the error metadata

        Returns:
            The error payload
        """
        message = str(error)
        code = error_type.value
        return {
            "status": STATUS_ERROR,
            "data": {
                "message": message,
                "code": code,
                "source": {"tool": tool_name, "operation": operation},
            },
            "errors": [
                {
                    "status": get_http_status_code(error_type),
                    "code": code,
                    "title": get_error_title(error_type),
                    "detail": message,
                    "source": {"parameter": operation},
                    "meta": {
                        "tool": tool_name,
                        "timestamp": datetime.now(timezone.utc).isoformat(),
                        **(additional_details or {}),
                    },
                }
            ],
        }

    def simple_error(self, message: str) -> Dict[str, Any]:
        """Create the backward-compatible error payload."""
        return {"status": STATUS_ERROR, "data": {"message": message}}

    def dumps(self, data: Any) -> str:
        return json.dumps(self._prepare_result_for_json(data), indent=2, default=str, ensure_ascii=False)

    def _default_success_text(self, data: Dict[str, Any]) -> str:
        if data.get("data") is None:
            return SUCCESS_PREFIX
        return f"{SUCCESS_PREFIX}: {self.dumps(data['data'])}"

    def _prepare_result_for_json(self, result: Any) -> Any:
        """
        Prepare a result for JSON serialization.

        Args:
            result: The result to prepare

        Returns:
            The prepared result
        """
        if hasattr(result, "model_dump") and callable(result.model_dump):
            return result.model_dump(mode="json")

        if hasattr(result, "to_dict") and callable(result.to_dict):
            return result.to_dict()

        if isinstance(result, (list, tuple)):
            return [self._prepare_result_for_json(item) for item in result]
        elif isinstance(result, dict):
            return {k: self._prepare_result_for_json(v) for k, v in result.items()}

        return result


def format_entity_list(data: Dict[str, Any]) -> str:
    """Summarize a list of entities by kind."""
    payload = data.get("data")
    if isinstance(payload, dict):
        payload = payload.get("items")
    if not isinstance(payload, list):
        return "No entities found"
    if not payload:
        return f"{SUCCESS_PREFIX}: No entities found"

    by_kind: Dict[str, int] = {}
    for entity in payload:
        kind = str((entity or {}).get("kind", "unknown"))
        by_kind[kind] = by_kind.get(kind, 0) + 1

    summary = ", ".join(f"{kind}: {count}" for kind, count in by_kind.items())
    return f"Found {len(payload)} entities ({summary})"


def format_entity(data: Dict[str, Any]) -> str:
    entity = data.get("data")
    if not entity:
        return f"{SUCCESS_PREFIX}: Entity not found"

    metadata = entity.get("metadata", {})
    tags: List[str] = metadata.get("tags") or []
    return (
        f"Found {entity.get('kind')} entity: {metadata.get('namespace', 'default')}/{metadata.get('name')}\n"
        f"  Title: {metadata.get('title') or 'No title'}\n"
        f"  Description: {metadata.get('description') or 'No description'}\n"
        f"  Tags: {', '.join(tags) if tags else 'None'}"
    )


def format_location(data: Dict[str, Any]) -> str:
    location = data.get("data")
    if not location:
        return f"{SUCCESS_PREFIX}: Location not found"

    tags = location.get("tags") or []
    return (
        "Location found:\n"
        f"  ID: {location.get('id', 'unknown')}\n"
        f"  Type: {location.get('type', 'unknown')}\n"
        f"  Target: {location.get('target', 'unknown')}\n"
        f"  Tags: {', '.join(tags) if tags else 'None'}"
    )


formatter = ToolResponseFormatter()
