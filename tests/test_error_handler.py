"""
Tests for error classification and the tool error handler.
"""

import asyncio
import json
import unittest
from unittest.mock import MagicMock

import aiohttp

from catalog_mcp.errors import (
    AuthorizationError,
    CatalogAPIError,
    ErrorType,
    NotFoundError,
    ValidationError,
)
from catalog_mcp.tools.error_handler import ToolErrorHandler, classify_error, sanitize_args


def payload_of(result):
    return json.loads(result["content"][0]["text"])


class TestClassifyError(unittest.TestCase):
    """Test case for classify_error."""

    def test_tagged_errors_win_over_message(self):
        """Tagged errors are classified by their tag, not their wording."""
        self.assertEqual(classify_error(ValidationError("resource not found in request")), ErrorType.VALIDATION)
        self.assertEqual(classify_error(NotFoundError("Entity")), ErrorType.NOT_FOUND)
        self.assertEqual(classify_error(CatalogAPIError("invalid upstream")), ErrorType.BACKSTAGE_API)
        self.assertEqual(classify_error(AuthorizationError()), ErrorType.AUTHORIZATION)

    def test_keyword_heuristic(self):
        cases = [
            ("Invalid entity ref", ErrorType.VALIDATION),
            ("Unauthorized", ErrorType.AUTHENTICATION),
            ("permission denied", ErrorType.AUTHORIZATION),
            ("Entity not found", ErrorType.NOT_FOUND),
            ("Location already exists", ErrorType.CONFLICT),
            ("Rate limit exceeded", ErrorType.RATE_LIMIT),
            ("Connection reset", ErrorType.NETWORK),
            ("Backstage returned 500", ErrorType.BACKSTAGE_API),
            ("something odd", ErrorType.INTERNAL),
        ]
        for message, expected in cases:
            with self.subTest(message=message):
                self.assertEqual(classify_error(RuntimeError(message)), expected)

    def test_keyword_groups_are_ordered(self):
        """Validation keywords are checked before not-found keywords."""
        self.assertEqual(classify_error(RuntimeError("invalid: entity not found")), ErrorType.VALIDATION)

    def test_non_exception(self):
        self.assertEqual(classify_error("boom"), ErrorType.UNKNOWN)
        self.assertEqual(classify_error(None), ErrorType.UNKNOWN)

    def test_aiohttp_errors(self):
        request_info = MagicMock()
        self.assertEqual(
            classify_error(aiohttp.ClientResponseError(request_info, (), status=404)), ErrorType.NOT_FOUND
        )
        self.assertEqual(
            classify_error(aiohttp.ClientResponseError(request_info, (), status=500)), ErrorType.BACKSTAGE_API
        )
        self.assertEqual(classify_error(aiohttp.ClientConnectionError()), ErrorType.NETWORK)
        self.assertEqual(classify_error(asyncio.TimeoutError()), ErrorType.NETWORK)


class TestSanitizeArgs(unittest.TestCase):
    def test_redacts_nested_sensitive_keys(self):
        args = {"name": "a", "apiToken": "t", "nested": {"password": "p", "items": [{"secret": "s"}]}}
        self.assertEqual(
            sanitize_args(args),
            {"name": "a", "apiToken": "[REDACTED]", "nested": {"password": "[REDACTED]", "items": [{"secret": "[REDACTED]"}]}},
        )

    def test_keeps_filter_keys(self):
        """Entity filter keys are field names, not credentials."""
        args = {"filter": [{"key": "kind", "values": ["Component"]}], "api_key": "k"}
        self.assertEqual(
            sanitize_args(args),
            {"filter": [{"key": "kind", "values": ["Component"]}], "api_key": "[REDACTED]"},
        )

    def test_leaves_scalars(self):
        self.assertEqual(sanitize_args("value"), "value")


class TestToolErrorHandler(unittest.IsolatedAsyncioTestCase):
    """Test case for the ToolErrorHandler class."""

    async def test_success_passthrough(self):
        async def ok(args, extra):
            return {"content": [], "extra": extra}

        result = await ToolErrorHandler().execute_tool("t", "op", ok, {}, 42)
        self.assertEqual(result, {"content": [], "extra": 42})

    async def test_standard_error(self):
        """Failures become standard error payloads with redacted args."""

        async def failing(args):
            raise NotFoundError("Entity component:default/x", details={"token": "x", "ref": "component:default/x"})

        result = await ToolErrorHandler().execute_tool("get_entity_by_ref", "lookup", failing, {"token": "abc"})

        self.assertTrue(result["isError"])
        payload = payload_of(result)
        self.assertEqual(payload["status"], "error")
        self.assertEqual(payload["data"]["code"], "NOT_FOUND")
        self.assertEqual(payload["data"]["message"], "Entity component:default/x not found")
        meta = payload["errors"][0]["meta"]
        self.assertEqual(meta["args"], {"token": "[REDACTED]"})
        self.assertEqual(meta["details"], {"ref": "component:default/x"})
        self.assertEqual(payload["errors"][0]["status"], "404")

    async def test_simple_error(self):
        async def failing(args):
            raise RuntimeError("boom")

        handler = ToolErrorHandler(error_format="simple")
        result = await handler.execute_tool("t", "list entities", failing, {})

        self.assertTrue(result["isError"])
        self.assertEqual(payload_of(result), {"status": "error", "data": {"message": "Failed to list entities: boom"}})

    def test_invalid_format(self):
        with self.assertRaises(ValueError):
            ToolErrorHandler(error_format="xml")


if __name__ == "__main__":
    unittest.main()
