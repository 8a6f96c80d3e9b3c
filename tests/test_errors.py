"""
Tests for the error taxonomy.
"""

import unittest

from catalog_mcp.errors import (
    AuthenticationError,
    CatalogAPIError,
    ConfigurationError,
    ErrorType,
    MetadataValidationError,
    NotFoundError,
    OperationTimeoutError,
    RateLimitError,
    ToolExecutionError,
    ValidationError,
    is_sensitive_key,
)


class TestCatalogMCPError(unittest.TestCase):
    """Test case for the tagged error classes."""

    def test_error_tags(self):
        """Each error carries its classification, code and status."""
        cases = [
            (ValidationError("bad"), ErrorType.VALIDATION, "VALIDATION_ERROR", 400),
            (AuthenticationError(), ErrorType.AUTHENTICATION, "AUTHENTICATION_ERROR", 401),
            (NotFoundError("Entity"), ErrorType.NOT_FOUND, "NOT_FOUND_ERROR", 404),
            (RateLimitError("slow down", 30), ErrorType.RATE_LIMIT, "RATE_LIMIT_ERROR", 429),
            (CatalogAPIError("boom", status_code=503), ErrorType.BACKSTAGE_API, "BACKSTAGE_API_ERROR", 503),
            (OperationTimeoutError("get", 5), ErrorType.NETWORK, "TIMEOUT_ERROR", 408),
        ]
        for error, error_type, code, status in cases:
            with self.subTest(error=type(error).__name__):
                self.assertEqual(error.error_type, error_type)
                self.assertEqual(error.code, code)
                self.assertEqual(error.status_code, status)

    def test_metadata_validation_error_is_validation_error(self):
        """Metadata errors are classified as validation errors."""
        error = MetadataValidationError("missing description")
        self.assertIsInstance(error, ValidationError)
        self.assertEqual(error.error_type, ErrorType.VALIDATION)

    def test_not_found_message(self):
        self.assertEqual(NotFoundError("Entity component:default/foo").message, "Entity component:default/foo not found")

    def test_non_operational_errors(self):
        """Configuration errors are defects, not operational failures."""
        self.assertFalse(ConfigurationError("no url").is_operational)
        self.assertTrue(ValidationError("bad").is_operational)

    def test_rate_limit_retry_after_in_details(self):
        error = RateLimitError("slow down", retry_after=12)
        self.assertEqual(error.retry_after, 12)
        self.assertEqual(error.details["retry_after"], 12)

    def test_tool_execution_error_details(self):
        error = ToolExecutionError("get_entities", "list", ValueError("oops"))
        self.assertEqual(error.message, "Tool execution failed: get_entities.list")
        self.assertEqual(error.details["original_error"], "oops")

    def test_to_client_dict_drops_sensitive_details(self):
        """Client dictionaries never expose sensitive detail keys."""
        error = ValidationError("bad", details={"token": "abc", "field": "name"})
        client = error.to_client_dict()
        self.assertEqual(client["details"], {"field": "name"})
        self.assertNotIn("is_operational", client)

    def test_sensitive_key_names(self):
        for name in ("password", "token", "apiToken", "client_secret", "private-key", "APIKey", "api_key"):
            self.assertTrue(is_sensitive_key(name), name)
        for name in ("key", "monkey", "entity_ref", "tokens", "target"):
            self.assertFalse(is_sensitive_key(name), name)

    def test_to_log_dict_keeps_everything(self):
        error = ValidationError("bad", details={"token": "abc"})
        record = error.to_log_dict()
        self.assertEqual(record["name"], "ValidationError")
        self.assertEqual(record["details"], {"token": "abc"})
        self.assertTrue(record["is_operational"])


if __name__ == "__main__":
    unittest.main()
