"""
Tests for tool metadata validation.
"""

import unittest

from pydantic import BaseModel

from catalog_mcp.errors import MetadataValidationError
from catalog_mcp.tools.models import ToolMetadata
from catalog_mcp.tools.validator import ToolValidator


class Params(BaseModel):
    uid: str


class TestToolValidator(unittest.TestCase):
    """Test case for the ToolValidator class."""

    def setUp(self):
        """Set up test fixtures."""
        self.validator = ToolValidator()

    def test_valid_metadata(self):
        self.validator.validate(ToolMetadata("remove_entity_by_uid", "Remove an entity.", Params), "source.py")

    def test_missing_description(self):
        """Empty descriptions are rejected with a readable message."""
        with self.assertRaises(MetadataValidationError) as ctx:
            self.validator.validate(ToolMetadata("x", ""), "x_tool.py")

        self.assertIn("x_tool.py", str(ctx.exception))
        self.assertIn("description", str(ctx.exception))

    def test_whitespace_name(self):
        with self.assertRaises(MetadataValidationError):
            self.validator.validate(ToolMetadata("   ", "desc"))

    def test_non_positive_batch_size(self):
        with self.assertRaises(MetadataValidationError) as ctx:
            self.validator.validate(ToolMetadata("b", "desc", max_batch_size=0))
        self.assertIn("max_batch_size", str(ctx.exception))

    def test_opaque_shape_warns(self):
        """Shapes that cannot be introspected are accepted with a warning."""
        with self.assertLogs("catalog_mcp.tools.validator", level="WARNING") as logs:
            self.validator.validate(ToolMetadata("opaque", "desc", object()))
        self.assertIn("not introspectable", logs.output[0])


if __name__ == "__main__":
    unittest.main()
