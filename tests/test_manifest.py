"""
Tests for the tool manifest builder.
"""

import json
import os
import tempfile
import unittest

from pydantic import BaseModel

from catalog_mcp.tools.manifest import ManifestBuilder
from catalog_mcp.tools.models import ToolMetadata


class Params(BaseModel):
    type: str
    target: str


class TestManifestBuilder(unittest.TestCase):
    """Test case for the ManifestBuilder class."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.TemporaryDirectory()
        self.builder = ManifestBuilder()

    def tearDown(self):
        """Clean up test fixtures."""
        self.temp_dir.cleanup()

    def test_params_from_model(self):
        entry = self.builder.add(ToolMetadata("add_location", "Add a location.", Params))
        self.assertEqual(entry.params, ["type", "target"])

    def test_params_from_json_schema(self):
        schema = {"type": "object", "properties": {"uid": {"type": "string"}}}
        entry = self.builder.add(ToolMetadata("remove", "Remove.", schema))
        self.assertEqual(entry.params, ["uid"])

    def test_no_params(self):
        """Tools without a shape, or with an opaque one, list no params."""
        self.assertEqual(self.builder.add(ToolMetadata("a", "A.")).params, [])
        self.assertEqual(self.builder.add(ToolMetadata("b", "B.", object())).params, [])

    def test_entries_keep_registration_order(self):
        for name in ("c", "a", "b"):
            self.builder.add(ToolMetadata(name, name.upper()))
        self.assertEqual([entry.name for entry in self.builder.entries], ["c", "a", "b"])
        self.assertEqual(len(self.builder), 3)

    def test_export_writes_pretty_json(self):
        """Exported manifests are two-space indented JSON arrays."""
        self.builder.add(ToolMetadata("add_location", "Add a location.", Params))
        path = os.path.join(self.temp_dir.name, "tools-manifest.json")

        self.assertTrue(self.builder.export(path))

        with open(path) as f:
            content = f.read()
        self.assertEqual(
            json.loads(content), [{"name": "add_location", "description": "Add a location.", "params": ["type", "target"]}]
        )
        self.assertIn('\n  {\n    "name"', content)
        self.assertEqual(ManifestBuilder.load(path), self.builder.entries)

    def test_export_failure_returns_false(self):
        """Write failures are reported, not raised."""
        self.builder.add(ToolMetadata("a", "A."))
        path = os.path.join(self.temp_dir.name, "missing", "manifest.json")
        self.assertFalse(self.builder.export(path))


if __name__ == "__main__":
    unittest.main()
