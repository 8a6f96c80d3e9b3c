"""
Tests for the tool loader.
"""

import unittest
from unittest.mock import MagicMock

from pydantic import BaseModel

from catalog_mcp.tools.loader import ToolLoader
from catalog_mcp.tools.metadata import MetadataProvider, ToolMetadataRegistry
from catalog_mcp.tools.models import ToolMetadata
from catalog_mcp.tools.registrar import ToolRegistrar


class Params(BaseModel):
    entity_ref: str


class StaticDiscovery:
    """Discovery stub yielding a fixed list of candidates."""

    def __init__(self, candidates):
        self.candidates = candidates

    def discover(self):
        return iter(self.candidates)


def make_tool(name):
    async def execute(args, context):
        return {}

    return type(name, (), {"execute": staticmethod(execute)})


class TestToolLoader(unittest.TestCase):
    """Test case for the ToolLoader class."""

    def setUp(self):
        """Set up test fixtures."""
        self.registry = ToolMetadataRegistry()
        self.registrar = MagicMock(spec=ToolRegistrar)

    def _loader(self, candidates):
        return ToolLoader(
            StaticDiscovery(candidates),
            self.registrar,
            metadata_provider=MetadataProvider(self.registry),
        )

    def test_registers_valid_tools(self):
        good = make_tool("GoodTool")
        metadata = ToolMetadata("good", "A good tool.", Params)
        self.registry.register(good, metadata)

        loader = self._loader([(good, "good.py")])

        self.assertEqual(loader.register_all(), 1)
        self.registrar.register.assert_called_once_with(good, metadata)
        self.assertEqual([entry.to_dict() for entry in loader.manifest_entries], [
            {"name": "good", "description": "A good tool.", "params": ["entity_ref"]}
        ])

    def test_skips_tools_without_metadata(self):
        """Candidates without metadata are skipped with a warning."""
        orphan = make_tool("OrphanTool")
        loader = self._loader([(orphan, "orphan.py")])

        with self.assertLogs("catalog_mcp.tools.loader", level="WARNING") as logs:
            self.assertEqual(loader.register_all(), 0)

        self.registrar.register.assert_not_called()
        self.assertIn("No tool metadata found for OrphanTool", logs.output[0])

    def test_skips_invalid_metadata(self):
        """Invalid metadata never reaches the registrar."""
        bad = make_tool("BadTool")
        good = make_tool("GoodTool")
        self.registry.register(bad, ToolMetadata("bad", ""))
        self.registry.register(good, ToolMetadata("good", "Good."))

        loader = self._loader([(bad, "bad.py"), (good, "good.py")])

        self.assertEqual(loader.register_all(), 1)
        self.registrar.register.assert_called_once()
        self.assertEqual([entry.name for entry in loader.manifest_entries], ["good"])

    def test_registration_errors_propagate(self):
        """Binding failures abort the registration pass."""
        first = make_tool("FirstTool")
        second = make_tool("SecondTool")
        self.registry.register(first, ToolMetadata("dup", "First."))
        self.registry.register(second, ToolMetadata("dup", "Second."))
        self.registrar.register.side_effect = [None, ValueError("Tool with name 'dup' is already registered")]

        loader = self._loader([(first, "first.py"), (second, "second.py")])

        with self.assertRaises(ValueError):
            loader.register_all()
        self.assertEqual(len(loader.manifest_entries), 1)

    def test_export_manifest_delegates(self):
        loader = self._loader([])
        loader.manifest = MagicMock()
        loader.manifest.export.return_value = True

        self.assertTrue(loader.export_manifest("out.json"))
        loader.manifest.export.assert_called_once_with("out.json")


if __name__ == "__main__":
    unittest.main()
