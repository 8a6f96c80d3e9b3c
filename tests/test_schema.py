"""
Tests for parameter shape helpers.
"""

import unittest
from typing import Optional

from pydantic import BaseModel

from catalog_mcp.tools.schema import is_introspectable, param_names, to_json_schema


class Params(BaseModel):
    entity_ref: str
    fields: Optional[list] = None


class TestParamNames(unittest.TestCase):
    def test_model_fields_in_declared_order(self):
        self.assertEqual(param_names(Params), ["entity_ref", "fields"])

    def test_object_schema_properties(self):
        schema = {"type": "object", "properties": {"b": {"type": "string"}, "a": {"type": "integer"}}}
        self.assertEqual(param_names(schema), ["b", "a"])

    def test_object_schema_without_properties(self):
        self.assertEqual(param_names({"type": "object"}), [])
        self.assertEqual(param_names({"type": "object", "additionalProperties": True}), [])
        self.assertTrue(is_introspectable({"type": "object"}))

    def test_absent_or_opaque_shape(self):
        """Shapes that cannot be introspected list no params."""
        self.assertEqual(param_names(None), [])
        self.assertEqual(param_names({"type": "string"}), [])
        self.assertEqual(param_names(object()), [])
        self.assertFalse(is_introspectable({"type": "array", "properties": {}}))


class TestToJsonSchema(unittest.TestCase):
    def test_none_is_empty_object(self):
        self.assertEqual(to_json_schema(None), {"type": "object", "properties": {}})

    def test_model_schema(self):
        schema = to_json_schema(Params)
        self.assertEqual(schema["type"], "object")
        self.assertEqual(schema["required"], ["entity_ref"])

    def test_mapping_gets_object_type(self):
        schema = to_json_schema({"properties": {"a": {"type": "string"}}})
        self.assertEqual(schema["type"], "object")

    def test_object_without_properties_is_accepted(self):
        schema = to_json_schema({"type": "object", "additionalProperties": True})
        self.assertEqual(schema, {"type": "object", "properties": {}, "additionalProperties": True})

    def test_non_object_shape_rejected(self):
        with self.assertRaises(TypeError):
            to_json_schema({"type": "string"})


if __name__ == "__main__":
    unittest.main()
