"""
Parameter shape helpers.

A tool's parameter shape is either a pydantic model class or a JSON Schema
mapping describing an object.
"""

import inspect
from typing import Any, Dict, List, Mapping

from pydantic import BaseModel

EMPTY_OBJECT_SCHEMA: Dict[str, Any] = {"type": "object", "properties": {}}


def is_model_shape(schema: Any) -> bool:
    return inspect.isclass(schema) and issubclass(schema, BaseModel)


def is_object_schema(schema: Any) -> bool:
    return (
        isinstance(schema, Mapping)
        and schema.get("type", "object") == "object"
        and isinstance(schema.get("properties", {}), Mapping)
    )


def is_introspectable(schema: Any) -> bool:
    """Return True if the shape can report its top-level field names."""
    return is_model_shape(schema) or is_object_schema(schema)


def param_names(schema: Any) -> List[str]:
    """
    Get the top-level parameter names of a shape in declared order.

    Args:
        schema: The parameter shape, or None

    Returns:
        The field names, or an empty list when the shape is absent or not introspectable
    """
    if is_model_shape(schema):
        return list(schema.model_fields)
    if is_object_schema(schema):
        return list(schema.get("properties", {}))
    return []


def to_json_schema(schema: Any) -> Dict[str, Any]:
    """
    Convert a parameter shape into the raw JSON Schema the host surface expects.

    Raises:
        TypeError: If the shape does not describe an object
    """
    if schema is None:
        return dict(EMPTY_OBJECT_SCHEMA)
    if is_model_shape(schema):
        return schema.model_json_schema()
    if is_object_schema(schema):
        return {"type": "object", "properties": {}, **dict(schema)}
    raise TypeError(f"Parameter shape {schema!r} is not an object schema and cannot be converted to a raw shape")
