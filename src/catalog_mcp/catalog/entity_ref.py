"""
Entity reference helpers.

Entity references have the form "[kind:][namespace/]name".
"""

from typing import Dict, Optional, Union

from pydantic import BaseModel

from catalog_mcp.errors import ValidationError

DEFAULT_NAMESPACE = "default"


class CompoundEntityRef(BaseModel):
    kind: str
    namespace: str = DEFAULT_NAMESPACE
    name: str


EntityRef = Union[str, CompoundEntityRef]


def parse_entity_ref(
    ref: Union[str, CompoundEntityRef, Dict[str, str]], default_kind: Optional[str] = None
) -> CompoundEntityRef:
    """
    Parse an entity reference into its parts.

    Args:
        ref: A string reference, a compound reference or an equivalent dict
        default_kind: Kind used when the string reference has none

    Raises:
        ValidationError: If the reference is malformed
    """
    if isinstance(ref, CompoundEntityRef):
        return ref
    if isinstance(ref, dict):
        return CompoundEntityRef.model_validate(ref)

    text = ref.strip() if isinstance(ref, str) else ""
    if not text:
        raise ValidationError("Invalid entity reference: empty reference")

    kind: Optional[str] = default_kind
    if ":" in text:
        kind, text = text.split(":", 1)
    namespace = DEFAULT_NAMESPACE
    if "/" in text:
        namespace, text = text.split("/", 1)

    if not kind or not namespace or not text:
        raise ValidationError(f"Invalid entity reference: '{ref}'")
    return CompoundEntityRef(kind=kind, namespace=namespace, name=text)


def stringify_entity_ref(ref: Union[str, CompoundEntityRef, Dict[str, str]]) -> str:
    parsed = parse_entity_ref(ref)
    return f"{parsed.kind.lower()}:{parsed.namespace}/{parsed.name}"
