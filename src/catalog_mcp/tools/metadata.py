"""
Tool metadata registry.

Metadata is attached to a tool implementation when the implementation is
defined, through the @tool decorator family. Entries are keyed by the
implementation object itself, never by the declared tool name.
"""

import inspect
import logging
from typing import Any, Callable, Dict, Iterable, Optional, TypeVar

from catalog_mcp.tools.models import ToolMetadata

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ToolMetadataRegistry:
    """Identity-keyed map from tool implementations to their metadata."""

    def __init__(self):
        """Initialize an empty registry."""
        self._metadata: Dict[int, ToolMetadata] = {}
        self._implementations: Dict[int, Any] = {}

    def register(self, implementation: Any, metadata: ToolMetadata) -> None:
        """
        Attach metadata to a tool implementation.

        Args:
            implementation: The tool class (or object) the metadata describes
            metadata: The tool's metadata
        """
        key = id(implementation)
        self._metadata[key] = metadata
        # Holding a reference keeps the id stable for the registry's lifetime.
        self._implementations[key] = implementation
        logger.debug(f"Attached metadata '{metadata.name}' to {_label(implementation)}")

    def lookup(self, implementation_or_instance: Any) -> Optional[ToolMetadata]:
        """
        Look up metadata for a tool class or an instance of one.

        Returns:
            The metadata, or None if the object is not a tool
        """
        if self._implementations.get(id(implementation_or_instance)) is implementation_or_instance:
            return self._metadata[id(implementation_or_instance)]

        if implementation_or_instance is not None and not inspect.isclass(implementation_or_instance):
            owner = type(implementation_or_instance)
            if self._implementations.get(id(owner)) is owner:
                return self._metadata[id(owner)]

        return None

    def implementations(self) -> Iterable[Any]:
        return list(self._implementations.values())

    def clear(self) -> None:
        self._metadata.clear()
        self._implementations.clear()

    def __contains__(self, implementation: Any) -> bool:
        return self.lookup(implementation) is not None

    def __len__(self) -> int:
        return len(self._metadata)


default_registry = ToolMetadataRegistry()


class MetadataProvider:
    """Resolves metadata for tool candidates from a registry."""

    def __init__(self, registry: Optional[ToolMetadataRegistry] = None):
        self.registry = registry if registry is not None else default_registry

    def get_metadata(self, candidate: Any) -> Optional[ToolMetadata]:
        return self.registry.lookup(candidate)


def tool(
    name: str,
    description: str,
    params_schema: Any = None,
    *,
    category: Optional[str] = None,
    tags: Iterable[str] = (),
    version: Optional[str] = None,
    deprecated: bool = False,
    cacheable: bool = False,
    requires_confirmation: bool = False,
    required_scopes: Iterable[str] = (),
    max_batch_size: Optional[int] = None,
    registry: Optional[ToolMetadataRegistry] = None,
) -> Callable[[T], T]:
    """
    Class decorator declaring a tool and recording its metadata.

    Example:
        @tool(name="get_entity_by_ref", description="Get a single entity.", params_schema=Params)
        class GetEntityByRefTool:
            @staticmethod
            async def execute(args, context): ...
    """
    metadata = ToolMetadata(
        name=name,
        description=description,
        params_schema=params_schema,
        category=category,
        tags=tuple(tags),
        version=version,
        deprecated=deprecated,
        cacheable=cacheable,
        requires_confirmation=requires_confirmation,
        required_scopes=tuple(required_scopes),
        max_batch_size=max_batch_size,
    )

    def decorator(target: T) -> T:
        (registry if registry is not None else default_registry).register(target, metadata)
        return target

    return decorator


def read_tool(name: str, description: str, params_schema: Any = None, *, tags: Iterable[str] = (), **kwargs):
    """Declare a read-only tool."""
    return tool(name, description, params_schema, category="read", tags=(*tags, "readonly"), **kwargs)


def write_tool(name: str, description: str, params_schema: Any = None, *, tags: Iterable[str] = (), **kwargs):
    """Declare a tool that changes catalog state."""
    return tool(name, description, params_schema, category="write", tags=(*tags, "write"), **kwargs)


def authenticated_tool(
    name: str,
    description: str,
    params_schema: Any = None,
    *,
    required_scopes: Iterable[str] = (),
    tags: Iterable[str] = (),
    **kwargs,
):
    return tool(
        name,
        description,
        params_schema,
        tags=(*tags, "authenticated"),
        required_scopes=required_scopes,
        **kwargs,
    )


def batch_tool(
    name: str,
    description: str,
    params_schema: Any = None,
    *,
    max_batch_size: Optional[int] = None,
    tags: Iterable[str] = (),
    **kwargs,
):
    return tool(
        name,
        description,
        params_schema,
        category="batch",
        tags=(*tags, "batch"),
        max_batch_size=max_batch_size,
        **kwargs,
    )


def _label(implementation: Any) -> str:
    return getattr(implementation, "__qualname__", None) or type(implementation).__name__
