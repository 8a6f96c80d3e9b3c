"""
Tool models for the MCP protocol.

This module provides the data models shared by the dispatch framework: tool
metadata, the execution context, manifest entries and the tool contract.
"""

import dataclasses
import inspect
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Awaitable, Dict, List, Mapping, Optional, Protocol, Tuple, Type, runtime_checkable

import pydantic
from pydantic import BaseModel

from catalog_mcp.errors import ValidationError
from catalog_mcp.tools.formatter import STATUS_SUCCESS, formatter

ToolArgs = Dict[str, Any]
CallToolResult = Dict[str, Any]


@dataclass(frozen=True)
class ToolMetadata:
    """Declarative description of a tool."""

    name: str
    description: str
    params_schema: Optional[Any] = field(default=None, compare=False)
    category: Optional[str] = None
    tags: Tuple[str, ...] = ()
    version: Optional[str] = None
    deprecated: bool = False
    cacheable: bool = False
    requires_confirmation: bool = False
    required_scopes: Tuple[str, ...] = ()
    max_batch_size: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert metadata to a dictionary, leaving out the parameter shape."""
        result = {"name": self.name, "description": self.description}

        if self.category is not None:
            result["category"] = self.category
        if self.tags:
            result["tags"] = list(self.tags)
        if self.version is not None:
            result["version"] = self.version
        if self.deprecated:
            result["deprecated"] = True
        if self.cacheable:
            result["cacheable"] = True
        if self.requires_confirmation:
            result["requires_confirmation"] = True
        if self.required_scopes:
            result["required_scopes"] = list(self.required_scopes)
        if self.max_batch_size is not None:
            result["max_batch_size"] = self.max_batch_size

        return result


@dataclass(frozen=True)
class ToolExecutionContext:
    """Handles and per-call transport metadata passed to every tool."""

    catalog_client: Any
    server: Any
    extras: Mapping[str, Any] = field(default_factory=dict)
    metadata: Optional[ToolMetadata] = None

    def with_extras(self, extras: Optional[Mapping[str, Any]]) -> "ToolExecutionContext":
        return dataclasses.replace(self, extras=dict(extras or {}))

    def with_metadata(self, metadata: ToolMetadata) -> "ToolExecutionContext":
        return dataclasses.replace(self, metadata=metadata)

    @property
    def user_id(self) -> Optional[str]:
        return self.extras.get("user_id")

    @property
    def scopes(self) -> List[str]:
        return list(self.extras.get("scopes") or [])


@dataclass
class ManifestEntry:
    """Summary of a registered tool."""

    name: str
    description: str
    params: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "description": self.description, "params": list(self.params)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ManifestEntry":
        return cls(name=data["name"], description=data["description"], params=list(data.get("params", [])))


@runtime_checkable
class ToolImplementation(Protocol):
    """Anything exposing an async execute(args, context)."""

    def execute(self, args: ToolArgs, context: ToolExecutionContext) -> Awaitable[CallToolResult]:
        ...


def is_tool_candidate(obj: Any) -> bool:
    """Return True for classes exposing a callable execute."""
    return inspect.isclass(obj) and callable(getattr(obj, "execute", None)) and not inspect.isabstract(obj)


def bind_tool(implementation: Any) -> ToolImplementation:
    """
    Resolve the object whose execute should be called for an implementation.

    Classes declaring execute as a static or class method are used directly;
    classes with an instance-level execute are instantiated once.
    """
    if not inspect.isclass(implementation):
        return implementation

    descriptor = inspect.getattr_static(implementation, "execute", None)
    if isinstance(descriptor, (staticmethod, classmethod)):
        return implementation
    return implementation()


class BaseTool(ABC):
    """
    Base class for tools with a pydantic parameter model.

    Subclasses set params_model and implement execute_typed; arguments are
    validated against the model before execute_typed runs.
    """

    params_model: Optional[Type[BaseModel]] = None

    async def execute(self, args: ToolArgs, context: ToolExecutionContext) -> CallToolResult:
        params = self.parse_params(args)
        result = await self.execute_typed(params, context)
        return self.format_result(result)

    def parse_params(self, args: ToolArgs) -> Any:
        if self.params_model is None:
            return args
        try:
            return self.params_model.model_validate(args or {})
        except pydantic.ValidationError as e:
            raise ValidationError(
                f"Invalid parameters: {e.error_count()} validation error(s)",
                details={"errors": e.errors(include_url=False, include_context=False)},
            ) from e

    @abstractmethod
    async def execute_typed(self, params: Any, context: ToolExecutionContext) -> Any:
        """Run the tool's business logic with validated parameters."""

    def format_result(self, result: Any) -> CallToolResult:
        return formatter.json({"status": STATUS_SUCCESS, "data": result})
