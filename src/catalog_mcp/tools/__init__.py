"""
Tool dispatch framework for the MCP protocol.

This module provides classes for tool discovery, registration and execution.
"""

from .discovery import DirectoryToolDiscovery, ModuleToolDiscovery
from .error_handler import ToolErrorHandler, classify_error
from .formatter import ToolResponseFormatter
from .loader import ToolLoader
from .manifest import ManifestBuilder
from .metadata import (
    MetadataProvider,
    ToolMetadataRegistry,
    authenticated_tool,
    batch_tool,
    default_registry,
    read_tool,
    tool,
    write_tool,
)
from .middleware import (
    AuthenticationMiddleware,
    AuthorizationMiddleware,
    LoggingMiddleware,
    ToolMiddlewarePipeline,
    ValidationMiddleware,
)
from .models import BaseTool, ManifestEntry, ToolExecutionContext, ToolMetadata
from .registrar import ToolRegistrar
from .server import ToolServer
from .strategies import BatchedExecutionStrategy, CachedExecutionStrategy, DirectExecutionStrategy
from .validator import ToolValidator
