"""
Assembly of the tool dispatch stack.

Builds the host server, catalog client, middleware pipeline, execution
strategy and tool loader from a Config.
"""

import logging
from pathlib import Path
from typing import Any, Optional

from catalog_mcp import __version__
from catalog_mcp.catalog import tools as catalog_tools
from catalog_mcp.catalog.client import CatalogClient
from catalog_mcp.config import Config
from catalog_mcp.tools.discovery import DirectoryToolDiscovery, ModuleToolDiscovery, ToolDiscovery
from catalog_mcp.tools.error_handler import ToolErrorHandler
from catalog_mcp.tools.loader import ToolLoader
from catalog_mcp.tools.middleware import (
    AuthenticationMiddleware,
    AuthorizationMiddleware,
    LoggingMiddleware,
    ToolMiddlewarePipeline,
    ValidationMiddleware,
)
from catalog_mcp.tools.models import ToolExecutionContext
from catalog_mcp.tools.registrar import ToolRegistrar
from catalog_mcp.tools.server import ToolServer
from catalog_mcp.tools.strategies import (
    BatchedExecutionStrategy,
    CachedExecutionStrategy,
    DirectExecutionStrategy,
    ToolExecutionStrategy,
)

logger = logging.getLogger(__name__)

SERVER_NAME = "catalog-mcp"


def build_pipeline(config: Config) -> ToolMiddlewarePipeline:
    pipeline = ToolMiddlewarePipeline()
    pipeline.use(LoggingMiddleware()).use(ValidationMiddleware())
    if config.require_auth:
        pipeline.use(AuthenticationMiddleware()).use(AuthorizationMiddleware())
    return pipeline


def build_strategy(config: Config) -> ToolExecutionStrategy:
    strategy = config.strategy
    if strategy == "cached":
        return CachedExecutionStrategy(ttl=config.cache_ttl, max_entries=config.cache_max_entries)
    if strategy == "batched":
        return BatchedExecutionStrategy(flush_delay=config.batch_flush_delay)
    return DirectExecutionStrategy()


def build_discovery(config: Config) -> ToolDiscovery:
    if config.discovery == "directory":
        directory = config.tools_dir or Path(catalog_tools.__file__).parent
        logger.debug(f"Discovering tools in {directory}")
        return DirectoryToolDiscovery(directory)
    return ModuleToolDiscovery(catalog_tools)


class CatalogMCPApp:
    """The catalog tool server wired up from configuration."""

    def __init__(self, config: Config, catalog_client: Optional[Any] = None, server: Optional[ToolServer] = None):
        """
        Initialize the application.

        Args:
            config: Loaded configuration
            catalog_client: Catalog collaborator; built from the config when None and a base URL is set
            server: Host surface, or None for a new in-process ToolServer
        """
        self.config = config
        if catalog_client is None and config.base_url:
            catalog_client = CatalogClient(config.base_url, token=config.token)
        self.catalog_client = catalog_client
        self.server = server if server is not None else ToolServer(SERVER_NAME, __version__)

        context = ToolExecutionContext(catalog_client=self.catalog_client, server=self.server)
        self.registrar = ToolRegistrar(
            context,
            pipeline=build_pipeline(config),
            strategy=build_strategy(config),
            error_handler=ToolErrorHandler(error_format=config.error_format),
        )
        self.loader = ToolLoader(build_discovery(config), self.registrar)
        self._registered: Optional[int] = None

    def register_tools(self) -> int:
        """Register all discovered tools once and return how many were registered."""
        if self._registered is None:
            self._registered = self.loader.register_all()
            logger.info(f"{SERVER_NAME} {__version__} ready with {self._registered} tools")
        return self._registered
