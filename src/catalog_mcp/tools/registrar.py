"""
Tool registrar.

Binds validated tools to the host surface. Each bound handler runs the
middleware pipeline, then the execution strategy, then the tool, and converts
any failure into a structured error result.
"""

import logging
from typing import Any, Mapping, Optional

from catalog_mcp.tools.error_handler import ToolErrorHandler
from catalog_mcp.tools.middleware import ToolMiddlewarePipeline
from catalog_mcp.tools.models import CallToolResult, ToolArgs, ToolExecutionContext, ToolMetadata, bind_tool
from catalog_mcp.tools.schema import to_json_schema
from catalog_mcp.tools.strategies import DirectExecutionStrategy, ToolExecutionStrategy

logger = logging.getLogger(__name__)


class ToolRegistrar:
    """Registers tools with the host server."""

    def __init__(
        self,
        context: ToolExecutionContext,
        pipeline: Optional[ToolMiddlewarePipeline] = None,
        strategy: Optional[ToolExecutionStrategy] = None,
        error_handler: Optional[ToolErrorHandler] = None,
    ):
        """
        Initialize the registrar.

        Args:
            context: Execution context holding the catalog client and the host server
            pipeline: Middleware pipeline, or None for an empty one
            strategy: Execution strategy, or None for direct execution
            error_handler: Error handler, or None for the standard format
        """
        self.context = context
        self.pipeline = pipeline if pipeline is not None else ToolMiddlewarePipeline()
        self.strategy = strategy if strategy is not None else DirectExecutionStrategy()
        self.error_handler = error_handler if error_handler is not None else ToolErrorHandler()

    @property
    def server(self) -> Any:
        return self.context.server

    def register(self, implementation: Any, metadata: ToolMetadata) -> None:
        """
        Register a tool with the host server.

        Args:
            implementation: The tool class or object
            metadata: The tool's validated metadata

        Raises:
            Exception: Any error raised while binding the tool
        """
        name = metadata.name
        try:
            logger.debug(f"Registering tool: {name}")
            input_schema = to_json_schema(metadata.params_schema)
            tool = bind_tool(implementation)
            base_context = self.context.with_metadata(metadata)

            async def handler(args: ToolArgs, extras: Optional[Mapping[str, Any]] = None) -> CallToolResult:
                context = base_context.with_extras(extras)
                return await self.error_handler.execute_tool(name, name, self._dispatch, args, tool, context, metadata)

            self.server.tool(name, metadata.description, input_schema, handler)
            logger.debug(f"Tool registered successfully: {name}")
        except Exception as e:
            logger.error(f"Failed to register tool {name}: {e}")
            raise

    async def _dispatch(
        self, args: ToolArgs, tool: Any, context: ToolExecutionContext, metadata: ToolMetadata
    ) -> CallToolResult:
        async def final_handler(final_args: ToolArgs, final_context: ToolExecutionContext) -> CallToolResult:
            return await self.strategy.execute(tool, final_args, final_context, metadata)

        return await self.pipeline.execute(args, context, final_handler)
