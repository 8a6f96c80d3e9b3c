"""
Middleware pipeline for tool execution.

Middlewares wrap tool execution in ascending priority order: the lowest
priority is the outermost layer. Equal priorities run in insertion order.
"""

import logging
import time
import uuid
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Protocol

import jsonschema

from catalog_mcp.errors import AuthenticationError, AuthorizationError, ValidationError
from catalog_mcp.tools.error_handler import sanitize_args
from catalog_mcp.tools.models import CallToolResult, ToolArgs, ToolExecutionContext
from catalog_mcp.tools.schema import to_json_schema

logger = logging.getLogger(__name__)

NextHandler = Callable[[ToolArgs, ToolExecutionContext], Awaitable[CallToolResult]]


class ToolMiddleware(Protocol):
    name: str
    priority: int

    async def execute(self, args: ToolArgs, context: ToolExecutionContext, next: NextHandler) -> CallToolResult:
        ...


class ToolMiddlewarePipeline:
    """Ordered chain of middlewares around a final handler."""

    def __init__(self, middlewares: Optional[Iterable[ToolMiddleware]] = None):
        self._middlewares: List[ToolMiddleware] = []
        for middleware in middlewares or ():
            self.use(middleware)

    def use(self, middleware: ToolMiddleware) -> "ToolMiddlewarePipeline":
        """Add a middleware and keep the chain sorted by priority."""
        self._middlewares.append(middleware)
        self._middlewares.sort(key=lambda m: m.priority)
        return self

    @property
    def middlewares(self) -> List[ToolMiddleware]:
        return list(self._middlewares)

    async def execute(self, args: ToolArgs, context: ToolExecutionContext, final_handler: NextHandler) -> CallToolResult:
        """
        Run the chain.

        Args:
            args: Tool arguments
            context: Per-call execution context
            final_handler: Called by the innermost next()

        Returns:
            The result produced by the chain
        """
        chain = list(self._middlewares)

        def bind(index: int) -> NextHandler:
            if index == len(chain):
                return final_handler
            middleware = chain[index]
            following = bind(index + 1)

            async def call(next_args: ToolArgs, next_context: ToolExecutionContext) -> CallToolResult:
                return await middleware.execute(next_args, next_context, following)

            return call

        return await bind(0)(args, context)

    def __len__(self) -> int:
        return len(self._middlewares)


class LoggingMiddleware:
    """Logs each execution with its duration and redacted arguments."""

    name = "logging"
    priority = 5

    async def execute(self, args: ToolArgs, context: ToolExecutionContext, next: NextHandler) -> CallToolResult:
        request_id = uuid.uuid4().hex[:12]
        tool_name = context.metadata.name if context.metadata else "unknown"
        if context.metadata is not None and context.metadata.deprecated:
            logger.warning(f"[{request_id}] Tool '{tool_name}' is deprecated")

        logger.info(
            f"[{request_id}] Tool execution started: {tool_name} "
            f"user={context.user_id} params={sanitize_args(args)}"
        )
        start = time.perf_counter()
        try:
            result = await next(args, context)
        except Exception as e:
            logger.error(
                f"[{request_id}] Tool execution failed: {tool_name} "
                f"after {(time.perf_counter() - start) * 1000:.1f}ms: {e}"
            )
            raise

        logger.info(
            f"[{request_id}] Tool execution completed: {tool_name} in {(time.perf_counter() - start) * 1000:.1f}ms"
        )
        return result


class AuthenticationMiddleware:
    """Rejects calls that carry no user identity."""

    name = "authentication"
    priority = 10

    async def execute(self, args: ToolArgs, context: ToolExecutionContext, next: NextHandler) -> CallToolResult:
        if not context.user_id:
            raise AuthenticationError()
        return await next(args, context)


class AuthorizationMiddleware:
    """Requires the caller's scopes to cover the configured and the tool's required scopes."""

    name = "authorization"
    priority = 15

    def __init__(self, required_scopes: Iterable[str] = ()):
        self.required_scopes = tuple(required_scopes)

    async def execute(self, args: ToolArgs, context: ToolExecutionContext, next: NextHandler) -> CallToolResult:
        required = list(self.required_scopes)
        if context.metadata is not None:
            required.extend(s for s in context.metadata.required_scopes if s not in required)

        if required:
            missing = [scope for scope in required if scope not in context.scopes]
            if missing:
                raise AuthorizationError(
                    f"Insufficient permissions. Required scopes: {', '.join(required)}",
                    details={"missing_scopes": missing},
                )

        return await next(args, context)


class ValidationMiddleware:
    """Validates arguments against the tool's parameter schema."""

    name = "validation"
    priority = 20

    def __init__(self):
        self._schemas: Dict[str, Dict[str, Any]] = {}

    async def execute(self, args: ToolArgs, context: ToolExecutionContext, next: NextHandler) -> CallToolResult:
        if not isinstance(args, dict):
            raise ValidationError("Invalid parameters provided")

        metadata = context.metadata
        if metadata is not None and metadata.params_schema is not None:
            schema = self._schema_for(metadata.name, metadata.params_schema)
            try:
                jsonschema.validate(instance=args, schema=schema)
            except jsonschema.ValidationError as e:
                raise ValidationError(
                    f"Parameter validation failed for tool '{metadata.name}': {e.message}",
                    details={"path": list(e.absolute_path)},
                ) from e

        return await next(args, context)

    def _schema_for(self, tool_name: str, params_schema: Any) -> Dict[str, Any]:
        if tool_name not in self._schemas:
            self._schemas[tool_name] = to_json_schema(params_schema)
        return self._schemas[tool_name]
