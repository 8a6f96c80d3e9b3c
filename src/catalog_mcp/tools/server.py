"""
In-process tool server for the MCP protocol.

This module provides the host invocation surface tools are bound to, and the
entry points the protocol layer uses to call them.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional

from catalog_mcp.tools.formatter import ToolResponseFormatter

logger = logging.getLogger(__name__)

ToolHandler = Callable[[Dict[str, Any], Mapping[str, Any]], Awaitable[Dict[str, Any]]]


@dataclass
class RegisteredTool:
    """A handler bound to the server under a tool name."""

    name: str
    description: str
    input_schema: Dict[str, Any]
    handler: ToolHandler

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "description": self.description, "parameters": self.input_schema}


class ToolServer:
    """Host surface binding tool names to handlers."""

    def __init__(self, name: str = "catalog-mcp", version: str = "0.0.0"):
        """
        Initialize an empty server.

        Args:
            name: Server name reported to clients
            version: Server version reported to clients
        """
        self.name = name
        self.version = version
        self.formatter = ToolResponseFormatter()
        self._tools: Dict[str, RegisteredTool] = {}

    def tool(self, name: str, description: str, input_schema: Dict[str, Any], handler: ToolHandler) -> RegisteredTool:
        """
        Bind a handler to a tool name.

        Args:
            name: The tool name
            description: The tool description
            input_schema: JSON Schema of the tool's arguments
            handler: Coroutine function called with (arguments, extras)

        Returns:
            The registered tool

        Raises:
            ValueError: If a tool with the same name is already registered
        """
        if name in self._tools:
            raise ValueError(f"Tool with name '{name}' is already registered")

        registered = RegisteredTool(name=name, description=description, input_schema=input_schema, handler=handler)
        self._tools[name] = registered
        return registered

    def unregister(self, name: str) -> None:
        if name not in self._tools:
            raise ValueError(f"No tool with name '{name}' is registered")

        del self._tools[name]

    def get_tool(self, name: str) -> RegisteredTool:
        """
        Get a registered tool by name.

        Raises:
            ValueError: If no tool with the given name is registered
        """
        if name not in self._tools:
            raise ValueError(f"No tool with name '{name}' is registered")

        return self._tools[name]

    def list_tools(self) -> List[str]:
        return list(self._tools.keys())

    def get_tool_definitions(self) -> List[Dict[str, Any]]:
        return [registered.to_dict() for registered in self._tools.values()]

    async def call_tool(
        self, name: str, arguments: Optional[Dict[str, Any]] = None, extras: Optional[Mapping[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Invoke a registered tool.

        Args:
            name: The tool name
            arguments: Tool arguments
            extras: Per-call transport metadata

        Returns:
            The tool's MCP call result
        """
        registered = self._tools.get(name)
        if registered is None:
            logger.warning(f"Tool not found: {name}")
            return self.formatter.json(self.formatter.simple_error(f"Tool not found: {name}"), is_error=True)

        logger.info(f"Executing tool: {name}")
        return await registered.handler(arguments or {}, extras or {})

    async def execute_tool_call(
        self, tool_call: Dict[str, Any], extras: Optional[Mapping[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Execute a tool call in the format provided by LLMs.

        Args:
            tool_call: The tool call to execute
            extras: Per-call transport metadata

        Returns:
            The formatted result of the tool execution
        """
        tool_call_id = tool_call.get("id", "unknown")
        function_data = tool_call.get("function", {})
        tool_name = function_data.get("name", "unknown")
        arguments = function_data.get("arguments", {})

        if isinstance(arguments, str):
            try:
                arguments = json.loads(arguments) if arguments.strip() else {}
            except json.JSONDecodeError as e:
                return {
                    "tool_call_id": tool_call_id,
                    "name": tool_name,
                    "status": "error",
                    "content": f"Invalid JSON in tool call arguments: {str(e)}",
                }

        result = await self.call_tool(tool_name, arguments, extras)
        text = "\n".join(item.get("text", "") for item in result.get("content", []))

        return {
            "tool_call_id": tool_call_id,
            "name": tool_name,
            "status": "error" if result.get("isError") else "success",
            "content": text,
        }

    async def execute_tool_calls(
        self, tool_calls: List[Dict[str, Any]], extras: Optional[Mapping[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        results = []

        for tool_call in tool_calls:
            results.append(await self.execute_tool_call(tool_call, extras))

        return results
