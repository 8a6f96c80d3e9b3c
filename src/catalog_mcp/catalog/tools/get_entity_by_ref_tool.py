"""
Get a single catalog entity by reference.
"""

from pydantic import BaseModel

from catalog_mcp.catalog.entity_ref import EntityRef
from catalog_mcp.errors import NotFoundError
from catalog_mcp.tools.formatter import STATUS_SUCCESS, format_entity, formatter
from catalog_mcp.tools.metadata import read_tool
from catalog_mcp.tools.models import BaseTool, ToolExecutionContext


class GetEntityByRefParams(BaseModel):
    entity_ref: EntityRef


@read_tool(
    name="get_entity_by_ref",
    description="Get a single entity by its reference (kind:namespace/name or compound ref).",
    params_schema=GetEntityByRefParams,
    cacheable=True,
)
class GetEntityByRefTool(BaseTool):
    params_model = GetEntityByRefParams

    async def execute_typed(self, params: GetEntityByRefParams, context: ToolExecutionContext):
        entity = await context.catalog_client.get_entity_by_ref(params.entity_ref)
        if entity is None:
            raise NotFoundError(f"Entity {params.entity_ref}")
        return entity

    def format_result(self, result):
        return formatter.formatted({"status": STATUS_SUCCESS, "data": result}, format_entity)
