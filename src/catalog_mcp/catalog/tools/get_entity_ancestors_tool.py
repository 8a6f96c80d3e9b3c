"""
Get the ancestry of a catalog entity.
"""

from pydantic import BaseModel

from catalog_mcp.catalog.entity_ref import EntityRef
from catalog_mcp.tools.metadata import read_tool
from catalog_mcp.tools.models import BaseTool, ToolExecutionContext


class GetEntityAncestorsParams(BaseModel):
    entity_ref: EntityRef


@read_tool(
    name="get_entity_ancestors",
    description="Get the ancestry tree for an entity.",
    params_schema=GetEntityAncestorsParams,
    cacheable=True,
)
class GetEntityAncestorsTool(BaseTool):
    params_model = GetEntityAncestorsParams

    async def execute_typed(self, params: GetEntityAncestorsParams, context: ToolExecutionContext):
        return await context.catalog_client.get_entity_ancestors(params.entity_ref)
