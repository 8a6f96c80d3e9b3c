"""
Remove an entity from the catalog.
"""

from pydantic import UUID4, BaseModel

from catalog_mcp.tools.metadata import write_tool
from catalog_mcp.tools.models import BaseTool, ToolExecutionContext


class RemoveEntityByUidParams(BaseModel):
    uid: UUID4


@write_tool(
    name="remove_entity_by_uid",
    description="Remove an entity by UID.",
    params_schema=RemoveEntityByUidParams,
    requires_confirmation=True,
    required_scopes=("catalog:write",),
)
class RemoveEntityByUidTool(BaseTool):
    params_model = RemoveEntityByUidParams

    async def execute_typed(self, params: RemoveEntityByUidParams, context: ToolExecutionContext):
        await context.catalog_client.remove_entity_by_uid(str(params.uid))
        return None
