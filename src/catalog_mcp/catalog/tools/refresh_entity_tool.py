"""
Schedule a refresh of a catalog entity.
"""

from pydantic import BaseModel

from catalog_mcp.tools.metadata import batch_tool
from catalog_mcp.tools.models import BaseTool, ToolExecutionContext


class RefreshEntityParams(BaseModel):
    entity_ref: str


@batch_tool(
    name="refresh_entity",
    description="Trigger a refresh of an entity.",
    params_schema=RefreshEntityParams,
    max_batch_size=10,
)
class RefreshEntityTool(BaseTool):
    params_model = RefreshEntityParams

    async def execute_typed(self, params: RefreshEntityParams, context: ToolExecutionContext):
        await context.catalog_client.refresh_entity(params.entity_ref)
        return None
