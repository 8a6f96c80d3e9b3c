"""
Remove a location from the catalog.
"""

from pydantic import BaseModel

from catalog_mcp.tools.metadata import write_tool
from catalog_mcp.tools.models import BaseTool, ToolExecutionContext


class RemoveLocationByIdParams(BaseModel):
    location_id: str


@write_tool(
    name="remove_location_by_id",
    description="Remove a location from the catalog by id.",
    params_schema=RemoveLocationByIdParams,
    required_scopes=("catalog:write",),
)
class RemoveLocationByIdTool(BaseTool):
    params_model = RemoveLocationByIdParams

    async def execute_typed(self, params: RemoveLocationByIdParams, context: ToolExecutionContext):
        await context.catalog_client.remove_location_by_id(params.location_id)
        return None
