"""
Get the location an entity was ingested from.
"""

from pydantic import BaseModel

from catalog_mcp.catalog.entity_ref import EntityRef
from catalog_mcp.tools.formatter import STATUS_SUCCESS, format_location, formatter
from catalog_mcp.tools.metadata import read_tool
from catalog_mcp.tools.models import BaseTool, ToolExecutionContext


class GetLocationByEntityParams(BaseModel):
    entity_ref: EntityRef


@read_tool(
    name="get_location_by_entity",
    description="Get the location associated with an entity.",
    params_schema=GetLocationByEntityParams,
)
class GetLocationByEntityTool(BaseTool):
    params_model = GetLocationByEntityParams

    async def execute_typed(self, params: GetLocationByEntityParams, context: ToolExecutionContext):
        return await context.catalog_client.get_location_by_entity(params.entity_ref)

    def format_result(self, result):
        return formatter.formatted({"status": STATUS_SUCCESS, "data": result}, format_location)
