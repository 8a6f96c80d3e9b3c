"""
Get a catalog location by its "type:target" reference.
"""

from pydantic import BaseModel

from catalog_mcp.tools.formatter import STATUS_SUCCESS, format_location, formatter
from catalog_mcp.tools.metadata import read_tool
from catalog_mcp.tools.models import BaseTool, ToolExecutionContext


class GetLocationByRefParams(BaseModel):
    location_ref: str


@read_tool(
    name="get_location_by_ref",
    description="Get location by ref.",
    params_schema=GetLocationByRefParams,
)
class GetLocationByRefTool(BaseTool):
    params_model = GetLocationByRefParams

    async def execute_typed(self, params: GetLocationByRefParams, context: ToolExecutionContext):
        return await context.catalog_client.get_location_by_ref(params.location_ref)

    def format_result(self, result):
        return formatter.formatted({"status": STATUS_SUCCESS, "data": result}, format_location)
