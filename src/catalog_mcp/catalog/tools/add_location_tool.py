"""
Register a new location with the catalog.
"""

from pydantic import BaseModel

from catalog_mcp.tools.metadata import write_tool
from catalog_mcp.tools.models import BaseTool, ToolExecutionContext


class AddLocationParams(BaseModel):
    type: str = "url"
    target: str
    dry_run: bool = False


@write_tool(
    name="add_location",
    description="Create a new location in the catalog.",
    params_schema=AddLocationParams,
)
class AddLocationTool(BaseTool):
    params_model = AddLocationParams

    async def execute_typed(self, params: AddLocationParams, context: ToolExecutionContext):
        return await context.catalog_client.add_location(params.type, params.target, dry_run=params.dry_run)
