"""
Get value counts for entity fields.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from catalog_mcp.catalog.tools.params import EntityFilter
from catalog_mcp.tools.metadata import read_tool
from catalog_mcp.tools.models import BaseTool, ToolExecutionContext


class GetEntityFacetsParams(BaseModel):
    facets: List[str] = Field(min_length=1)
    filter: Optional[List[EntityFilter]] = None


@read_tool(
    name="get_entity_facets",
    description="Get entity facets for the specified fields.",
    params_schema=GetEntityFacetsParams,
    cacheable=True,
)
class GetEntityFacetsTool(BaseTool):
    params_model = GetEntityFacetsParams

    async def execute_typed(self, params: GetEntityFacetsParams, context: ToolExecutionContext):
        filters = [f.model_dump() for f in params.filter] if params.filter else None
        return await context.catalog_client.get_entity_facets(params.facets, filter=filters)
