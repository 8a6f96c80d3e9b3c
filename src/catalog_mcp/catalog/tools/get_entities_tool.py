"""
List catalog entities.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from catalog_mcp.catalog.tools.params import EntityFilter
from catalog_mcp.tools.formatter import STATUS_SUCCESS, format_entity_list, formatter
from catalog_mcp.tools.metadata import read_tool
from catalog_mcp.tools.models import BaseTool, ToolExecutionContext


class GetEntitiesParams(BaseModel):
    filter: Optional[List[EntityFilter]] = None
    fields: Optional[List[str]] = None
    limit: Optional[int] = Field(default=None, ge=0)
    offset: Optional[int] = Field(default=None, ge=0)


@read_tool(
    name="get_entities",
    description="Get all entities in the catalog. Supports filtering, field selection and pagination.",
    params_schema=GetEntitiesParams,
    cacheable=True,
)
class GetEntitiesTool(BaseTool):
    params_model = GetEntitiesParams

    async def execute_typed(self, params: GetEntitiesParams, context: ToolExecutionContext):
        request = params.model_dump(exclude_none=True)
        return await context.catalog_client.get_entities(**request)

    def format_result(self, result):
        return formatter.multi_content({"status": STATUS_SUCCESS, "data": result}, format_entity_list)
