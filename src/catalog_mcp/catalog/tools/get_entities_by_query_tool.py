"""
Query catalog entities with filters, ordering and full text search.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from catalog_mcp.catalog.tools.params import EntityFilter, EntityOrder
from catalog_mcp.tools.metadata import read_tool
from catalog_mcp.tools.models import BaseTool, ToolExecutionContext


class GetEntitiesByQueryParams(BaseModel):
    filter: Optional[List[EntityFilter]] = None
    fields: Optional[List[str]] = None
    limit: Optional[int] = Field(default=None, ge=0)
    order: Optional[List[EntityOrder]] = None
    full_text_term: Optional[str] = None
    cursor: Optional[str] = None


@read_tool(
    name="get_entities_by_query",
    description="Get entities by query filters, with ordering, full text search and cursor pagination.",
    params_schema=GetEntitiesByQueryParams,
    cacheable=True,
)
class GetEntitiesByQueryTool(BaseTool):
    params_model = GetEntitiesByQueryParams

    async def execute_typed(self, params: GetEntitiesByQueryParams, context: ToolExecutionContext):
        return await context.catalog_client.query_entities(
            filter=[f.model_dump() for f in params.filter] if params.filter else None,
            fields=params.fields,
            limit=params.limit,
            order_fields=[o.model_dump() for o in params.order] if params.order else None,
            full_text_filter_term=params.full_text_term,
            cursor=params.cursor,
        )
