"""
Fetch several catalog entities by reference in one request.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from catalog_mcp.catalog.entity_ref import EntityRef, stringify_entity_ref
from catalog_mcp.tools.metadata import read_tool
from catalog_mcp.tools.models import BaseTool, ToolExecutionContext


class GetEntitiesByRefsParams(BaseModel):
    entity_refs: List[EntityRef] = Field(min_length=1)
    fields: Optional[List[str]] = None


@read_tool(
    name="get_entities_by_refs",
    description="Get multiple entities by their refs.",
    params_schema=GetEntitiesByRefsParams,
)
class GetEntitiesByRefsTool(BaseTool):
    params_model = GetEntitiesByRefsParams

    async def execute_typed(self, params: GetEntitiesByRefsParams, context: ToolExecutionContext):
        refs = [stringify_entity_ref(ref) for ref in params.entity_refs]
        return await context.catalog_client.get_entities_by_refs(refs, fields=params.fields)
