"""
Validate an entity definition against the catalog's processors.
"""

from typing import Any, Dict

from pydantic import BaseModel

from catalog_mcp.tools.metadata import tool
from catalog_mcp.tools.models import BaseTool, ToolExecutionContext


class ValidateEntityParams(BaseModel):
    entity: Dict[str, Any]
    location_ref: str


@tool(
    name="validate_entity",
    description="Validate an entity structure.",
    params_schema=ValidateEntityParams,
    category="validation",
)
class ValidateEntityTool(BaseTool):
    params_model = ValidateEntityParams

    async def execute_typed(self, params: ValidateEntityParams, context: ToolExecutionContext):
        return await context.catalog_client.validate_entity(params.entity, params.location_ref)
