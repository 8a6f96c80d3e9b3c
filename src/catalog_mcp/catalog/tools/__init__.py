"""
Catalog tools.

Each module defines one tool; the names below are the ones static discovery
registers, in this order.
"""

from .add_location_tool import AddLocationTool
from .get_entities_by_query_tool import GetEntitiesByQueryTool
from .get_entities_by_refs_tool import GetEntitiesByRefsTool
from .get_entities_tool import GetEntitiesTool
from .get_entity_ancestors_tool import GetEntityAncestorsTool
from .get_entity_by_ref_tool import GetEntityByRefTool
from .get_entity_facets_tool import GetEntityFacetsTool
from .get_location_by_entity_tool import GetLocationByEntityTool
from .get_location_by_ref_tool import GetLocationByRefTool
from .refresh_entity_tool import RefreshEntityTool
from .remove_entity_by_uid_tool import RemoveEntityByUidTool
from .remove_location_by_id_tool import RemoveLocationByIdTool
from .validate_entity_tool import ValidateEntityTool

__all__ = [
    "AddLocationTool",
    "GetEntitiesTool",
    "GetEntitiesByQueryTool",
    "GetEntitiesByRefsTool",
    "GetEntityAncestorsTool",
    "GetEntityByRefTool",
    "GetEntityFacetsTool",
    "GetLocationByEntityTool",
    "GetLocationByRefTool",
    "RefreshEntityTool",
    "RemoveEntityByUidTool",
    "RemoveLocationByIdTool",
    "ValidateEntityTool",
]
