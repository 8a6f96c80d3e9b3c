"""
Backstage catalog collaborators: the HTTP client, entity references and the catalog tools.
"""

from .client import CatalogApi, CatalogClient
from .entity_ref import CompoundEntityRef, parse_entity_ref, stringify_entity_ref
