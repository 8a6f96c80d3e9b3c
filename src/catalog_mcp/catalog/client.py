"""
Backstage catalog client.

Thin aiohttp client for the catalog REST API. HTTP failures are raised as
tagged errors so the tool error handler can classify them without guessing.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Protocol, Sequence, Union
from urllib.parse import quote

import aiohttp

from catalog_mcp.catalog.entity_ref import CompoundEntityRef, parse_entity_ref, stringify_entity_ref
from catalog_mcp.errors import (
    AuthenticationError,
    AuthorizationError,
    CatalogAPIError,
    ConflictError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    ValidationError,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
CATALOG_API_PATH = "/api/catalog"

EntityRefLike = Union[str, CompoundEntityRef, Dict[str, str]]


class CatalogApi(Protocol):
    """Operations the catalog tools rely on."""

    async def get_entities(self, **request: Any) -> Dict[str, Any]: ...

    async def get_entities_by_refs(
        self, entity_refs: Sequence[str], fields: Optional[Sequence[str]] = None
    ) -> Dict[str, Any]: ...

    async def query_entities(self, **request: Any) -> Dict[str, Any]: ...

    async def get_entity_ancestors(self, entity_ref: EntityRefLike) -> Dict[str, Any]: ...

    async def get_entity_by_ref(self, entity_ref: EntityRefLike) -> Optional[Dict[str, Any]]: ...

    async def get_entity_facets(
        self, facets: Sequence[str], filter: Optional[List[Dict[str, Any]]] = None
    ) -> Dict[str, Any]: ...

    async def get_location_by_ref(self, location_ref: str) -> Optional[Dict[str, Any]]: ...

    async def get_location_by_entity(self, entity_ref: EntityRefLike) -> Optional[Dict[str, Any]]: ...

    async def add_location(self, type: str, target: str, dry_run: bool = False) -> Dict[str, Any]: ...

    async def remove_entity_by_uid(self, uid: str) -> None: ...

    async def remove_location_by_id(self, location_id: str) -> None: ...

    async def refresh_entity(self, entity_ref: str) -> None: ...

    async def validate_entity(self, entity: Dict[str, Any], location_ref: str) -> Dict[str, Any]: ...


def _filter_params(filters: Optional[List[Dict[str, Any]]]) -> List[tuple]:
    params = []
    for entry in filters or []:
        parts = [f"{entry['key']}={value}" for value in entry.get("values", [])] or [entry["key"]]
        params.append(("filter", ",".join(parts)))
    return params


def _entity_path(entity_ref: EntityRefLike) -> str:
    ref = parse_entity_ref(entity_ref)
    return "/".join(quote(part, safe="") for part in (ref.kind, ref.namespace, ref.name))


class CatalogClient:
    """Async client for the Backstage catalog API."""

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Base URL of the Backstage backend
            token: Optional static bearer token
            timeout: Total request timeout in seconds
            session: Optional shared aiohttp session
        """
        self.base_url = base_url.rstrip("/") + CATALOG_API_PATH
        self.token = token
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session = session

    @property
    def headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def get_entities(
        self,
        filter: Optional[List[Dict[str, Any]]] = None,
        fields: Optional[Sequence[str]] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        after: Optional[str] = None,
    ) -> Dict[str, Any]:
        params = _filter_params(filter)
        if fields:
            params.append(("fields", ",".join(fields)))
        for key, value in (("limit", limit), ("offset", offset), ("after", after)):
            if value is not None:
                params.append((key, str(value)))
        items = await self._request("GET", "/entities", params=params)
        return {"items": items or []}

    async def get_entities_by_refs(
        self, entity_refs: Sequence[str], fields: Optional[Sequence[str]] = None
    ) -> Dict[str, Any]:
        body: Dict[str, Any] = {"entityRefs": list(entity_refs)}
        if fields:
            body["fields"] = list(fields)
        return await self._request("POST", "/entities/by-refs", json=body)

    async def query_entities(
        self,
        filter: Optional[List[Dict[str, Any]]] = None,
        fields: Optional[Sequence[str]] = None,
        limit: Optional[int] = None,
        order_fields: Optional[List[Dict[str, str]]] = None,
        full_text_filter_term: Optional[str] = None,
        full_text_filter_fields: Optional[Sequence[str]] = None,
        cursor: Optional[str] = None,
    ) -> Dict[str, Any]:
        params = _filter_params(filter) if cursor is None else [("cursor", cursor)]
        if fields:
            params.append(("fields", ",".join(fields)))
        if limit is not None:
            params.append(("limit", str(limit)))
        if cursor is None:
            for order in order_fields or []:
                params.append(("orderField", f"{order['field']},{order.get('order', 'asc')}"))
            if full_text_filter_term:
                params.append(("fullTextFilterTerm", full_text_filter_term))
            if full_text_filter_fields:
                params.append(("fullTextFilterFields", ",".join(full_text_filter_fields)))
        return await self._request("GET", "/entities/by-query", params=params)

    async def get_entity_ancestors(self, entity_ref: EntityRefLike) -> Dict[str, Any]:
        return await self._request("GET", f"/entities/by-name/{_entity_path(entity_ref)}/ancestry")

    async def get_entity_by_ref(self, entity_ref: EntityRefLike) -> Optional[Dict[str, Any]]:
        return await self._request("GET", f"/entities/by-name/{_entity_path(entity_ref)}", allow_not_found=True)

    async def get_entity_facets(
        self, facets: Sequence[str], filter: Optional[List[Dict[str, Any]]] = None
    ) -> Dict[str, Any]:
        params = [("facet", facet) for facet in facets] + _filter_params(filter)
        return await self._request("GET", "/entity-facets", params=params)

    async def get_location_by_ref(self, location_ref: str) -> Optional[Dict[str, Any]]:
        locations = await self._request("GET", "/locations") or []
        for item in locations:
            location = item.get("data", item)
            if f"{location.get('type')}:{location.get('target')}" == location_ref:
                return location
        return None

    async def get_location_by_entity(self, entity_ref: EntityRefLike) -> Optional[Dict[str, Any]]:
        return await self._request(
            "GET", f"/locations/by-entity/{_entity_path(entity_ref)}", allow_not_found=True
        )

    async def add_location(self, type: str, target: str, dry_run: bool = False) -> Dict[str, Any]:
        params = [("dryRun", "true")] if dry_run else []
        return await self._request("POST", "/locations", params=params, json={"type": type, "target": target})

    async def remove_entity_by_uid(self, uid: str) -> None:
        await self._request("DELETE", f"/entities/by-uid/{quote(uid, safe='')}")

    async def remove_location_by_id(self, location_id: str) -> None:
        await self._request("DELETE", f"/locations/{quote(location_id, safe='')}")

    async def refresh_entity(self, entity_ref: str) -> None:
        await self._request("POST", "/refresh", json={"entityRef": stringify_entity_ref(entity_ref)})

    async def validate_entity(self, entity: Dict[str, Any], location_ref: str) -> Dict[str, Any]:
        try:
            await self._request("POST", "/validate-entity", json={"entity": entity, "location": location_ref})
        except ValidationError as e:
            return {"valid": False, "errors": (e.details or {}).get("errors", [e.message])}
        return {"valid": True}

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[List[tuple]] = None,
        json: Optional[Any] = None,
        allow_not_found: bool = False,
    ) -> Any:
        url = f"{self.base_url}{path}"
        logger.debug(f"Catalog request: {method} {url}")
        try:
            if self._session is not None:
                return await self._send(self._session, method, url, params, json, allow_not_found)
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                return await self._send(session, method, url, params, json, allow_not_found)
        except (aiohttp.ClientConnectionError, asyncio.TimeoutError) as e:
            raise NetworkError(f"Connection to catalog failed: {e}", details={"url": url}) from e

    async def _send(
        self,
        session: aiohttp.ClientSession,
        method: str,
        url: str,
        params: Optional[List[tuple]],
        json: Optional[Any],
        allow_not_found: bool,
    ) -> Any:
        async with session.request(method, url, params=params, json=json, headers=self.headers) as response:
            if response.status == 404 and allow_not_found:
                return None
            if response.status >= 400:
                raise await self._error_from_response(response, url)
            if response.status == 204 or response.content_length == 0:
                return None
            return await response.json(content_type=None)

    async def _error_from_response(self, response: aiohttp.ClientResponse, url: str) -> Exception:
        text = await response.text()
        body: Dict[str, Any] = {}
        try:
            body = await response.json(content_type=None) or {}
        except ValueError:
            pass
        error_info = body.get("error", {}) if isinstance(body, dict) else {}
        message = error_info.get("message") or text or response.reason or "Catalog request failed"
        details = {"url": url, "status": response.status}
        if isinstance(body, dict) and "errors" in body:
            details["errors"] = body["errors"]

        status = response.status
        if status == 400:
            return ValidationError(message, details=details)
        if status == 401:
            return AuthenticationError(message, details=details)
        if status == 403:
            return AuthorizationError(message, details=details)
        if status == 404:
            return NotFoundError(url, details=details)
        if status == 409:
            return ConflictError(message, details=details)
        if status == 429:
            retry_after = response.headers.get("Retry-After")
            return RateLimitError(message, float(retry_after) if retry_after and retry_after.isdigit() else None)
        return CatalogAPIError(f"Catalog API error: {status} - {message}", status_code=status, details=details)
