"""
Catalog Clients
===============
Read-only catalog queries used to render pages.

  - GET /items        → brand/type filtered page   (CatalogClient)
  - GET /items/tags   → image-tag filtered page    (CatalogAIClient)

Both answer with the paginated envelope:
    {"pageIndex": 0, "pageSize": 10, "count": 25,
     "data": [{"id": ..., "name": ..., "price": ..., "pictureUri": ...}]}
"""

from decimal import Decimal, InvalidOperation
from typing import List, Optional

from config.settings import CATALOG_API_URL, CATALOG_AI_API_URL
from models import CatalogItem, CatalogPage
from .errors import ServiceError
from .http_client import ServiceClient


def _query_params(page: int, page_size: int, brand: Optional[str], item_type: Optional[str]) -> dict:
    params = {"pageIndex": page, "pageSize": page_size}
    if brand:
        params["brand"] = brand
    if item_type:
        params["type"] = item_type
    return params


def parse_catalog_page(service: str, result: dict) -> CatalogPage:
    """Turn a service result dict into a CatalogPage, or raise ServiceError."""
    if not result.get("success"):
        raise ServiceError(service, result.get("error", "request failed"))

    body = result.get("data")
    if not isinstance(body, dict):
        raise ServiceError(service, "unexpected response body")

    try:
        items = [
            CatalogItem(
                id=str(raw["id"]),
                name=str(raw.get("name", "")),
                price=Decimal(str(raw.get("price", "0"))),
                picture_uri=str(raw.get("pictureUri") or ""),
            )
            for raw in body.get("data") or []
        ]
        total = int(body.get("count", len(items)))
    except (KeyError, TypeError, ValueError, InvalidOperation) as e:
        raise ServiceError(service, f"malformed catalog item: {e}")

    return CatalogPage(items=items, total_count=max(0, total))


class CatalogClient(ServiceClient):
    """Plain brand/type catalog query."""

    def __init__(self, base_url: str = CATALOG_API_URL, **kwargs):
        super().__init__(base_url, **kwargs)

    def get_items(
        self,
        page: int,
        page_size: int,
        brand: Optional[str] = None,
        item_type: Optional[str] = None,
    ) -> CatalogPage:
        result = self._get("items", params=_query_params(page, page_size, brand, item_type))
        return parse_catalog_page("catalog", result)


class CatalogAIClient(ServiceClient):
    """Catalog query narrowed by tags from image classification."""

    def __init__(self, base_url: str = CATALOG_AI_API_URL, **kwargs):
        super().__init__(base_url, **kwargs)

    def get_items_by_tags(
        self,
        page: int,
        page_size: int,
        brand: Optional[str],
        item_type: Optional[str],
        tags: List[str],
    ) -> CatalogPage:
        params = _query_params(page, page_size, brand, item_type)
        params["tags"] = ",".join(tags)
        result = self._get("items/tags", params=params)
        return parse_catalog_page("catalog_ai", result)
