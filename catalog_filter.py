"""
Filter routing — decides which catalog query path a filter goes through.
"""

from enum import Enum

from models import Filter, CatalogPage


class FilterRoute(Enum):
    PLAIN = "plain"   # brand/type query
    TAGS = "tags"     # image-tag (AI) query
    EMPTY = "empty"   # classification found nothing; no query at all


def route_for(catalog_filter: Filter) -> FilterRoute:
    if catalog_filter.tags is None:
        return FilterRoute.PLAIN
    if catalog_filter.tags:
        return FilterRoute.TAGS
    return FilterRoute.EMPTY


def fetch_catalog_page(
    catalog_filter: Filter,
    page: int,
    page_size: int,
    catalog,
    catalog_ai,
) -> CatalogPage:
    """
    Query the catalog for one page of *catalog_filter*.

    Raises ``ServiceError`` from the collaborator on backend failure.
    """
    route = route_for(catalog_filter)
    if route == FilterRoute.EMPTY:
        return CatalogPage.empty()
    if route == FilterRoute.TAGS:
        return catalog_ai.get_items_by_tags(
            page,
            page_size,
            catalog_filter.brand,
            catalog_filter.type,
            list(catalog_filter.tags),
        )
    return catalog.get_items(page, page_size, catalog_filter.brand, catalog_filter.type)
