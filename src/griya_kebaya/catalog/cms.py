from __future__ import annotations

import json
import logging
from typing import Any, List, Optional

import httpx

from ..models import Category, Product, ProductPage
from .filters import DEFAULT_SORT, CatalogFilters

logger = logging.getLogger(__name__)


class CMSError(RuntimeError):
    """The CMS could not be reached or answered with something unusable."""


class NotFoundError(LookupError):
    """No document matched the requested slug."""


def build_where_params(where: Any, prefix: str = "where") -> list[tuple[str, str]]:
    """Flatten a Payload ``where`` clause into bracketed query parameters.

    ``{"or": [{"name": {"like": "x"}}]}`` becomes
    ``[("where[or][0][name][like]", "x")]``.
    """

    params: list[tuple[str, str]] = []
    if isinstance(where, dict):
        for key, value in where.items():
            params.extend(build_where_params(value, f"{prefix}[{key}]"))
    elif isinstance(where, (list, tuple)):
        for index, value in enumerate(where):
            params.extend(build_where_params(value, f"{prefix}[{index}]"))
    elif isinstance(where, bool):
        params.append((prefix, "true" if where else "false"))
    elif where is not None:
        params.append((prefix, str(where)))
    return params


def product_where(filters: CatalogFilters) -> dict[str, Any]:
    clauses: List[dict[str, Any]] = []
    if filters.search:
        clauses.append(
            {
                "or": [
                    {"name": {"like": filters.search}},
                    {"description": {"like": filters.search}},
                ]
            }
        )
    if filters.category:
        clauses.append({"category.slug": {"equals": filters.category}})
    min_price, max_price = filters.price_bounds()
    if min_price is not None:
        clauses.append({"price": {"greater_than_equal": min_price}})
    if max_price is not None:
        clauses.append({"price": {"less_than_equal": max_price}})

    if not clauses:
        return {}
    if len(clauses) == 1:
        return clauses[0]
    return {"and": clauses}


class PayloadClient:
    """Read-only client for the Payload CMS REST API."""

    def __init__(
        self,
        base_url: str,
        *,
        client: Optional[httpx.Client] = None,
        timeout: float = 15.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self.client = client or httpx.Client(timeout=timeout, follow_redirects=True)

    def find(
        self,
        collection: str,
        *,
        where: Optional[dict[str, Any]] = None,
        sort: Optional[str] = None,
        limit: Optional[int] = None,
        depth: Optional[int] = None,
    ) -> dict[str, Any]:
        params: list[tuple[str, str]] = build_where_params(where or {})
        if sort:
            params.append(("sort", sort))
        if limit is not None:
            params.append(("limit", str(limit)))
        if depth is not None:
            params.append(("depth", str(depth)))

        url = f"{self.base_url}/api/{collection}"
        logger.debug("Querying %s with %s", url, params)
        try:
            response = self.client.get(url, params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as exc:
            logger.warning("CMS %s returned status %s", collection, exc.response.status_code)
            raise CMSError(f"CMS returned status {exc.response.status_code} for {collection}") from exc
        except json.JSONDecodeError as exc:
            logger.warning("Unable to decode JSON from CMS %s: %s", collection, exc)
            raise CMSError(f"CMS returned invalid JSON for {collection}") from exc
        except httpx.HTTPError as exc:
            logger.warning("HTTP error while querying CMS %s: %s", collection, exc)
            raise CMSError(f"Unable to reach CMS for {collection}") from exc

        if not isinstance(data, dict) or not isinstance(data.get("docs"), list):
            raise CMSError(f"Unexpected CMS response for {collection}")
        return data

    def find_products(
        self, filters: Optional[CatalogFilters] = None, *, limit: int = 24, depth: int = 2
    ) -> ProductPage:
        filters = filters or CatalogFilters()
        data = self.find(
            "products",
            where=product_where(filters),
            sort=filters.sort or DEFAULT_SORT,
            limit=limit,
            depth=depth,
        )
        return self._product_page(data)

    def latest_products(self, limit: int = 8) -> ProductPage:
        return self._product_page(self.find("products", sort=DEFAULT_SORT, limit=limit, depth=2))

    def get_product(self, slug: str) -> Product:
        data = self.find("products", where={"slug": {"equals": slug}}, depth=2, limit=1)
        docs = data["docs"]
        if not docs:
            raise NotFoundError(f"Product not found: {slug}")
        return Product.from_payload(docs[0])

    def list_categories(self, limit: int = 100) -> List[Category]:
        data = self.find("categories", sort="title", limit=limit)
        return [Category.from_payload(doc) for doc in data["docs"] if isinstance(doc, dict)]

    def get_category(self, slug: str) -> Category:
        data = self.find("categories", where={"slug": {"equals": slug}}, limit=1)
        docs = data["docs"]
        if not docs:
            raise NotFoundError(f"Category not found: {slug}")
        return Category.from_payload(docs[0])

    def products_in_category(self, category: Category) -> ProductPage:
        data = self.find(
            "products",
            where={"category": {"equals": category.id}},
            sort=DEFAULT_SORT,
            depth=2,
        )
        return self._product_page(data)

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

    def __enter__(self) -> "PayloadClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _product_page(self, data: dict[str, Any]) -> ProductPage:
        docs = [Product.from_payload(doc) for doc in data["docs"] if isinstance(doc, dict)]
        total = data.get("totalDocs")
        return ProductPage(docs=docs, total_docs=total if isinstance(total, int) else len(docs))
