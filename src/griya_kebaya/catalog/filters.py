from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Mapping, Optional
from urllib.parse import parse_qsl, urlencode

DEFAULT_SORT = "-createdAt"
PRODUCTS_PATH = "/products"

SORT_OPTIONS: tuple[tuple[str, str], ...] = (
    ("-createdAt", "Terbaru"),
    ("price", "Harga Terendah"),
    ("-price", "Harga Tertinggi"),
    ("name", "Nama (A-Z)"),
)


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass(frozen=True, slots=True)
class CatalogFilters:
    """Filter, sort and search state carried in the products page query string."""

    sort: str = DEFAULT_SORT
    category: Optional[str] = None
    min_price: Optional[str] = None
    max_price: Optional[str] = None
    search: Optional[str] = None

    @classmethod
    def from_query(cls, params: Mapping[str, str]) -> "CatalogFilters":
        return cls(
            sort=_clean(params.get("sort")) or DEFAULT_SORT,
            category=_clean(params.get("category")),
            min_price=_clean(params.get("minPrice")),
            max_price=_clean(params.get("maxPrice")),
            search=_clean(params.get("search")),
        )

    @property
    def active_filter_count(self) -> int:
        count = 1 if self.category else 0
        if self.min_price or self.max_price:
            count += 1
        return count

    def to_query(self) -> dict[str, str]:
        return self.apply({})

    def apply(self, existing: Mapping[str, str] | str) -> dict[str, str]:
        """Merge the filters into *existing* query params.

        Unrelated keys survive, an existing search term is kept unless one is
        set here, and pagination always restarts.
        """

        if isinstance(existing, str):
            params = dict(parse_qsl(existing.lstrip("?"), keep_blank_values=True))
        else:
            params = dict(existing)

        if self.search:
            params["search"] = self.search
        for key, value in (
            ("sort", self.sort),
            ("category", self.category),
            ("minPrice", self.min_price),
            ("maxPrice", self.max_price),
        ):
            if value:
                params[key] = value
            else:
                params.pop(key, None)
        params.pop("page", None)
        return params

    def reset(self) -> "CatalogFilters":
        return replace(self, sort=DEFAULT_SORT, category=None, min_price=None, max_price=None)

    def price_bounds(self) -> tuple[Optional[float], Optional[float]]:
        return _to_price(self.min_price), _to_price(self.max_price)


def _to_price(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def products_url(filters: CatalogFilters, existing: Mapping[str, str] | str = "") -> str:
    query = urlencode(filters.apply(existing))
    return f"{PRODUCTS_PATH}?{query}" if query else PRODUCTS_PATH


def search_url(query: str) -> Optional[str]:
    term = query.strip()
    if not term:
        return None
    return f"{PRODUCTS_PATH}?{urlencode({'search': term})}"
