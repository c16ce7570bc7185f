from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

DEFAULT_CUSTOM_COLOR = "#000000"


class Variant(str, Enum):
    """Selectable presentations of a product image."""

    ORIGINAL = "original"
    RED = "red"
    BLUE = "blue"
    NO_BG = "no-bg"
    CUSTOM_COLOR = "custom-color"


@dataclass(frozen=True, slots=True)
class ImageAsset:
    """The image shown by a viewer and the product name used as caption."""

    original_url: str
    subject_label: str = ""


@dataclass(frozen=True, slots=True)
class VariantSelection:
    """A variant together with the color it carries (custom-color only)."""

    variant: Variant
    color: Optional[str] = None

    def __post_init__(self) -> None:
        if self.variant is Variant.CUSTOM_COLOR and not self.color:
            raise ValueError("custom-color selection requires a color")
        if self.variant is not Variant.CUSTOM_COLOR and self.color is not None:
            raise ValueError(f"{self.variant.value} selection does not take a color")


ORIGINAL = VariantSelection(Variant.ORIGINAL)


@dataclass(frozen=True, slots=True)
class ViewerState:
    selection: VariantSelection
    current_url: str
    is_loading: bool = False
    custom_color: str = DEFAULT_CUSTOM_COLOR

    @property
    def selected_variant(self) -> Variant:
        return self.selection.variant


@dataclass(frozen=True, slots=True)
class Category:
    id: str
    title: str
    slug: str

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "Category":
        return cls(
            id=str(data.get("id") or ""),
            title=str(data.get("title") or ""),
            slug=str(data.get("slug") or ""),
        )


@dataclass(slots=True)
class Product:
    """A catalog product as returned by the CMS with ``depth=2``."""

    id: str
    name: str
    slug: str
    price: float
    description: str = ""
    category: Optional[Category] = None
    images: List[dict[str, Any]] = field(default_factory=list)
    sizes: List[str] = field(default_factory=list)
    material: Optional[str] = None
    stock_status: str = "ready"

    @property
    def is_pre_order(self) -> bool:
        return self.stock_status == "po"

    @property
    def is_ready(self) -> bool:
        return self.stock_status == "ready"

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "Product":
        raw_category = data.get("category")
        category = Category.from_payload(raw_category) if isinstance(raw_category, dict) else None

        images: List[dict[str, Any]] = []
        for item in data.get("images") or []:
            if isinstance(item, dict) and isinstance(item.get("image"), dict):
                images.append(item["image"])

        price = data.get("price")
        sizes = data.get("sizes") or []
        material = data.get("material")
        return cls(
            id=str(data.get("id") or ""),
            name=str(data.get("name") or ""),
            slug=str(data.get("slug") or ""),
            price=float(price) if isinstance(price, (int, float)) else 0.0,
            description=str(data.get("description") or ""),
            category=category,
            images=images,
            sizes=[str(size) for size in sizes if isinstance(size, str)],
            material=material if isinstance(material, str) and material else None,
            stock_status=str(data.get("stockStatus") or "ready"),
        )


@dataclass(slots=True)
class ProductPage:
    docs: List[Product]
    total_docs: int
