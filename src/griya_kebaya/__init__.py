from .catalog.cms import CMSError, NotFoundError, PayloadClient
from .catalog.filters import CatalogFilters
from .config import Settings, load_settings
from .media.cloudinary import get_transformed_url
from .media.loader import ImageLoader, ImageLoadError
from .models import Category, ImageAsset, Product, ProductPage, Variant, VariantSelection, ViewerState
from .viewer.controller import VariantImageViewer, ViewerClosedError, ViewerError
from .viewer.debounce import Debouncer
from .viewer.render import render_viewer
from .viewer.variants import derive_variant_url

__all__ = [
    "CMSError",
    "CatalogFilters",
    "Category",
    "Debouncer",
    "ImageAsset",
    "ImageLoadError",
    "ImageLoader",
    "NotFoundError",
    "PayloadClient",
    "Product",
    "ProductPage",
    "Settings",
    "VariantImageViewer",
    "Variant",
    "VariantSelection",
    "ViewerClosedError",
    "ViewerError",
    "ViewerState",
    "derive_variant_url",
    "get_transformed_url",
    "load_settings",
    "render_viewer",
]
