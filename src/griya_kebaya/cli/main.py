from __future__ import annotations

import argparse
import asyncio
import logging
from typing import Optional, Sequence

from ..catalog.checkout import whatsapp_inquiry_url
from ..catalog.cms import CMSError, PayloadClient
from ..catalog.filters import SORT_OPTIONS, CatalogFilters
from ..catalog.formatting import format_rupiah, material_label, resolve_image_url
from ..config import Settings, load_settings
from ..media.cloudinary import is_transformable
from ..media.loader import ImageLoader
from ..models import ImageAsset, Variant, VariantSelection
from ..viewer.controller import VariantImageViewer
from ..viewer.variants import derive_variant_url, normalize_hex_color

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Griya Kebaya catalog tools")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    variants = subparsers.add_parser("variants", help="Print the URL of every image variant")
    variants.add_argument("url", help="Original image URL")
    variants.add_argument("--color", default="#000000", help="Hex color for the custom variant")

    check = subparsers.add_parser(
        "check", help="Load a variant through the CDN and report the final viewer state"
    )
    check.add_argument("url", help="Original image URL")
    check.add_argument(
        "--variant",
        choices=[variant.value for variant in Variant],
        default=Variant.RED.value,
        help="Variant to request",
    )
    check.add_argument("--color", default=None, help="Hex color for the custom variant")
    check.add_argument("--label", default="", help="Product name used as caption")

    products = subparsers.add_parser("products", help="List products from the CMS")
    products.add_argument("--search", default=None)
    products.add_argument(
        "--sort", choices=[value for value, _ in SORT_OPTIONS], default=SORT_OPTIONS[0][0]
    )
    products.add_argument("--category", default=None, help="Category slug")
    products.add_argument("--min-price", default=None)
    products.add_argument("--max-price", default=None)
    products.add_argument("--limit", type=int, default=24)
    return parser.parse_args(argv)


def _print_variants(args: argparse.Namespace) -> None:
    if not is_transformable(args.url):
        logger.info("URL is not a transformable Cloudinary URL; variants equal the original")
    color = normalize_hex_color(args.color)
    for variant in Variant:
        if variant is Variant.CUSTOM_COLOR:
            selection = VariantSelection(variant, color)
        else:
            selection = VariantSelection(variant)
        print(f"{variant.value:<13} {derive_variant_url(args.url, selection)}")


async def _check_variant(args: argparse.Namespace, settings: Settings) -> VariantImageViewer:
    viewer = VariantImageViewer(
        ImageAsset(args.url, args.label), debounce_delay=settings.debounce_delay
    )
    async with ImageLoader() as loader:
        with viewer:
            viewer.select(Variant(args.variant), args.color)
            await loader.settle(viewer)
    return viewer


def _list_products(args: argparse.Namespace, settings: Settings) -> None:
    filters = CatalogFilters(
        sort=args.sort,
        category=args.category,
        min_price=args.min_price,
        max_price=args.max_price,
        search=args.search,
    )
    with PayloadClient(settings.cms_url) as client:
        page = client.find_products(filters, limit=args.limit)

    logger.info("%s products found", page.total_docs)
    for product in page.docs:
        image_url = resolve_image_url(
            product.images[0] if product.images else None, settings.placeholder_image
        )
        details = [product.name, format_rupiah(product.price)]
        if product.material:
            details.append(material_label(product.material))
        if product.is_pre_order:
            details.append("Pre-Order")
        print(" | ".join(details))
        print(f"    {image_url}")
        print(f"    {whatsapp_inquiry_url(product.name, phone=settings.whatsapp_phone)}")


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        if args.command == "variants":
            _print_variants(args)
        elif args.command == "check":
            viewer = asyncio.run(_check_variant(args, load_settings()))
            print(f"{viewer.selected_variant.value} {viewer.current_url}")
            if viewer.selected_variant is not Variant(args.variant):
                logger.warning("Variant %s failed to render, fell back to original", args.variant)
                raise SystemExit(2)
        elif args.command == "products":
            _list_products(args, load_settings())
    except ValueError as exc:
        logger.error("Invalid input: %s", exc)
        raise SystemExit(1) from exc
    except CMSError as exc:
        logger.error("Failed to fetch products: %s", exc)
        raise SystemExit(2) from exc


if __name__ == "__main__":
    main()
