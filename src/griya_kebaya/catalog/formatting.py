from __future__ import annotations

import re
from typing import Any, Optional

DEFAULT_PLACEHOLDER = "/placeholder.jpg"

_MATERIAL_LABELS = {
    "brokat_semi": "Brokat Semi Prancis",
}


def format_rupiah(amount: float) -> str:
    """Format *amount* the way id-ID renders IDR, e.g. ``Rp\u00a0150.000``.

    Like ``Intl.NumberFormat`` the currency symbol is followed by a no-break space.
    """

    value = int(round(amount))
    sign = "-" if value < 0 else ""
    grouped = f"{abs(value):,}".replace(",", ".")
    return f"{sign}Rp\u00a0{grouped}"


def material_label(value: Optional[str]) -> str:
    if not value:
        return ""
    return _MATERIAL_LABELS.get(value, value.replace("_", " "))


def slugify(text: str) -> str:
    slug = text.lower().replace(" ", "-")
    return re.sub(r"[^\w-]+", "", slug)


def resolve_image_url(image: Any, placeholder: str = DEFAULT_PLACEHOLDER) -> str:
    """Pick the best URL of a CMS media document.

    Priority is the Cloudinary URL, then the ``card`` size, then the upload URL.
    """

    if not isinstance(image, dict):
        return placeholder
    cloudinary_url = image.get("cloudinary_url")
    if isinstance(cloudinary_url, str) and cloudinary_url:
        return cloudinary_url
    sizes = image.get("sizes")
    if isinstance(sizes, dict):
        card = sizes.get("card")
        if isinstance(card, dict) and isinstance(card.get("url"), str) and card["url"]:
            return card["url"]
    url = image.get("url")
    if isinstance(url, str) and url:
        return url
    return placeholder
