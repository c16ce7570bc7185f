from __future__ import annotations

import re
from typing import Optional

from ..media.cloudinary import get_transformed_url
from ..models import Variant, VariantSelection

RECOLOR_TEMPLATE = "e_gen_recolor:prompt_clothing;to-color_{color}"
BACKGROUND_REMOVAL = "e_background_removal"

_HEX_COLOR = re.compile(r"^#?([0-9a-f]{3}|[0-9a-f]{6})$", re.IGNORECASE)


def normalize_hex_color(value: str) -> str:
    """Return *value* as a lowercase ``#rrggbb`` string."""

    if not isinstance(value, str):
        raise ValueError("Color must be a hex string such as '#1a2b3c'")
    match = _HEX_COLOR.match(value.strip())
    if not match:
        raise ValueError(f"Invalid hex color: {value!r}")
    digits = match.group(1).lower()
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return f"#{digits}"


def directive_for(selection: VariantSelection) -> Optional[str]:
    """Return the Cloudinary directive for *selection*, None for the original."""

    variant = selection.variant
    if variant is Variant.ORIGINAL:
        return None
    if variant is Variant.RED:
        return RECOLOR_TEMPLATE.format(color="red")
    if variant is Variant.BLUE:
        return RECOLOR_TEMPLATE.format(color="blue")
    if variant is Variant.NO_BG:
        return BACKGROUND_REMOVAL
    if variant is Variant.CUSTOM_COLOR:
        if selection.color is None:
            raise ValueError("custom-color selection requires a color")
        return RECOLOR_TEMPLATE.format(color=normalize_hex_color(selection.color)[1:])
    raise ValueError(f"Unknown variant: {variant!r}")


def derive_variant_url(original_url: str, selection: VariantSelection) -> str:
    directive = directive_for(selection)
    if directive is None:
        return original_url
    return get_transformed_url(original_url, directive)
