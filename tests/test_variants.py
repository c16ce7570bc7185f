from __future__ import annotations

import pytest

from griya_kebaya.models import Variant, VariantSelection
from griya_kebaya.viewer.variants import derive_variant_url, directive_for, normalize_hex_color

SAMPLE = "https://res.cloudinary.com/demo/image/upload/v123/sample.jpg"
PREFIX = "https://res.cloudinary.com/demo/image/upload/"


@pytest.mark.parametrize(
    "selection, expected",
    [
        (VariantSelection(Variant.ORIGINAL), SAMPLE),
        (
            VariantSelection(Variant.RED),
            PREFIX + "e_gen_recolor:prompt_clothing;to-color_red/v123/sample.jpg",
        ),
        (
            VariantSelection(Variant.BLUE),
            PREFIX + "e_gen_recolor:prompt_clothing;to-color_blue/v123/sample.jpg",
        ),
        (VariantSelection(Variant.NO_BG), PREFIX + "e_background_removal/v123/sample.jpg"),
        (
            VariantSelection(Variant.CUSTOM_COLOR, "#1A2B3C"),
            PREFIX + "e_gen_recolor:prompt_clothing;to-color_1a2b3c/v123/sample.jpg",
        ),
    ],
)
def test_derive_variant_url(selection: VariantSelection, expected: str) -> None:
    assert derive_variant_url(SAMPLE, selection) == expected


def test_derive_is_idempotent() -> None:
    selection = VariantSelection(Variant.CUSTOM_COLOR, "#3c2b1a")
    assert derive_variant_url(SAMPLE, selection) == derive_variant_url(SAMPLE, selection)


def test_original_has_no_directive() -> None:
    assert directive_for(VariantSelection(Variant.ORIGINAL)) is None


def test_non_cdn_url_ignores_every_variant() -> None:
    for variant in (Variant.RED, Variant.BLUE, Variant.NO_BG):
        assert derive_variant_url("/placeholder.jpg", VariantSelection(variant)) == "/placeholder.jpg"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("#1A2B3C", "#1a2b3c"),
        ("1a2b3c", "#1a2b3c"),
        (" #abc ", "#aabbcc"),
    ],
)
def test_normalize_hex_color(raw: str, expected: str) -> None:
    assert normalize_hex_color(raw) == expected


@pytest.mark.parametrize("raw", ["", "#12345", "red", "#ggg000"])
def test_normalize_hex_color_rejects_garbage(raw: str) -> None:
    with pytest.raises(ValueError):
        normalize_hex_color(raw)


def test_custom_color_selection_requires_color() -> None:
    with pytest.raises(ValueError):
        VariantSelection(Variant.CUSTOM_COLOR)
    with pytest.raises(ValueError):
        VariantSelection(Variant.RED, "#ff0000")


def test_custom_color_directive_without_color_raises_value_error() -> None:
    selection = VariantSelection(Variant.CUSTOM_COLOR, "#1a2b3c")
    object.__setattr__(selection, "color", None)
    with pytest.raises(ValueError):
        directive_for(selection)
