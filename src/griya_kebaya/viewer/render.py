from __future__ import annotations

from typing import Any

from jinja2 import Environment, select_autoescape

from ..models import Variant
from .controller import VariantImageViewer

VARIANT_LABELS: dict[Variant, str] = {
    Variant.ORIGINAL: "Asli",
    Variant.RED: "Merah",
    Variant.BLUE: "Biru",
    Variant.NO_BG: "Hapus Bg",
    Variant.CUSTOM_COLOR: "Warna Lain",
}

_TEMPLATE = """\
<div class="magic-viewer" data-variant="{{ variant }}">
  <div class="magic-viewer__frame">
    {%- if is_loading %}
    <div class="magic-viewer__loading">Magic AI sedang bekerja...</div>
    {%- endif %}
    {%- if is_transformed %}
    <span class="magic-viewer__badge">AI Generate</span>
    {%- endif %}
    <img src="{{ current_url }}" alt="{{ alt }}"{% if is_loading %} class="is-loading"{% endif %}>
  </div>
  <div class="magic-viewer__controls">
    {%- if can_reset %}
    <button type="button" name="reset" value="original">Reset</button>
    {%- endif %}
    {%- for control in controls %}
    <button type="button" name="variant" value="{{ control.value }}"{% if control.active %} aria-pressed="true"{% endif %}>{{ control.label }}</button>
    {%- endfor %}
    <input type="color" name="custom_color" value="{{ custom_color }}">
  </div>
</div>
"""

_env = Environment(autoescape=select_autoescape(default=True, default_for_string=True))
_template = _env.from_string(_TEMPLATE)


def viewer_context(viewer: VariantImageViewer) -> dict[str, Any]:
    variant = viewer.selected_variant
    label = viewer.asset.subject_label
    return {
        "variant": variant.value,
        "current_url": viewer.current_url,
        "alt": f"{label} - {variant.value}" if label else variant.value,
        "is_loading": viewer.is_loading,
        "is_transformed": variant is not Variant.ORIGINAL,
        "can_reset": viewer.can_reset,
        "custom_color": viewer.custom_color,
        "controls": [
            {"value": option.value, "label": VARIANT_LABELS[option], "active": option is variant}
            for option in Variant
        ],
    }


def render_viewer(viewer: VariantImageViewer) -> str:
    return _template.render(**viewer_context(viewer))
