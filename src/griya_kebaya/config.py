from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .catalog.formatting import DEFAULT_PLACEHOLDER

logger = logging.getLogger(__name__)

DEFAULT_CMS_URL = "http://localhost:3000"
DEFAULT_WHATSAPP_PHONE = "6281234567890"
DEFAULT_DEBOUNCE_MS = 500


@dataclass(frozen=True, slots=True)
class Settings:
    cms_url: str = DEFAULT_CMS_URL
    whatsapp_phone: str = DEFAULT_WHATSAPP_PHONE
    placeholder_image: str = DEFAULT_PLACEHOLDER
    debounce_ms: int = DEFAULT_DEBOUNCE_MS

    @property
    def debounce_delay(self) -> float:
        return self.debounce_ms / 1000.0


def load_settings(
    env: Optional[Mapping[str, str]] = None, env_path: Path = Path(".env")
) -> Settings:
    """Build settings from ``GRIYA_*`` variables, falling back to a ``.env`` file."""

    environ = os.environ if env is None else env
    file_values = _read_env_file(env_path)

    def lookup(key: str) -> Optional[str]:
        value = (environ.get(key) or "").strip()
        if value:
            return value
        return file_values.get(key) or None

    debounce_ms = DEFAULT_DEBOUNCE_MS
    raw_debounce = lookup("GRIYA_DEBOUNCE_MS")
    if raw_debounce is not None:
        try:
            debounce_ms = int(raw_debounce)
        except ValueError as exc:
            raise ValueError(f"GRIYA_DEBOUNCE_MS must be an integer, got {raw_debounce!r}") from exc
        if debounce_ms < 0:
            raise ValueError("GRIYA_DEBOUNCE_MS must be non-negative")

    return Settings(
        cms_url=lookup("GRIYA_CMS_URL") or DEFAULT_CMS_URL,
        whatsapp_phone=lookup("GRIYA_WHATSAPP_PHONE") or DEFAULT_WHATSAPP_PHONE,
        placeholder_image=lookup("GRIYA_PLACEHOLDER_IMAGE") or DEFAULT_PLACEHOLDER,
        debounce_ms=debounce_ms,
    )


def _read_env_file(env_path: Path) -> dict[str, str]:
    values: dict[str, str] = {}
    if not env_path.exists():
        return values

    try:
        for line in env_path.read_text(encoding="utf-8").splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            if "=" not in stripped:
                continue
            key, raw_value = stripped.split("=", 1)
            value = raw_value.strip().strip('"').strip("'")
            if value:
                values[key.strip()] = value
    except OSError:
        logger.debug("Unable to read %s", env_path, exc_info=True)
    return values
