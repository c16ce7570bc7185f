"""Cloudinary URL helpers.

Cloudinary applies a transformation when its directive appears as a path
segment right after ``/upload/``::

    https://res.cloudinary.com/demo/image/upload/v123/sample.jpg
    https://res.cloudinary.com/demo/image/upload/e_background_removal/v123/sample.jpg
"""

from __future__ import annotations

from typing import Any

CLOUDINARY_MARKER = "cloudinary.com"
UPLOAD_SEGMENT = "/upload/"


def is_transformable(url: Any) -> bool:
    """Return True when *url* is a Cloudinary URL with a single upload segment."""

    if not url or not isinstance(url, str):
        return False
    if CLOUDINARY_MARKER not in url:
        return False
    return len(url.split(UPLOAD_SEGMENT)) == 2


def get_transformed_url(original_url: Any, directive: str) -> str:
    """Inject *directive* into *original_url* after the upload segment.

    Non-Cloudinary URLs and URLs without exactly one ``/upload/`` segment are
    returned unchanged. Applying two directives stacks both segments.
    """

    if not original_url or not isinstance(original_url, str):
        return ""
    if CLOUDINARY_MARKER not in original_url:
        return original_url

    parts = original_url.split(UPLOAD_SEGMENT)
    if len(parts) != 2:
        return original_url

    clean_directive = directive[1:] if directive.startswith("/") else directive
    prefix, suffix = parts
    return f"{prefix}{UPLOAD_SEGMENT}{clean_directive}/{suffix}"
