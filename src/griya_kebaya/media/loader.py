from __future__ import annotations

import logging
from io import BytesIO
from typing import Optional

import httpx
from PIL import Image, UnidentifiedImageError

from ..viewer.controller import VariantImageViewer

logger = logging.getLogger(__name__)


class ImageLoadError(RuntimeError):
    """The image at a URL could not be fetched or decoded."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(f"{message}: {url}")
        self.url = url


class ImageLoader:
    """Fetch images over HTTP and report the outcome to a viewer.

    A transformed Cloudinary URL is rendered by the CDN on first request, so
    a failed fetch is how a failed transformation shows up. Loads are not
    retried.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        *,
        base_url: str = "",
        timeout: float = 20.0,
    ) -> None:
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            base_url=base_url, timeout=timeout, follow_redirects=True
        )

    async def fetch(self, url: str) -> Image.Image:
        if not url:
            raise ImageLoadError(url, "Empty image URL")
        try:
            logger.debug("Fetching image %s", url)
            response = await self.client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.warning("Image %s returned status %s", url, exc.response.status_code)
            raise ImageLoadError(url, f"HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            logger.warning("Failed to fetch image %s: %s", url, exc)
            raise ImageLoadError(url, "Transport error") from exc

        try:
            with Image.open(BytesIO(response.content)) as fetched:
                fetched.load()
                return fetched.copy()
        except (UnidentifiedImageError, OSError) as exc:
            logger.warning("Unable to decode image %s: %s", url, exc)
            raise ImageLoadError(url, "Undecodable image") from exc

    async def load_into(self, viewer: VariantImageViewer) -> bool:
        """Load the viewer's current URL and signal completion or failure.

        The signal carries the URL that was requested, so a result that
        arrives after the viewer moved on is discarded by the viewer.
        """

        url = viewer.current_url
        try:
            await self.fetch(url)
        except ImageLoadError:
            viewer.handle_load_error(url)
            return False
        viewer.handle_load_complete(url)
        return True

    async def settle(self, viewer: VariantImageViewer) -> bool:
        """Load until the viewer is idle; returns whether the last load succeeded."""

        ok = await self.load_into(viewer)
        while viewer.is_loading and not viewer.closed:
            ok = await self.load_into(viewer)
        return ok

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> "ImageLoader":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
