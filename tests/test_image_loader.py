from __future__ import annotations

import asyncio
from io import BytesIO

import httpx
import pytest
from PIL import Image

from griya_kebaya.media.loader import ImageLoader, ImageLoadError
from griya_kebaya.models import ImageAsset, Variant
from griya_kebaya.viewer.controller import VariantImageViewer

SAMPLE = "https://res.cloudinary.com/demo/image/upload/v123/sample.jpg"


def _png_bytes() -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (4, 4), "red").save(buffer, format="PNG")
    return buffer.getvalue()


def _loader(handler) -> ImageLoader:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ImageLoader(client)


def test_fetch_decodes_image() -> None:
    png = _png_bytes()

    async def scenario() -> Image.Image:
        loader = _loader(lambda request: httpx.Response(200, content=png))
        try:
            return await loader.fetch(SAMPLE)
        finally:
            await loader.client.aclose()

    image = asyncio.run(scenario())
    assert image.size == (4, 4)


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(404),
        httpx.Response(200, content=b"not an image"),
    ],
)
def test_fetch_raises_image_load_error(response: httpx.Response) -> None:
    async def scenario() -> None:
        loader = _loader(lambda request: response)
        try:
            await loader.fetch(SAMPLE)
        finally:
            await loader.client.aclose()

    with pytest.raises(ImageLoadError):
        asyncio.run(scenario())


def test_settle_falls_back_when_transformation_fails(scheduler) -> None:
    png = _png_bytes()
    requested: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(str(request.url))
        if "e_gen_recolor" in request.url.path:
            return httpx.Response(423)
        return httpx.Response(200, content=png)

    viewer = VariantImageViewer(ImageAsset(SAMPLE, "Kebaya"), scheduler=scheduler)
    viewer.select(Variant.RED)

    async def scenario() -> bool:
        loader = _loader(handler)
        try:
            return await loader.settle(viewer)
        finally:
            await loader.client.aclose()

    assert asyncio.run(scenario()) is True
    assert viewer.selected_variant is Variant.ORIGINAL
    assert not viewer.is_loading
    assert len(requested) == 2


def test_load_into_reports_success(scheduler) -> None:
    png = _png_bytes()
    viewer = VariantImageViewer(ImageAsset(SAMPLE, "Kebaya"), scheduler=scheduler)
    viewer.select(Variant.NO_BG)

    async def scenario() -> bool:
        loader = _loader(lambda request: httpx.Response(200, content=png))
        try:
            return await loader.load_into(viewer)
        finally:
            await loader.client.aclose()

    assert asyncio.run(scenario()) is True
    assert viewer.selected_variant is Variant.NO_BG
    assert not viewer.is_loading
