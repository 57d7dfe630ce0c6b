"""OpenAI-compatible image edit backend routed through the AITunnel proxy."""

from __future__ import annotations

import base64
from io import BytesIO
from typing import Any, Mapping

import httpx
from openai import AsyncOpenAI
from PIL import Image

from mockupgen.config.settings import Settings
from mockupgen.imggen.encoding import EncodedImage


class AITunnelImageBackend:
    """Renders mockups with ``images.edit`` on an OpenAI-compatible endpoint.

    The edit API takes a target ``size`` instead of an aspect ratio, so the
    aspect ratio argument is accepted for interface parity and ignored.
    """

    name = "aitunnel"

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._client: AsyncOpenAI | None = None

    @property
    def configured(self) -> bool:
        return bool(self._settings.aitunnel_api_key)

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self._settings.aitunnel_api_key,
                base_url=self._settings.aitunnel_base_url.rstrip("/"),
                http_client=httpx.AsyncClient(timeout=self._settings.request_timeout),
                max_retries=0,
            )
        return self._client

    @staticmethod
    def _image_as_png(image: EncodedImage) -> BytesIO:
        """Convert the product image to PNG since the edit API requires PNG input."""

        with Image.open(BytesIO(image.data)) as img:
            img = img.convert("RGBA")
            buffer = BytesIO()
            img.save(buffer, format="PNG")
        buffer.seek(0)
        buffer.name = "product.png"
        return buffer

    async def render(self, image: EncodedImage, prompt: str, *, aspect_ratio: str) -> EncodedImage | None:
        buffer = self._image_as_png(image)
        try:
            result = await self._get_client().images.edit(
                model=self._settings.aitunnel_image_model,
                image=buffer,
                prompt=prompt,
                size=self._settings.aitunnel_image_size,  # type: ignore[arg-type]
                response_format="b64_json",
            )
        finally:
            buffer.close()
        return self._to_image(result)

    @staticmethod
    def _to_image(result: Any) -> EncodedImage | None:
        data_attr = getattr(result, "data", None)
        if not isinstance(data_attr, list) or not data_attr:
            return None
        primary = data_attr[0]
        image_base64 = getattr(primary, "b64_json", None)
        if image_base64 is None and isinstance(primary, Mapping):
            image_base64 = primary.get("b64_json")
        if not image_base64:
            return None
        return EncodedImage(data=base64.b64decode(image_base64), mime_type="image/png")

    async def ping(self) -> bool:
        """Return ``True`` when the service responds to a model listing call."""

        models = await self._get_client().models.list()
        return bool(models.data)

    async def close(self) -> None:
        """Close the underlying HTTP session."""

        if self._client is not None:
            await self._client.close()
            self._client = None
