"""Gemini inline-data image backend."""

from __future__ import annotations

import base64
import logging
from typing import Any

from google import genai
from google.genai import types

from mockupgen.config.settings import Settings
from mockupgen.imggen.encoding import DEFAULT_MIME_TYPE, EncodedImage

logger = logging.getLogger(__name__)


class GeminiImageBackend:
    """Sends the product photo and instruction to a Gemini image model."""

    name = "gemini"

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._client: genai.Client | None = None

    @property
    def configured(self) -> bool:
        return bool(self._settings.gemini_api_key)

    def _get_client(self) -> genai.Client:
        if self._client is None:
            self._client = genai.Client(api_key=self._settings.gemini_api_key)
        return self._client

    async def render(self, image: EncodedImage, prompt: str, *, aspect_ratio: str) -> EncodedImage | None:
        response = await self._get_client().aio.models.generate_content(
            model=self._settings.gemini_image_model,
            contents=[
                types.Part.from_bytes(data=image.data, mime_type=image.mime_type),
                types.Part.from_text(text=prompt),
            ],
            config=types.GenerateContentConfig(
                response_modalities=["IMAGE", "TEXT"],
                image_config=types.ImageConfig(aspect_ratio=aspect_ratio),
            ),
        )
        return self.first_inline_image(response)

    @staticmethod
    def first_inline_image(response: Any) -> EncodedImage | None:
        """Return the first inline image payload of the first candidate."""

        candidates = getattr(response, "candidates", None) or []
        if not candidates:
            logger.warning("Gemini response has no candidates.")
            return None
        content = getattr(candidates[0], "content", None)
        for part in getattr(content, "parts", None) or []:
            inline = getattr(part, "inline_data", None)
            if inline is None or not inline.data:
                continue
            data = inline.data
            if isinstance(data, str):
                data = base64.b64decode(data)
            return EncodedImage(data=data, mime_type=inline.mime_type or DEFAULT_MIME_TYPE)
        return None

    async def ping(self) -> bool:
        """Return ``True`` when the configured model can be looked up."""

        model = await self._get_client().aio.models.get(model=self._settings.gemini_image_model)
        return model is not None

    async def close(self) -> None:
        self._client = None
