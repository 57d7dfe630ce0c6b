"""Pluggable image generation backends."""

from __future__ import annotations

from typing import Protocol

from mockupgen.config.settings import Settings
from mockupgen.imggen.encoding import EncodedImage


class ImageBackend(Protocol):
    """A single-call image generation provider.

    ``render`` performs exactly one request and returns ``None`` when the
    provider answered without an image. Provider exceptions propagate
    unchanged; the generation client classifies them.
    """

    name: str

    @property
    def configured(self) -> bool: ...

    async def render(self, image: EncodedImage, prompt: str, *, aspect_ratio: str) -> EncodedImage | None: ...

    async def ping(self) -> bool: ...

    async def close(self) -> None: ...


def create_backend(settings: Settings) -> ImageBackend:
    """Instantiate the backend selected by ``MOCKUPGEN_BACKEND``."""

    if settings.backend == "gemini":
        from mockupgen.api.gemini_client import GeminiImageBackend

        return GeminiImageBackend(settings)
    if settings.backend == "aitunnel":
        from mockupgen.api.aitunnel_client import AITunnelImageBackend

        return AITunnelImageBackend(settings)
    raise ValueError(f"Unknown generation backend: {settings.backend!r}")
