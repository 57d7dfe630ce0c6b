"""Test doubles for the generation backend and the sleep function."""

from __future__ import annotations

import asyncio
import base64
from io import BytesIO
from typing import Any

from PIL import Image

from mockupgen.imggen.encoding import EncodedImage


def make_image_bytes(fmt: str = "PNG", color: tuple[int, int, int] = (200, 30, 30)) -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (8, 8), color).save(buffer, format=fmt)
    return buffer.getvalue()


def data_uri(data: bytes, mime_type: str = "image/png") -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


GENERATED = EncodedImage(data=make_image_bytes(color=(10, 200, 10)), mime_type="image/png")


class ProviderError(Exception):
    """Stand-in for an SDK error carrying an HTTP status code."""

    def __init__(self, message: str, code: int | None = None) -> None:
        super().__init__(message)
        self.code = code


def rate_limit_error() -> ProviderError:
    return ProviderError("429 RESOURCE_EXHAUSTED", code=429)


class FakeBackend:
    """Backend returning scripted outcomes; exceptions are raised, ``None`` means no image."""

    name = "fake"

    def __init__(self, outcomes: list[Any] | None = None, *, configured: bool = True) -> None:
        self.configured = configured
        self.outcomes = list(outcomes or [])
        self.prompts: list[str] = []
        self.closed = False
        self.events: list[str] | None = None

    async def render(self, image: EncodedImage, prompt: str, *, aspect_ratio: str) -> EncodedImage | None:
        self.prompts.append(prompt)
        if self.events is not None:
            self.events.append("call")
        await asyncio.sleep(0)
        outcome = self.outcomes.pop(0) if self.outcomes else GENERATED
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        self.closed = True


class RecordingSleep:
    """Injectable sleep that records delays and only yields to the event loop."""

    def __init__(self) -> None:
        self.delays: list[float] = []
        self.events: list[str] | None = None

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
        if self.events is not None:
            self.events.append("sleep")
        await asyncio.sleep(0)


