"""Retry-aware wrapper around a single image generation backend."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from mockupgen.api.backends import ImageBackend, create_backend
from mockupgen.config.settings import Settings
from mockupgen.errors import GenerationError, GenerationErrorKind, classify_error
from mockupgen.imggen.encoding import EncodedImage, decode_image
from mockupgen.metrics import prometheus_exporter as metrics

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]


class GenerationClient:
    """Issues one bounded backend call per attempt and backs off on rate limits.

    Only rate-limit failures are retried, after ``base_delay * 2 ** attempt``
    seconds, for at most ``max_attempts`` calls in total. Every other failure
    propagates after the first attempt.
    """

    def __init__(
        self,
        backend: ImageBackend,
        *,
        max_attempts: int = 5,
        base_delay: float = 4.0,
        timeout: float | None = 120.0,
        aspect_ratio: str = "1:1",
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._backend = backend
        self._max_attempts = max_attempts
        self._base_delay = base_delay
        self._timeout = timeout
        self._aspect_ratio = aspect_ratio
        self._sleep = sleep

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        backend: ImageBackend | None = None,
        *,
        sleep: SleepFunc = asyncio.sleep,
    ) -> GenerationClient:
        return cls(
            backend or create_backend(settings),
            max_attempts=settings.max_attempts,
            base_delay=settings.retry_base_delay,
            timeout=settings.request_timeout,
            aspect_ratio=settings.aspect_ratio,
            sleep=sleep,
        )

    @property
    def backend(self) -> ImageBackend:
        return self._backend

    def backoff_delay(self, attempt: int) -> float:
        """Seconds to wait before retry number ``attempt`` (starting at 1)."""

        return self._base_delay * 2**attempt

    async def generate(
        self,
        image: EncodedImage | str | bytes,
        prompt: str,
        *,
        label: str | None = None,
    ) -> EncodedImage:
        """Render ``prompt`` against ``image`` and return the generated image."""

        label = label or "mockup"
        if not self._backend.configured:
            logger.error("API key is missing for backend %s.", self._backend.name)
            raise GenerationError(
                GenerationErrorKind.CONFIGURATION,
                "Service configuration error: API key missing.",
            )

        source = decode_image(image)
        attempt = 0
        while True:
            try:
                result = await asyncio.wait_for(
                    self._backend.render(source, prompt, aspect_ratio=self._aspect_ratio),
                    timeout=self._timeout,
                )
            except Exception as exc:
                error = classify_error(exc)
                metrics.generation_attempts_total.labels(self._backend.name, error.kind.value).inc()
                if error.retryable and attempt < self._max_attempts - 1:
                    attempt += 1
                    delay = self.backoff_delay(attempt)
                    logger.warning(
                        "Hit rate limit for scene [%s]. Retrying in %.1fs... (Attempt %d/%d)",
                        label,
                        delay,
                        attempt,
                        self._max_attempts,
                    )
                    metrics.generation_retries_total.labels(self._backend.name).inc()
                    await self._sleep(delay)
                    continue
                logger.error("Generation failed for scene [%s]: %s", label, error)
                if error is exc:
                    raise
                raise error from exc

            if result is None:
                metrics.generation_attempts_total.labels(
                    self._backend.name, GenerationErrorKind.NO_IMAGE_RETURNED.value
                ).inc()
                logger.error("Generation for scene [%s] returned no image data.", label)
                raise GenerationError(
                    GenerationErrorKind.NO_IMAGE_RETURNED,
                    "The AI generation completed but returned no image data.",
                )

            metrics.generation_attempts_total.labels(self._backend.name, "success").inc()
            return result

    async def ping(self) -> bool:
        return await self._backend.ping()

    async def close(self) -> None:
        await self._backend.close()
