"""Connectivity checks for the configured image generation backend."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable

from mockupgen.api.backends import ImageBackend, create_backend
from mockupgen.config.settings import get_settings


@dataclass(slots=True)
class IntegrationCheckResult:
    """Structured result describing the integration check outcome."""

    name: str
    success: bool
    message: str


async def _run_check(
    name: str,
    factory: Callable[[], Awaitable[bool]],
    success_message: str,
) -> IntegrationCheckResult:
    try:
        result = await factory()
    except Exception as exc:  # pragma: no cover - defensive branch
        return IntegrationCheckResult(name=name, success=False, message=str(exc))

    if result:
        return IntegrationCheckResult(name=name, success=True, message=success_message)
    return IntegrationCheckResult(
        name=name,
        success=False,
        message="Service responded with non-success status.",
    )


async def check_backend(backend: ImageBackend | None = None) -> IntegrationCheckResult:
    """Ping the generation backend and return the result."""

    backend = backend or create_backend(get_settings())
    if not backend.configured:
        return IntegrationCheckResult(
            name=backend.name,
            success=False,
            message="API key is not configured.",
        )

    async def _ping() -> bool:
        try:
            return await backend.ping()
        finally:
            await backend.close()

    return await _run_check(
        name=backend.name,
        factory=_ping,
        success_message=f"{backend.name} image API is reachable.",
    )


async def run_all_checks() -> list[IntegrationCheckResult]:
    """Execute all integration checks concurrently."""

    return list(await asyncio.gather(check_backend()))
