"""Application configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

# Hard ceiling for a single batch; configuration may lower it but never raise it.
MAX_BATCH_SIZE = 20


def _load_env_file(path: str = ".env") -> None:
    """Populate os.environ from the provided .env file if it exists."""

    env_path = Path(path)
    if not env_path.exists():
        return

    for line in env_path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        os.environ.setdefault(key.strip(), value.strip())


@dataclass(frozen=True, slots=True)
class Settings:
    """Centralised project settings based on OS environment variables."""

    environment: str = "dev"
    log_level: str = "INFO"

    backend: str = "gemini"

    gemini_api_key: str = ""
    gemini_image_model: str = "gemini-2.5-flash-image"

    aitunnel_api_key: str = ""
    aitunnel_base_url: str = "https://api.aitunnel.ru/v1"
    aitunnel_image_model: str = "gemini-2.5-flash-image"
    aitunnel_image_size: str = "1024x1024"

    aspect_ratio: str = "1:1"
    request_timeout: float = 120.0
    max_attempts: int = 5
    retry_base_delay: float = 4.0
    item_delay: float = 2.0
    concurrency: int = 1
    max_batch_size: int = MAX_BATCH_SIZE

    generated_root: str = "storage/generated"

    @property
    def api_key(self) -> str:
        """Credential for the active generation backend."""

        if self.backend == "aitunnel":
            return self.aitunnel_api_key
        return self.gemini_api_key


def _build_settings() -> Settings:
    _load_env_file()

    max_batch_size = int(os.getenv("MOCKUPGEN_MAX_BATCH_SIZE", str(MAX_BATCH_SIZE)))
    return Settings(
        environment=os.getenv("ENVIRONMENT", "dev"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        backend=os.getenv("MOCKUPGEN_BACKEND", "gemini").strip().lower(),
        gemini_api_key=os.getenv(
            "GEMINI_API_KEY",
            os.getenv("GOOGLE_API_KEY", os.getenv("API_KEY", "")),
        ),
        gemini_image_model=os.getenv("GEMINI_IMAGE_MODEL", "gemini-2.5-flash-image"),
        aitunnel_api_key=os.getenv("AITUNNEL_API_KEY", ""),
        aitunnel_base_url=os.getenv("AITUNNEL_BASE_URL", "https://api.aitunnel.ru/v1"),
        aitunnel_image_model=os.getenv("AITUNNEL_IMAGE_MODEL", "gemini-2.5-flash-image"),
        aitunnel_image_size=os.getenv("AITUNNEL_IMAGE_SIZE", "1024x1024"),
        aspect_ratio=os.getenv("MOCKUPGEN_ASPECT_RATIO", "1:1"),
        request_timeout=float(os.getenv("MOCKUPGEN_REQUEST_TIMEOUT", "120")),
        max_attempts=int(os.getenv("MOCKUPGEN_MAX_ATTEMPTS", "5")),
        retry_base_delay=float(os.getenv("MOCKUPGEN_RETRY_BASE_DELAY", "4.0")),
        item_delay=float(os.getenv("MOCKUPGEN_ITEM_DELAY", "2.0")),
        concurrency=int(os.getenv("MOCKUPGEN_CONCURRENCY", "1")),
        max_batch_size=min(max_batch_size, MAX_BATCH_SIZE),
        generated_root=os.getenv("MOCKUPGEN_GENERATED_ROOT", "storage/generated"),
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance to avoid re-reading configuration."""

    return _build_settings()
