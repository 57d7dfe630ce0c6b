"""Tests for configuration loading and backend selection."""

from __future__ import annotations

import base64
import os
from collections.abc import Iterator
from types import SimpleNamespace

import pytest

from mockupgen.api.aitunnel_client import AITunnelImageBackend
from mockupgen.api.backends import create_backend
from mockupgen.api.gemini_client import GeminiImageBackend
from mockupgen.config.settings import MAX_BATCH_SIZE, Settings, get_settings


@pytest.fixture
def fresh_settings(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(os, "environ", dict(os.environ))
    for name in ("GEMINI_API_KEY", "GOOGLE_API_KEY", "API_KEY", "MOCKUPGEN_BACKEND", "AITUNNEL_API_KEY"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_reads_environment(monkeypatch: pytest.MonkeyPatch, fresh_settings: None) -> None:
    monkeypatch.setenv("GOOGLE_API_KEY", "google-key")
    monkeypatch.setenv("MOCKUPGEN_CONCURRENCY", "3")
    monkeypatch.setenv("MOCKUPGEN_ITEM_DELAY", "0.5")

    settings = get_settings()

    assert settings.backend == "gemini"
    assert settings.api_key == "google-key"
    assert settings.concurrency == 3
    assert settings.item_delay == 0.5
    assert settings.max_attempts == 5
    assert settings.retry_base_delay == 4.0


def test_reads_dotenv_file(tmp_path, fresh_settings: None) -> None:
    (tmp_path / ".env").write_text("# local\nMOCKUPGEN_BACKEND=aitunnel\nAITUNNEL_API_KEY=tunnel\n", encoding="utf-8")

    settings = get_settings()

    assert settings.backend == "aitunnel"
    assert settings.api_key == "tunnel"


def test_batch_size_is_capped(monkeypatch: pytest.MonkeyPatch, fresh_settings: None) -> None:
    monkeypatch.setenv("MOCKUPGEN_MAX_BATCH_SIZE", "50")

    assert get_settings().max_batch_size == MAX_BATCH_SIZE


def test_create_backend_by_name() -> None:
    assert isinstance(create_backend(Settings(backend="gemini")), GeminiImageBackend)
    assert isinstance(create_backend(Settings(backend="aitunnel")), AITunnelImageBackend)
    with pytest.raises(ValueError):
        create_backend(Settings(backend="midjourney"))


def test_backend_configured_flag() -> None:
    assert GeminiImageBackend(Settings()).configured is False
    assert GeminiImageBackend(Settings(gemini_api_key="key")).configured is True


def test_gemini_picks_first_inline_image() -> None:
    text_part = SimpleNamespace(inline_data=None, text="here you go")
    image_part = SimpleNamespace(inline_data=SimpleNamespace(data=b"\x89PNG", mime_type="image/png"))
    response = SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=[text_part, image_part]))])

    image = GeminiImageBackend.first_inline_image(response)

    assert image is not None
    assert image.data == b"\x89PNG"


def test_gemini_without_image_returns_none() -> None:
    text_only = SimpleNamespace(
        candidates=[SimpleNamespace(content=SimpleNamespace(parts=[SimpleNamespace(inline_data=None)]))]
    )

    assert GeminiImageBackend.first_inline_image(text_only) is None
    assert GeminiImageBackend.first_inline_image(SimpleNamespace(candidates=[])) is None


def test_aitunnel_decodes_b64_payload() -> None:
    payload = base64.b64encode(b"image-bytes").decode("ascii")

    image = AITunnelImageBackend._to_image(SimpleNamespace(data=[SimpleNamespace(b64_json=payload)]))

    assert image is not None
    assert image.data == b"image-bytes"
    assert AITunnelImageBackend._to_image(SimpleNamespace(data=[])) is None
