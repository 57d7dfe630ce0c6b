"""Shared fixtures for the test-suite."""

from __future__ import annotations

import pytest

from mockupgen.api.generation_client import GenerationClient
from mockupgen.config.settings import Settings
from tests.fakes import FakeBackend, RecordingSleep, data_uri, make_image_bytes


@pytest.fixture
def png_bytes() -> bytes:
    return make_image_bytes()


@pytest.fixture
def product_uri(png_bytes: bytes) -> str:
    return data_uri(png_bytes)


@pytest.fixture
def settings() -> Settings:
    return Settings(gemini_api_key="test-key")


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def client(backend: FakeBackend, sleep: RecordingSleep) -> GenerationClient:
    return GenerationClient(backend, sleep=sleep)
