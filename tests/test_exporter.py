"""Tests for writing generated mockups to disk."""

from __future__ import annotations

from pathlib import Path

import pytest

from mockupgen.api.generation_client import GenerationClient
from mockupgen.config.settings import Settings
from mockupgen.logic import MockupSession
from mockupgen.storage.exporter import ResultExporter
from tests.fakes import GENERATED, FakeBackend, RecordingSleep


@pytest.mark.asyncio
async def test_export_writes_succeeded_and_favorite_results(
    tmp_path: Path,
    settings: Settings,
    sleep: RecordingSleep,
    product_uri: str,
) -> None:
    backend = FakeBackend([GENERATED, None, GENERATED])
    session = MockupSession(settings, GenerationClient(backend, sleep=sleep), sleep=sleep)
    session.set_product_image(product_uri)
    batch = await session.generate(scene_ids=["studio-white", "luxury-marble", "neon-night"])
    session.toggle_favorite("neon-night")
    exporter = ResultExporter(tmp_path / "out")

    everything = await exporter.export(batch)
    favorites = await exporter.export(batch, favorites_only=True)

    assert sorted(path.name for path in everything) == ["mockupgen-neon-night.png", "mockupgen-studio-white.png"]
    assert [path.name for path in favorites] == ["mockupgen-neon-night.png"]
    assert (tmp_path / "out" / "mockupgen-studio-white.png").read_bytes() == GENERATED.data
