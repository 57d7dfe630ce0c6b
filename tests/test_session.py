"""Tests for the session controller."""

from __future__ import annotations

import asyncio
from dataclasses import replace

import pytest

from mockupgen.api.generation_client import GenerationClient
from mockupgen.config.settings import Settings
from mockupgen.errors import BatchValidationError, NoActiveBatchError
from mockupgen.imggen.encoding import EncodedImage
from mockupgen.jobs.models import JobStatus
from mockupgen.logic import AppState, MockupSession
from tests.fakes import GENERATED, FakeBackend, RecordingSleep


def _session(settings: Settings, backend: FakeBackend, sleep: RecordingSleep) -> MockupSession:
    return MockupSession(settings, GenerationClient(backend, sleep=sleep), sleep=sleep)


@pytest.fixture
def session(settings: Settings, backend: FakeBackend, sleep: RecordingSleep, product_uri: str) -> MockupSession:
    session = _session(settings, backend, sleep)
    session.set_product_image(product_uri)
    return session


def test_batch_requires_product_image(settings: Settings, backend: FakeBackend, sleep: RecordingSleep) -> None:
    session = _session(settings, backend, sleep)

    with pytest.raises(BatchValidationError):
        session.prepare_batch(scene_ids=["studio-white"])


def test_custom_theme_overrides_selected_scenes(session: MockupSession) -> None:
    batch = session.prepare_batch(scene_ids=["studio-white"], custom_theme="Cyberpunk city")

    assert batch.total == 20
    assert batch.custom_theme == "Cyberpunk city"
    assert all(job.status is JobStatus.PENDING for job in batch.jobs)
    assert session.state is AppState.GENERATING


def test_batch_size_is_capped(backend: FakeBackend, sleep: RecordingSleep, product_uri: str) -> None:
    session = _session(Settings(gemini_api_key="k", max_batch_size=2), backend, sleep)
    session.set_product_image(product_uri)

    with pytest.raises(BatchValidationError):
        session.prepare_batch(scene_ids=["studio-white", "luxury-marble", "lifestyle-wood"])


def test_empty_selection_is_rejected(session: MockupSession) -> None:
    with pytest.raises(BatchValidationError):
        session.prepare_batch(scene_ids=[], custom_theme="   ")


@pytest.mark.asyncio
async def test_generate_runs_to_completion(session: MockupSession) -> None:
    batch = await session.generate(scene_ids=["studio-white", "neon-night"], remove_background=False)

    assert [job.status for job in batch.jobs] == [JobStatus.SUCCEEDED, JobStatus.SUCCEEDED]
    assert session.state is AppState.COMPLETE
    assert batch.progress == 1.0


@pytest.mark.asyncio
async def test_new_batch_replaces_previous(session: MockupSession) -> None:
    first = await session.generate(scene_ids=["studio-white"])
    second = session.prepare_batch(scene_ids=["neon-night"])

    assert second.token == first.token + 1
    assert session.batch is second
    assert not session.is_current(first.token)


@pytest.mark.asyncio
async def test_retry_rebuilds_custom_variant_prompt(
    settings: Settings,
    sleep: RecordingSleep,
    product_uri: str,
) -> None:
    backend = FakeBackend([None] + [GENERATED] * 19)
    session = _session(settings, backend, sleep)
    session.set_product_image(product_uri)
    batch = await session.generate(custom_theme="Beach sunset")
    assert batch.jobs[0].status is JobStatus.FAILED

    job = await session.retry("custom-var-0")

    assert job.status is JobStatus.SUCCEEDED
    assert backend.prompts[-1] == backend.prompts[0]
    assert "Beach sunset. Camera/Angle: Front view" in backend.prompts[-1]


@pytest.mark.asyncio
async def test_favorites_flow(session: MockupSession) -> None:
    await session.generate(scene_ids=["studio-white", "neon-night"])

    assert session.toggle_favorite("neon-night") is True

    assert [job.id for job in session.favorites()] == ["neon-night"]


def test_operations_without_batch_raise(session: MockupSession) -> None:
    with pytest.raises(NoActiveBatchError):
        session.toggle_favorite("studio-white")
    with pytest.raises(NoActiveBatchError):
        session.favorites()


@pytest.mark.asyncio
async def test_start_over_discards_in_flight_results(
    settings: Settings,
    sleep: RecordingSleep,
    product_uri: str,
) -> None:
    started = asyncio.Event()
    release = asyncio.Event()

    class BlockingBackend(FakeBackend):
        async def render(self, image: EncodedImage, prompt: str, *, aspect_ratio: str) -> EncodedImage | None:
            self.prompts.append(prompt)
            started.set()
            await release.wait()
            return GENERATED

    backend = BlockingBackend()
    session = _session(replace(settings, item_delay=0.0), backend, sleep)
    session.set_product_image(product_uri)
    batch = session.prepare_batch(scene_ids=["studio-white", "neon-night"])
    task = asyncio.create_task(session.run_batch(batch))
    await started.wait()

    session.start_over()
    release.set()
    await task

    assert session.state is AppState.IDLE
    assert session.batch is None
    assert session.product_image is not None
    assert batch.jobs[0].status is JobStatus.RUNNING
    assert batch.jobs[1].status is JobStatus.PENDING
    assert len(backend.prompts) == 1
