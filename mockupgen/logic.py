"""Session controller that owns the current batch and its generation token."""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Iterable

from mockupgen.api.generation_client import GenerationClient, SleepFunc
from mockupgen.catalog.sources import SceneSource, build_scene, custom_variants, source_from_job_id
from mockupgen.config.settings import Settings
from mockupgen.errors import BatchValidationError, NoActiveBatchError
from mockupgen.imggen.encoding import EncodedImage, decode_image
from mockupgen.jobs.models import Batch, Job
from mockupgen.jobs.queue import JobQueue
from mockupgen.storage.results import ResultStore

logger = logging.getLogger(__name__)


class AppState(str, Enum):
    """Coarse state shown by the presentation layer."""

    IDLE = "idle"
    GENERATING = "generating"
    COMPLETE = "complete"


class MockupSession:
    """Encapsulates the product image, the current batch and single-job retries.

    Every new batch and every reset bumps the generation token; the queue
    consults :meth:`is_current` before applying any update, so results of a
    superseded batch are discarded.
    """

    def __init__(
        self,
        settings: Settings,
        client: GenerationClient,
        *,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        self._settings = settings
        self._client = client
        self._token = 0
        self._batch: Batch | None = None
        self._product: EncodedImage | None = None
        self._state = AppState.IDLE
        self._queue = JobQueue(
            client,
            item_delay=settings.item_delay,
            sleep=sleep,
            is_current=self.is_current,
            on_progress=self._handle_progress,
            on_complete=self._handle_complete,
        )

    @property
    def state(self) -> AppState:
        return self._state

    @property
    def batch(self) -> Batch | None:
        return self._batch

    @property
    def token(self) -> int:
        return self._token

    @property
    def product_image(self) -> EncodedImage | None:
        return self._product

    def is_current(self, token: int) -> bool:
        return self._batch is not None and token == self._token

    def set_product_image(self, image: EncodedImage | str | bytes) -> EncodedImage:
        """Validate and keep the uploaded product photo for later batches."""

        self._product = decode_image(image)
        return self._product

    def prepare_batch(
        self,
        *,
        scene_ids: Iterable[str] | None = None,
        custom_theme: str | None = None,
        remove_background: bool = True,
        concurrency: int | None = None,
    ) -> Batch:
        """Create a new batch in the pending state, replacing the previous one.

        A non-empty ``custom_theme`` switches to custom mode and expands into
        every camera-angle variant; ``scene_ids`` are ignored then.
        """

        if self._product is None:
            raise BatchValidationError("Upload a product image first.")

        theme = (custom_theme or "").strip()
        sources: list[SceneSource]
        if theme:
            sources = custom_variants(theme)
        else:
            sources = [source_from_job_id(scene_id) for scene_id in scene_ids or []]
        if not sources:
            raise BatchValidationError("Select at least one scene or describe a custom theme.")
        if len(sources) > self._settings.max_batch_size:
            raise BatchValidationError(f"A batch is limited to {self._settings.max_batch_size} scenes.")

        requests = [build_scene(source) for source in sources]
        batch = Batch(
            token=self._token + 1,
            store=ResultStore(Job(scene) for scene in requests),
            image=self._product,
            remove_background=remove_background,
            custom_theme=theme or None,
            concurrency=concurrency if concurrency is not None else self._settings.concurrency,
        )
        self._token = batch.token
        self._batch = batch
        self._state = AppState.GENERATING
        return batch

    async def run_batch(self, batch: Batch) -> Batch:
        return await self._queue.run_batch(batch, batch.concurrency)

    async def generate(
        self,
        *,
        scene_ids: Iterable[str] | None = None,
        custom_theme: str | None = None,
        remove_background: bool = True,
        concurrency: int | None = None,
    ) -> Batch:
        """Prepare a batch and wait until every job is terminal."""

        batch = self.prepare_batch(
            scene_ids=scene_ids,
            custom_theme=custom_theme,
            remove_background=remove_background,
            concurrency=concurrency,
        )
        return await self.run_batch(batch)

    async def retry(self, job_id: str) -> Job:
        return await self._queue.retry_job(self._require_batch(), job_id)

    def toggle_favorite(self, job_id: str) -> bool | None:
        return self._require_batch().store.toggle_favorite(job_id)

    def favorites(self) -> list[Job]:
        return self._require_batch().store.filter_favorites()

    async def close(self) -> None:
        await self._client.close()

    def start_over(self) -> None:
        """Discard the current batch; in-flight results are ignored when they land."""

        if self._batch is not None:
            logger.info("Discarding batch %s.", self._batch.token)
        self._token += 1
        self._batch = None
        self._state = AppState.IDLE

    def _require_batch(self) -> Batch:
        if self._batch is None:
            raise NoActiveBatchError("No batch has been generated yet.")
        return self._batch

    def _handle_progress(self, batch: Batch, completed: int) -> None:
        logger.debug("Batch %s progress: %d of %d complete.", batch.token, completed, batch.total)

    def _handle_complete(self, batch: Batch) -> None:
        self._state = AppState.COMPLETE
