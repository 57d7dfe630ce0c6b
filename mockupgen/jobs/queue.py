"""Worker pool that drains a batch of scene jobs against the generation client."""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from typing import Callable

from mockupgen.api.generation_client import GenerationClient, SleepFunc
from mockupgen.catalog.sources import SceneRequest, build_scene
from mockupgen.errors import BatchValidationError, JobNotRetryableError, describe_error
from mockupgen.imggen.prompt_builder import build_prompt
from mockupgen.jobs.models import Batch, Job, JobStatus
from mockupgen.metrics import prometheus_exporter as metrics

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[Batch, int], None]
CompletionCallback = Callable[[Batch], None]
TokenCheck = Callable[[int], bool]

DEFAULT_ITEM_DELAY = 2.0


def _always_current(_token: int) -> bool:
    return True


class JobQueue:
    """Runs batches through prompt building and generation.

    Workers claim pending jobs one at a time under a single lock and wait
    ``item_delay`` seconds before every call to stay below the provider's
    rate limit. Updates for a batch whose token is no longer current are
    dropped, and its workers stop claiming new jobs.
    """

    def __init__(
        self,
        client: GenerationClient,
        *,
        item_delay: float = DEFAULT_ITEM_DELAY,
        sleep: SleepFunc = asyncio.sleep,
        is_current: TokenCheck = _always_current,
        on_progress: ProgressCallback | None = None,
        on_complete: CompletionCallback | None = None,
    ) -> None:
        self._client = client
        self._item_delay = item_delay
        self._sleep = sleep
        self._is_current = is_current
        self._on_progress = on_progress
        self._on_complete = on_complete

    async def run_batch(self, batch: Batch, concurrency: int = 1) -> Batch:
        """Drain every pending job of ``batch`` and fire the completion callback once."""

        if concurrency < 1:
            raise BatchValidationError("Concurrency must be at least 1.")
        if batch.finished:
            raise BatchValidationError(f"Batch {batch.token} has already been run.")

        pending: deque[Job] = deque(job for job in batch.jobs if job.status is JobStatus.PENDING)
        lock = asyncio.Lock()
        worker_count = min(concurrency, len(pending))
        logger.info(
            "Starting batch %s: %d scenes, %d worker(s).",
            batch.token,
            batch.total,
            worker_count,
        )

        metrics.active_batches.inc()
        try:
            await asyncio.gather(*(self._worker(batch, pending, lock) for _ in range(worker_count)))
        finally:
            metrics.active_batches.dec()

        batch.finished = True
        if self._is_current(batch.token):
            failed = sum(1 for job in batch.jobs if job.has_error)
            logger.info("Batch %s complete: %d succeeded, %d failed.", batch.token, batch.total - failed, failed)
            if self._on_complete is not None:
                self._on_complete(batch)
        return batch

    async def retry_job(self, batch: Batch, job_id: str) -> Job:
        """Re-run one terminal job outside the worker pool."""

        job = batch.get(job_id)
        if not job.status.terminal:
            raise JobNotRetryableError(f"Job {job_id} is {job.status.value}; only finished jobs can be retried.")

        scene = build_scene(job.scene.source)
        if not self._apply(batch, job, job.mark_running):
            return job
        logger.info("Retrying scene [%s] of batch %s.", scene.display_name, batch.token)
        await self._execute(batch, job, scene)
        return job

    async def _claim(self, batch: Batch, pending: deque[Job], lock: asyncio.Lock) -> Job | None:
        async with lock:
            if not self._is_current(batch.token):
                pending.clear()
                return None
            if not pending:
                return None
            job = pending.popleft()
            self._apply(batch, job, job.mark_running)
            return job

    async def _worker(self, batch: Batch, pending: deque[Job], lock: asyncio.Lock) -> None:
        while True:
            job = await self._claim(batch, pending, lock)
            if job is None:
                return
            try:
                await self._sleep(self._item_delay)
                await self._execute(batch, job, job.scene)
            finally:
                self._record_completion(batch)

    async def _execute(self, batch: Batch, job: Job, scene: SceneRequest) -> None:
        prompt = build_prompt(scene.prompt_text, batch.remove_background)
        try:
            image = await self._client.generate(batch.image, prompt, label=scene.display_name)
        except Exception as exc:
            logger.error("Failed to generate %s: %s", scene.display_name, exc)
            detail = describe_error(exc)
            self._apply(batch, job, lambda: job.mark_failed(detail))
            return
        self._apply(batch, job, lambda: job.mark_succeeded(image))

    def _apply(self, batch: Batch, job: Job, update: Callable[[], None]) -> bool:
        if not self._is_current(batch.token):
            logger.debug("Discarding stale update for job %s of batch %s.", job.id, batch.token)
            return False
        update()
        if job.status.terminal:
            metrics.jobs_total.labels(job.status.value).inc()
        batch.store.publish(job)
        return True

    def _record_completion(self, batch: Batch) -> None:
        batch.completed_count += 1
        if self._on_progress is not None and self._is_current(batch.token):
            self._on_progress(batch, batch.completed_count)
