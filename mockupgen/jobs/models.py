"""Job and batch models for the generation queue."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from mockupgen.catalog.sources import SceneRequest
from mockupgen.config.settings import MAX_BATCH_SIZE
from mockupgen.errors import BatchValidationError, UnknownJobError
from mockupgen.imggen.encoding import EncodedImage
from mockupgen.storage.results import ResultStore


class JobStatus(str, Enum):
    """Lifecycle of a single scene job."""

    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def terminal(self) -> bool:
        return self in (JobStatus.SUCCEEDED, JobStatus.FAILED)


_TRANSITIONS: dict[JobStatus, frozenset[JobStatus]] = {
    JobStatus.PENDING: frozenset({JobStatus.RUNNING}),
    JobStatus.RUNNING: frozenset({JobStatus.SUCCEEDED, JobStatus.FAILED}),
    JobStatus.SUCCEEDED: frozenset({JobStatus.RUNNING}),
    JobStatus.FAILED: frozenset({JobStatus.RUNNING}),
}


class InvalidTransitionError(RuntimeError):
    """Raised when a job is moved along an edge the state machine does not have."""


@dataclass(slots=True, eq=False)
class Job:
    """One request/response cycle for a single scene.

    ``result_image`` is set only while succeeded and ``error_detail`` only
    while failed; both are cleared whenever the job is (re)started.
    """

    scene: SceneRequest
    status: JobStatus = JobStatus.PENDING
    result_image: EncodedImage | None = None
    error_detail: str | None = None
    is_favorite: bool = False

    @property
    def id(self) -> str:
        return self.scene.id

    @property
    def is_loading(self) -> bool:
        return not self.status.terminal

    @property
    def has_error(self) -> bool:
        return self.status is JobStatus.FAILED

    def _move(self, target: JobStatus) -> None:
        if target not in _TRANSITIONS[self.status]:
            raise InvalidTransitionError(f"Job {self.id}: {self.status.value} -> {target.value} is not allowed.")
        self.status = target

    def mark_running(self) -> None:
        self._move(JobStatus.RUNNING)
        self.result_image = None
        self.error_detail = None

    def mark_succeeded(self, image: EncodedImage) -> None:
        self._move(JobStatus.SUCCEEDED)
        self.result_image = image
        self.error_detail = None

    def mark_failed(self, detail: str) -> None:
        self._move(JobStatus.FAILED)
        self.result_image = None
        self.error_detail = detail or "Failed to generate image"


@dataclass(slots=True, eq=False)
class Batch:
    """The ordered jobs created by one generate action."""

    token: int
    store: ResultStore
    image: EncodedImage
    remove_background: bool = True
    custom_theme: str | None = None
    concurrency: int = 1
    completed_count: int = 0
    finished: bool = False

    def __post_init__(self) -> None:
        if not len(self.store):
            raise BatchValidationError("A batch needs at least one scene.")
        if len(self.store) > MAX_BATCH_SIZE:
            raise BatchValidationError(f"A batch is limited to {MAX_BATCH_SIZE} scenes.")
        if self.concurrency < 1:
            raise BatchValidationError("Concurrency must be at least 1.")

    @property
    def jobs(self) -> tuple[Job, ...]:
        return self.store.jobs

    @property
    def total(self) -> int:
        return len(self.store)

    @property
    def progress(self) -> float:
        return self.completed_count / self.total

    def get(self, job_id: str) -> Job:
        job = self.store.get(job_id)
        if job is None:
            raise UnknownJobError(job_id)
        return job
