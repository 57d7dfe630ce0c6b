"""In-memory, observable store of per-scene results."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Iterable, Iterator

from mockupgen.errors import BatchValidationError

if TYPE_CHECKING:
    from mockupgen.jobs.models import Job

JobListener = Callable[["Job"], None]


class ResultStore:
    """Ordered job list observed by the presentation layer.

    The queue mutates job state and calls :meth:`publish`; the store itself
    only ever changes the favorite flag.
    """

    def __init__(self, jobs: Iterable[Job]) -> None:
        self._jobs: list[Job] = []
        self._index: dict[str, Job] = {}
        for job in jobs:
            if job.id in self._index:
                raise BatchValidationError(f"Duplicate scene id in batch: {job.id}")
            self._jobs.append(job)
            self._index[job.id] = job
        self._listeners: list[JobListener] = []

    def __len__(self) -> int:
        return len(self._jobs)

    def __iter__(self) -> Iterator[Job]:
        return iter(self._jobs)

    @property
    def jobs(self) -> tuple[Job, ...]:
        return tuple(self._jobs)

    def get(self, job_id: str) -> Job | None:
        return self._index.get(job_id)

    def subscribe(self, listener: JobListener) -> Callable[[], None]:
        """Register a callback fired after every job update; returns an unsubscribe hook."""

        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def publish(self, job: Job) -> None:
        for listener in list(self._listeners):
            listener(job)

    def toggle_favorite(self, job_id: str) -> bool | None:
        """Flip the favorite flag of a succeeded job and return the new value.

        Unknown ids return ``None``; jobs that are loading or failed keep
        their current flag.
        """

        job = self._index.get(job_id)
        if job is None:
            return None
        if job.is_loading or job.has_error:
            return job.is_favorite
        job.is_favorite = not job.is_favorite
        self.publish(job)
        return job.is_favorite

    def filter_favorites(self) -> list[Job]:
        return [job for job in self._jobs if job.is_favorite and not job.is_loading and not job.has_error]

    def succeeded(self) -> list[Job]:
        return [job for job in self._jobs if job.result_image is not None and not job.has_error]

    @property
    def favorite_count(self) -> int:
        return sum(1 for job in self._jobs if job.is_favorite)
