"""Scene jobs, batches and the worker pool that runs them."""

from .models import Batch, InvalidTransitionError, Job, JobStatus
from .queue import JobQueue

__all__ = ["Batch", "InvalidTransitionError", "Job", "JobQueue", "JobStatus"]
