"""Error types raised by the generation client, the job queue and the session."""

from __future__ import annotations

import asyncio
import re
from enum import Enum
from typing import Any


class GenerationErrorKind(str, Enum):
    """Failure categories surfaced by the generation client."""

    RATE_LIMITED = "rate_limited"
    NO_IMAGE_RETURNED = "no_image_returned"
    TRANSPORT = "transport"
    CONFIGURATION = "configuration"
    INVALID_IMAGE = "invalid_image"


class GenerationError(RuntimeError):
    """Raised when a mockup could not be generated."""

    def __init__(
        self,
        kind: GenerationErrorKind,
        message: str,
        *,
        status_code: int | None = None,
    ) -> None:
        self.kind = kind
        self.status_code = status_code
        super().__init__(message)

    @property
    def retryable(self) -> bool:
        return self.kind is GenerationErrorKind.RATE_LIMITED


_ERROR_DETAILS = {
    GenerationErrorKind.RATE_LIMITED: (
        "The image service is rate limiting requests and retries were exhausted. "
        "Please wait a minute and retry this scene."
    ),
    GenerationErrorKind.NO_IMAGE_RETURNED: (
        "The AI finished without returning an image, possibly due to a content policy. "
        "Try again or pick a different scene."
    ),
    GenerationErrorKind.TRANSPORT: "Could not reach the image service. Please retry this scene.",
    GenerationErrorKind.CONFIGURATION: "Service configuration error: API key missing or invalid.",
    GenerationErrorKind.INVALID_IMAGE: "The product image is not a supported PNG, JPEG or WebP file.",
}

_RATE_LIMIT_PATTERN = re.compile(r"\b429\b|quota|resource[_ ]exhausted|rate limit exceeded", re.IGNORECASE)
_AUTH_STATUS_CODES = {401, 403}


def _status_code(exc: BaseException) -> int | None:
    for attr in ("status_code", "code", "status"):
        value: Any = getattr(exc, attr, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    response = getattr(exc, "response", None)
    value = getattr(response, "status_code", None)
    return value if isinstance(value, int) else None


def classify_error(exc: BaseException) -> GenerationError:
    """Map a backend exception onto the generation error taxonomy."""

    if isinstance(exc, GenerationError):
        return exc

    status_code = _status_code(exc)
    message = str(exc) or exc.__class__.__name__
    if status_code == 429 or _RATE_LIMIT_PATTERN.search(message):
        return GenerationError(GenerationErrorKind.RATE_LIMITED, message, status_code=status_code)
    if status_code in _AUTH_STATUS_CODES:
        return GenerationError(GenerationErrorKind.CONFIGURATION, message, status_code=status_code)
    if isinstance(exc, (asyncio.TimeoutError, TimeoutError)):
        return GenerationError(GenerationErrorKind.TRANSPORT, "The image service did not respond in time.")
    return GenerationError(GenerationErrorKind.TRANSPORT, message, status_code=status_code)


def describe_error(exc: BaseException) -> str:
    """Return the human-readable detail shown next to a failed job."""

    error = classify_error(exc)
    return _ERROR_DETAILS[error.kind]


class BatchValidationError(ValueError):
    """Raised when a batch request cannot be accepted."""


class UnknownJobError(KeyError):
    """Raised when a job id does not belong to the current batch."""

    def __init__(self, job_id: str) -> None:
        self.job_id = job_id
        super().__init__(job_id)

    def __str__(self) -> str:
        return f"Unknown job: {self.job_id}"


class JobNotRetryableError(RuntimeError):
    """Raised when a retry is requested for a job that is still pending or running."""


class NoActiveBatchError(RuntimeError):
    """Raised when an operation needs a batch but none has been started."""
