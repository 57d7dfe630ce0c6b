"""Integration check helpers."""

from .checks import (
    IntegrationCheckResult,
    check_backend,
    run_all_checks,
)

__all__ = [
    "IntegrationCheckResult",
    "check_backend",
    "run_all_checks",
]
