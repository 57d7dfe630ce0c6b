"""Prometheus exporter helpers."""

from __future__ import annotations

from prometheus_client import Counter, Gauge


generation_attempts_total = Counter(
    "mockupgen_generation_attempts_total",
    "Calls issued to the image generation backend, by outcome.",
    ["backend", "outcome"],
)

generation_retries_total = Counter(
    "mockupgen_generation_retries_total",
    "Rate-limited calls that were retried after a backoff delay.",
    ["backend"],
)

jobs_total = Counter(
    "mockupgen_jobs_total",
    "Jobs that reached a terminal state.",
    ["status"],
)

active_batches = Gauge(
    "mockupgen_active_batches",
    "Batches whose worker pool is currently draining.",
)
