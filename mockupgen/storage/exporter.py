"""Writes generated mockups of a batch to disk."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mockupgen.jobs.models import Batch

logger = logging.getLogger(__name__)

_EXTENSIONS = {"image/png": ".png", "image/jpeg": ".jpg", "image/webp": ".webp"}


class ResultExporter:
    """Saves succeeded jobs as ``mockupgen-<job id>`` image files."""

    def __init__(self, root: Path) -> None:
        self._root = root

    async def export(self, batch: Batch, *, favorites_only: bool = False) -> list[Path]:
        """Write every succeeded (or favorited) result and return the written paths."""

        jobs = batch.store.filter_favorites() if favorites_only else batch.store.succeeded()
        await asyncio.to_thread(self._root.mkdir, parents=True, exist_ok=True)

        written: list[Path] = []
        for job in jobs:
            image = job.result_image
            if image is None:
                continue
            path = self._root / f"mockupgen-{job.id}{_EXTENSIONS.get(image.mime_type, '.png')}"
            await asyncio.to_thread(path.write_bytes, image.data)
            written.append(path)

        logger.info("Exported %d mockup(s) of batch %s to %s.", len(written), batch.token, self._root)
        return written
