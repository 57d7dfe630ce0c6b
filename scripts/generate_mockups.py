"""Generate a batch of mockups for one product photo and save them to disk."""

from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path

from mockupgen.api import GenerationClient
from mockupgen.config.settings import get_settings
from mockupgen.jobs.models import Batch, JobStatus
from mockupgen.logic import MockupSession
from mockupgen.monitoring.logging import configure_logging
from mockupgen.storage import ResultExporter

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("image", type=Path, help="Product photo (PNG, JPEG or WebP).")
    parser.add_argument("--scene", dest="scenes", action="append", default=[], help="Preset scene id; repeatable.")
    parser.add_argument("--theme", default=None, help="Custom theme; expands into every camera angle.")
    parser.add_argument("--keep-background", action="store_true", help="Do not ask for background removal.")
    parser.add_argument("--concurrency", type=int, default=None)
    parser.add_argument("--output", type=Path, default=None, help="Output directory.")
    return parser.parse_args(argv)


def _report(batch: Batch) -> None:
    for job in batch.jobs:
        if job.status is JobStatus.SUCCEEDED:
            print(f"✅ {job.scene.display_name}")
        else:
            print(f"❌ {job.scene.display_name}: {job.error_detail}")


async def main(argv: list[str] | None = None) -> None:
    configure_logging()
    args = _parse_args(argv)
    settings = get_settings()

    session = MockupSession(settings, GenerationClient.from_settings(settings))
    try:
        session.set_product_image(await asyncio.to_thread(args.image.read_bytes))
        batch = session.prepare_batch(
            scene_ids=args.scenes,
            custom_theme=args.theme,
            remove_background=not args.keep_background,
            concurrency=args.concurrency,
        )
        batch.store.subscribe(
            lambda job: logger.info("%s -> %s (%d/%d)", job.id, job.status.value, batch.completed_count, batch.total),
        )
        await session.run_batch(batch)
    finally:
        await session.close()

    _report(batch)
    exporter = ResultExporter(args.output or Path(settings.generated_root))
    for path in await exporter.export(batch):
        print(path)


if __name__ == "__main__":
    asyncio.run(main())
