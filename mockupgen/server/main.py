"""FastAPI entrypoint and HTTP routes."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import BackgroundTasks, FastAPI, Request, status
from fastapi.responses import JSONResponse, Response
from prometheus_client import make_asgi_app

from mockupgen import __version__
from mockupgen.api.generation_client import GenerationClient
from mockupgen.catalog.scenes import SCENES
from mockupgen.config.settings import get_settings
from mockupgen.errors import (
    BatchValidationError,
    GenerationError,
    JobNotRetryableError,
    NoActiveBatchError,
    UnknownJobError,
)
from mockupgen.logic import MockupSession
from mockupgen.monitoring.logging import configure_logging
from mockupgen.server.schemas import (
    BatchRequest,
    BatchView,
    FavoriteView,
    JobView,
    ProductInfo,
    ProductUpload,
    SceneView,
)


def _error(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def create_app(session: MockupSession | None = None) -> FastAPI:
    """Initialise the FastAPI application around a single mockup session."""

    settings = get_settings()
    if session is None:
        session = MockupSession(settings, GenerationClient.from_settings(settings))

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        configure_logging()
        try:
            yield
        finally:
            await session.close()

    app = FastAPI(
        title="Mockup Generator API",
        version=__version__,
        docs_url="/docs" if settings.environment != "prod" else None,
        redoc_url="/redoc" if settings.environment != "prod" else None,
        lifespan=lifespan,
    )
    app.state.session = session
    app.mount("/metrics", make_asgi_app())

    @app.exception_handler(BatchValidationError)
    async def _batch_invalid(_request: Request, exc: BatchValidationError) -> JSONResponse:
        return _error(422, exc)

    @app.exception_handler(GenerationError)
    async def _generation_failed(_request: Request, exc: GenerationError) -> JSONResponse:
        return _error(422, exc)

    @app.exception_handler(UnknownJobError)
    async def _unknown_job(_request: Request, exc: UnknownJobError) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, exc)

    @app.exception_handler(JobNotRetryableError)
    async def _not_retryable(_request: Request, exc: JobNotRetryableError) -> JSONResponse:
        return _error(status.HTTP_409_CONFLICT, exc)

    @app.exception_handler(NoActiveBatchError)
    async def _no_batch(_request: Request, exc: NoActiveBatchError) -> JSONResponse:
        return _error(status.HTTP_409_CONFLICT, exc)

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Simple health endpoint used for readiness probes."""

        return {"status": "ok"}

    @app.get("/scenes", tags=["catalog"])
    async def list_scenes() -> list[SceneView]:
        return [SceneView.from_preset(preset) for preset in SCENES]

    @app.post("/product", tags=["batches"])
    async def upload_product(payload: ProductUpload) -> ProductInfo:
        image = session.set_product_image(payload.image)
        return ProductInfo.from_image(image)

    @app.post("/batches", tags=["batches"], status_code=status.HTTP_202_ACCEPTED)
    async def start_batch(payload: BatchRequest, background_tasks: BackgroundTasks) -> BatchView:
        batch = session.prepare_batch(
            scene_ids=payload.scene_ids,
            custom_theme=payload.custom_theme,
            remove_background=payload.remove_background,
            concurrency=payload.concurrency,
        )
        background_tasks.add_task(session.run_batch, batch)
        return BatchView.from_batch(batch, session.state.value)

    @app.get("/batches/current", tags=["batches"])
    async def current_batch() -> BatchView:
        if session.batch is None:
            raise NoActiveBatchError("No batch has been generated yet.")
        return BatchView.from_batch(session.batch, session.state.value)

    @app.delete("/batches/current", tags=["batches"], status_code=status.HTTP_204_NO_CONTENT)
    async def start_over() -> Response:
        session.start_over()
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @app.get("/jobs/favorites", tags=["jobs"])
    async def list_favorites() -> list[JobView]:
        return [JobView.from_job(job) for job in session.favorites()]

    @app.post("/jobs/{job_id}/retry", tags=["jobs"])
    async def retry_job(job_id: str) -> JobView:
        job = await session.retry(job_id)
        return JobView.from_job(job)

    @app.post("/jobs/{job_id}/favorite", tags=["jobs"])
    async def toggle_favorite(job_id: str) -> FavoriteView:
        value = session.toggle_favorite(job_id)
        if value is None:
            raise UnknownJobError(job_id)
        return FavoriteView(id=job_id, is_favorite=value)

    @app.get("/jobs/{job_id}/image", tags=["jobs"])
    async def job_image(job_id: str) -> Response:
        if session.batch is None:
            raise NoActiveBatchError("No batch has been generated yet.")
        job = session.batch.get(job_id)
        if job.result_image is None:
            return _error(status.HTTP_404_NOT_FOUND, LookupError(f"Job {job_id} has no image yet."))
        return Response(content=job.result_image.data, media_type=job.result_image.mime_type)

    return app


app = create_app()
