"""Request and response models for the HTTP service."""

from __future__ import annotations

from pydantic import BaseModel, Field

from mockupgen.catalog.scenes import ScenePreset
from mockupgen.imggen.encoding import EncodedImage
from mockupgen.jobs.models import Batch, Job


class ProductUpload(BaseModel):
    """Product photo as a data URI or bare base64 string."""

    image: str = Field(min_length=1)


class ProductInfo(BaseModel):
    mime_type: str
    size_bytes: int

    @classmethod
    def from_image(cls, image: EncodedImage) -> ProductInfo:
        return cls(mime_type=image.mime_type, size_bytes=len(image.data))


class BatchRequest(BaseModel):
    """Scenes to render; a non-empty ``custom_theme`` overrides ``scene_ids``."""

    scene_ids: list[str] = Field(default_factory=list)
    custom_theme: str | None = None
    remove_background: bool = True
    concurrency: int | None = Field(default=None, ge=1)


class JobView(BaseModel):
    id: str
    scene: str
    category: str
    status: str
    is_loading: bool
    error: bool
    error_message: str | None = None
    is_favorite: bool
    image_url: str | None = None

    @classmethod
    def from_job(cls, job: Job) -> JobView:
        return cls(
            id=job.id,
            scene=job.scene.display_name,
            category=job.scene.category,
            status=job.status.value,
            is_loading=job.is_loading,
            error=job.has_error,
            error_message=job.error_detail,
            is_favorite=job.is_favorite,
            image_url=f"/jobs/{job.id}/image" if job.result_image is not None else None,
        )


class BatchView(BaseModel):
    token: int
    state: str
    total: int
    completed: int
    progress: float
    custom_theme: str | None = None
    remove_background: bool
    favorite_count: int
    jobs: list[JobView]

    @classmethod
    def from_batch(cls, batch: Batch, state: str) -> BatchView:
        return cls(
            token=batch.token,
            state=state,
            total=batch.total,
            completed=batch.completed_count,
            progress=batch.progress,
            custom_theme=batch.custom_theme,
            remove_background=batch.remove_background,
            favorite_count=batch.store.favorite_count,
            jobs=[JobView.from_job(job) for job in batch.jobs],
        )


class FavoriteView(BaseModel):
    id: str
    is_favorite: bool


class SceneView(BaseModel):
    id: str
    name: str
    category: str
    prompt: str

    @classmethod
    def from_preset(cls, preset: ScenePreset) -> SceneView:
        return cls(id=preset.id, name=preset.name, category=preset.category, prompt=preset.prompt)
