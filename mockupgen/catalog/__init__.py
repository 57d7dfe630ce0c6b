"""Scene catalog and scene source helpers."""

from .scenes import SCENES, SCENES_BY_ID, VARIATION_PROMPTS, ScenePreset
from .sources import (
    CustomVariant,
    PresetScene,
    SceneRequest,
    SceneSource,
    build_scene,
    custom_variants,
    source_from_job_id,
)

__all__ = [
    "CustomVariant",
    "PresetScene",
    "SCENES",
    "SCENES_BY_ID",
    "SceneRequest",
    "ScenePreset",
    "SceneSource",
    "VARIATION_PROMPTS",
    "build_scene",
    "custom_variants",
    "source_from_job_id",
]
