"""Scene sources and their deterministic mapping to job ids."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from mockupgen.catalog.scenes import SCENES_BY_ID, VARIATION_PROMPTS
from mockupgen.errors import BatchValidationError

CUSTOM_ID_PREFIX = "custom-var-"
CUSTOM_CATEGORY = "Custom"


@dataclass(frozen=True, slots=True)
class PresetScene:
    """A scene picked from the static catalog."""

    scene_id: str

    @property
    def job_id(self) -> str:
        return self.scene_id


@dataclass(frozen=True, slots=True)
class CustomVariant:
    """One camera-angle variation of a user supplied theme."""

    base_text: str
    angle_index: int

    @property
    def job_id(self) -> str:
        return f"{CUSTOM_ID_PREFIX}{self.angle_index}"


SceneSource = Union[PresetScene, CustomVariant]


@dataclass(frozen=True, slots=True)
class SceneRequest:
    """Immutable description of one scene to render."""

    id: str
    display_name: str
    category: str
    prompt_text: str
    source: SceneSource


def build_scene(source: SceneSource) -> SceneRequest:
    """Resolve a scene source into the request sent through the queue."""

    if isinstance(source, PresetScene):
        preset = SCENES_BY_ID.get(source.scene_id)
        if preset is None:
            raise BatchValidationError(f"Unknown scene: {source.scene_id}")
        return SceneRequest(
            id=source.job_id,
            display_name=preset.name,
            category=preset.category,
            prompt_text=preset.prompt,
            source=source,
        )

    if not 0 <= source.angle_index < len(VARIATION_PROMPTS):
        raise BatchValidationError(f"Angle variant index out of range: {source.angle_index}")
    theme = source.base_text.strip()
    if not theme:
        raise BatchValidationError("Custom variants need a non-empty theme.")
    return SceneRequest(
        id=source.job_id,
        display_name=f"Custom Var {source.angle_index + 1}",
        category=CUSTOM_CATEGORY,
        prompt_text=f"{theme}. Camera/Angle: {VARIATION_PROMPTS[source.angle_index]}",
        source=source,
    )


def source_from_job_id(job_id: str, theme: str | None = None) -> SceneSource:
    """Reconstruct the scene source a job id was derived from."""

    if job_id.startswith(CUSTOM_ID_PREFIX):
        raw_index = job_id[len(CUSTOM_ID_PREFIX):]
        if not raw_index.isdigit():
            raise BatchValidationError(f"Malformed custom variant id: {job_id}")
        return CustomVariant(base_text=theme or "", angle_index=int(raw_index))
    if job_id not in SCENES_BY_ID:
        raise BatchValidationError(f"Unknown scene: {job_id}")
    return PresetScene(job_id)


def custom_variants(theme: str) -> list[SceneSource]:
    """Expand a free-text theme into one source per camera angle."""

    return [CustomVariant(base_text=theme.strip(), angle_index=index) for index in range(len(VARIATION_PROMPTS))]
