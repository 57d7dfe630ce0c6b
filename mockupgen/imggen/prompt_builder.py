"""Prompt construction for product mockup generation."""

from __future__ import annotations

import re

# Short generic descriptions are expanded into a product-aware setting.
CATEGORY_SETTINGS: dict[str, str] = {
    "tech": "premium studio, modern desk, subtle neon edges, minimal clean setup",
    "cosmetics": "marble counter, bathroom shelf, pastel soft-light background",
    "supplements": "gym shelf, clean white studio, lifestyle health setting",
    "food": "kitchen surface, wooden table, bright daylight",
    "drink": "kitchen surface, wooden table, bright daylight",
    "home decor": "interior lifestyle scene, soft sunlight, warm tones",
    "fashion": "minimal lifestyle, gradient background, faceless model torso",
    "accessories": "minimal lifestyle, gradient background, faceless model torso",
}

CATEGORY_ALIASES: dict[str, str] = {
    "electronics": "tech",
    "gadget": "tech",
    "gadgets": "tech",
    "technology": "tech",
    "beauty": "cosmetics",
    "skincare": "cosmetics",
    "makeup": "cosmetics",
    "supplement": "supplements",
    "vitamins": "supplements",
    "food/drink": "food",
    "beverage": "drink",
    "beverages": "drink",
    "drinks": "drink",
    "decor": "home decor",
    "home": "home decor",
    "apparel": "fashion",
    "clothing": "fashion",
    "jewelry": "accessories",
    "jewellery": "accessories",
}

GENERIC_MAX_WORDS = 3

_ANGLE_MARKER = re.compile(r"camera\s*/\s*angle\s*:", re.IGNORECASE)


def _normalise(text: str) -> str:
    return " ".join(text.lower().replace("&", " ").split()).strip(" .")


def match_category(scene_description: str) -> str | None:
    """Return the heuristic category for a short generic description, if any."""

    normalised = _normalise(scene_description)
    if not normalised or len(normalised.split()) > GENERIC_MAX_WORDS:
        return None
    if normalised in CATEGORY_SETTINGS:
        return normalised
    if normalised in CATEGORY_ALIASES:
        return CATEGORY_ALIASES[normalised]
    for word in normalised.replace("/", " ").split():
        if word in CATEGORY_SETTINGS:
            return word
        if word in CATEGORY_ALIASES:
            return CATEGORY_ALIASES[word]
    return None


def scene_subject(scene_description: str) -> str:
    """Return the scene part of a description, without any ``Camera/Angle:`` suffix."""

    subject = _ANGLE_MARKER.split(scene_description, maxsplit=1)[0].strip()
    return subject.rstrip(".").strip() or scene_description.strip()


def angle_directive(scene_description: str) -> str:
    """Return the camera/composition part of a scene description.

    Custom variants carry an explicit ``Camera/Angle:`` suffix; preset scenes
    describe their framing inline, so the whole description applies.
    """

    parts = _ANGLE_MARKER.split(scene_description, maxsplit=1)
    if len(parts) == 2 and parts[1].strip():
        return parts[1].strip()
    return scene_description.strip()


def _preservation_block(remove_background: bool) -> str:
    lines = [
        "1. PRODUCT PRESERVATION (CRITICAL)",
        "The uploaded product must remain 100% unchanged:",
        "- No altering or redrawing of shape, geometry, colors, logo, labels, or textures.",
        "- No warping, melting, stretching, repainting, or reinterpretation.",
    ]
    if remove_background:
        lines.append("- Remove the original background cleanly with perfect edge preservation.")
    else:
        lines.append("- Keep the product exactly as photographed; do not cut it out of its original backdrop.")
    lines.append("The product in the output must be IDENTICAL to the uploaded image.")
    return "\n".join(lines)


def _scene_block(scene_description: str) -> str:
    lines = ["2. SCENE & CONTEXT HANDLING"]
    subject = scene_subject(scene_description)
    category = match_category(subject)
    if category is None:
        lines.extend(
            [
                f'Target scene: "{subject}"',
                "This is a specific description: strictly follow its theme, setting and mood as the dominant directive.",
            ]
        )
    else:
        lines.extend(
            [
                f'Target scene: "{subject}" is a generic product category.',
                f"Use an intelligent product-aware setting: {CATEGORY_SETTINGS[category]}.",
            ]
        )
    lines.append("Never place the product in an unrelated environment.")
    return "\n".join(lines)


def _angle_block(scene_description: str) -> str:
    return "\n".join(
        [
            "3. ANGLE & COMPOSITION",
            f"Camera/composition directive: {angle_directive(scene_description)}",
            "Adhere to this angle strictly to create variety across the batch.",
            "Follow professional photography standards (rule of thirds, balance).",
        ]
    )


def _realism_block() -> str:
    return "\n".join(
        [
            "4. REAL PHOTOGRAPHY REQUIREMENTS",
            "The output must look like a real camera photograph:",
            "- Sony A7R IV / Canon EOS R5 look with 50mm or 85mm commercial lenses",
            "- Soft diffused studio lighting, perfect color accuracy",
            "- Natural shadows under the product, subtle realistic reflections",
            "- Correct perspective and geometry",
            "- High-resolution, noise-free, crisp image",
            "Avoid: AI artifacts, warped logos, unrealistic reflections, over/under-exposure.",
        ]
    )


def _people_block() -> str:
    return "\n".join(
        [
            "5. NO FACES, NO PEOPLE, NO CELEBRITIES",
            "Strictly prohibited: human faces, identifiable individuals, celebrity likeness.",
            "Allowed: faceless mannequins, hands-only holding the product, torso silhouettes without identity.",
        ]
    )


def build_prompt(scene_description: str, remove_background: bool) -> str:
    """Return the full instruction sent alongside the product photo."""

    header = "\n".join(
        [
            "ROLE: Senior commercial product photographer and art director.",
            "TASK: Generate an ultra-realistic product mockup by compositing the INPUT PRODUCT "
            "into the scene described below.",
        ]
    )
    blocks = [
        header,
        _preservation_block(remove_background),
        _scene_block(scene_description),
        _angle_block(scene_description),
        _realism_block(),
        _people_block(),
        "OUTPUT: A single, high-resolution, photorealistic image.",
    ]
    return "\n\n".join(blocks)
