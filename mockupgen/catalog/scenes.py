"""Static scene presets and camera-angle variations."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ScenePreset:
    """A named background/style descriptor from the catalog."""

    id: str
    name: str
    category: str
    prompt: str


SCENES: tuple[ScenePreset, ...] = (
    ScenePreset(
        "studio-white",
        "E-Comm White",
        "Studio",
        "Clean, high-key commercial studio setting. Pure white seamless background. Soft, even lighting "
        "designed to highlight product clarity. Perfect for Amazon/Shopify listings.",
    ),
    ScenePreset(
        "luxury-marble",
        "Luxury Marble",
        "Interior",
        "Premium white Carrara marble surface with grey veining. Soft, natural daylight from the side. "
        "Elegant, high-end interior atmosphere with depth of field.",
    ),
    ScenePreset(
        "lifestyle-wood",
        "Natural Oak",
        "Interior",
        "Warm, solid oak wood surface. Golden hour sunlight casting soft organic shadows through a window. "
        "Cozy, natural lifestyle vibe with a blurred room background.",
    ),
    ScenePreset(
        "bathroom-spa",
        "Spa Counter",
        "Interior",
        "Clean ceramic or stone vanity top. Fresh, airy lighting. Background suggests a spa or luxury "
        "bathroom environment with soft bokeh. Serene and pure atmosphere.",
    ),
    ScenePreset(
        "kitchen-modern",
        "Modern Kitchen",
        "Interior",
        "Sleek dark granite or quartz countertop. Modern architectural lighting. Background suggests a "
        "premium kitchen with high-end appliances in soft focus.",
    ),
    ScenePreset(
        "outdoor-nature",
        "Nature Stone",
        "Outdoor",
        "Natural flat stone surface outdoors. Dappled sunlight filtering through trees. Fresh, organic "
        "environment with green foliage in the blurred background.",
    ),
    ScenePreset(
        "pastel-studio",
        "Pastel Gradient",
        "Studio",
        "Smooth, matte pastel color gradient background. Soft, shadowless beauty lighting. Minimalist "
        "pop-art aesthetic suitable for trendy brands.",
    ),
    ScenePreset(
        "neon-night",
        "Neon Cyber",
        "Creative",
        "Dark, moody environment with glossy reflective surfaces. Neon blue and purple rim lighting. "
        "Cyberpunk or high-tech night aesthetic.",
    ),
    ScenePreset(
        "flatlay-linen",
        "Linen Flat Lay",
        "Interior",
        "Top-down (flat lay) view on natural beige linen fabric texture. Soft, diffused window light. "
        "Organic, sustainable, and organized composition.",
    ),
    ScenePreset(
        "enhanced-white",
        "Premium Studio",
        "Studio",
        "Textured off-white or light grey studio wall. Dramatic side lighting creating elegant shadows "
        "and form. High-fashion magazine editorial style.",
    ),
    ScenePreset(
        "desk-minimal",
        "Minimal Desk",
        "Interior",
        "Clean white or light wood workspace desk. Soft daylight. Background hints at a productive, "
        "modern tech or creative office setup.",
    ),
    ScenePreset(
        "soft-window",
        "Window Light",
        "Studio",
        "Product placed near a bright window with sheer white curtains. Ethereal, dreamy, high-key "
        "lighting wrapping around the object. Soft and airy.",
    ),
    ScenePreset(
        "industrial-loft",
        "Industrial Concrete",
        "Interior",
        "Raw concrete texture surface. Dramatic, contrasty lighting. Urban industrial loft aesthetic "
        "with architectural shadows.",
    ),
    ScenePreset(
        "boho-chic",
        "Boho Rattan",
        "Interior",
        "Woven rattan or wicker surface. Warm, earthy tones (terracotta, beige). Dried florals or "
        "pampas grass in soft focus background. Bohemian style.",
    ),
    ScenePreset(
        "cyber-grid",
        "Retro Grid",
        "Creative",
        "80s Synthwave aesthetic. Glowing grid floor with a starry horizon. Neon pink and purple "
        "lighting. Digital, retro-futuristic vibe.",
    ),
    ScenePreset(
        "silk-elegance",
        "Red Silk",
        "Studio",
        "Luxurious, flowing red silk fabric. Rich folds and ripples. Dramatic spotlighting to create "
        "deep shadows and highlights. Premium elegance.",
    ),
    ScenePreset(
        "forest-floor",
        "Forest Moss",
        "Outdoor",
        "Natural green mossy surface in a deep forest. Dappled light through canopy. Earthy, grounded, "
        "organic feel with macro details.",
    ),
    ScenePreset(
        "terrazzo-pop",
        "Terrazzo Pop",
        "Creative",
        "Bright colorful terrazzo stone surface. Even, bright lighting. Playful, modern, and geometric "
        "composition.",
    ),
    ScenePreset(
        "golden-hour",
        "Golden Sun",
        "Outdoor",
        "Textured wall or surface bathed in warm, low-angle golden hour sunlight. Long shadows. "
        "Nostalgic, summer evening atmosphere.",
    ),
    ScenePreset(
        "midnight-luxury",
        "Midnight Matte",
        "Studio",
        "Deep matte black background. Gold or cool white rim lighting to define the product "
        "silhouette. Minimalist, premium, masculine aesthetic.",
    ),
)

SCENES_BY_ID: dict[str, ScenePreset] = {scene.id: scene for scene in SCENES}

VARIATION_PROMPTS: tuple[str, ...] = (
    "Front view, eye level, symmetrical composition.",
    "Slightly angled left (15 degrees), showing depth.",
    "Slightly angled right (15 degrees), dynamic stance.",
    "3/4 view from the left, highlighting side details.",
    "3/4 view from the right, commercial standard angle.",
    "Low angle 'Hero' shot, looking slightly up at the product.",
    "High angle, soft top-down perspective.",
    "Direct overhead Flat Lay (90 degrees).",
    "Close-up crop focusing on texture and material.",
    "Medium framing with negative space for text.",
    "Wide environmental shot with blurred background context.",
    "Product rotated slightly clockwise for informal feel.",
    "Product rotated slightly counter-clockwise.",
    "Macro detail shot with shallow depth of field.",
    "Framed with foreground bokeh elements.",
    "Dynamic diagonal composition on the surface.",
    "Backlit rim lighting angle for silhouette definition.",
    "Top-down angle with dramatic side shadows.",
    "Elevated/Floating composition if appropriate, or resting naturally.",
    "Lifestyle context angle, casual and realistic.",
)
