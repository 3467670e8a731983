"""
Prompt templates for GeoGen.

Holds the fixed instructions sent to the backend and the prompt builder that
turns a GenerationRequest into image-generation text.
"""

from .models import GenerationRequest, PerspectiveOption, QualityOption, StyleOption


LOCATION_PROMPT_TEMPLATE = """I need to generate a custom 3D visual map of a location.
First, identify the specific location for this query: "{query}".

Use Google Search to find visual details about its appearance, key landmarks, colors, and atmosphere.

Provide a response that describes the location visually. Focus on architecture, environment, and distinct features that would be visible in a 3D render.
"""

RECOMMENDATION_PROMPT_TEMPLATE = """Based on the location "{location_name}" and its visual description below, recommend the best "Visual Perspective" and "Art Style" for a cool 3D map render.

Location Description:
"{description}"

Available Perspectives: {perspectives}
Available Art Styles: {styles}

Rules:
1. Cyberpunk fits modern cities with neon or nightlife (e.g., Tokyo, Times Square).
2. Steampunk fits industrial or Victorian era locations (e.g., London, factories).
3. Sketch/Blueprint fits historical or structural landmarks.
4. Low Poly or Origami fits playful or abstract scenes.
5. Realistic fits nature or grand landscapes.
6. Synthwave fits retro or beach vibes (e.g. Miami).
7. Provide a short, punchy reasoning for your choice.
"""

PERSPECTIVE_FRAGMENTS: dict[PerspectiveOption, str] = {
    PerspectiveOption.AERIAL: "High-angle drone photography view, top-down aerial perspective looking down at the location. ",
    PerspectiveOption.STREET: "Eye-level street view photography, immersive perspective from the ground looking at the location. ",
    PerspectiveOption.ISOMETRIC: "Isometric projection, 3D game map style, diorama, tilt-shift miniature effect. ",
}

# No CUSTOM entry, its fragment is the user-supplied text
STYLE_FRAGMENTS: dict[StyleOption, str] = {
    StyleOption.REALISTIC: "Hyper-realistic, unreal engine 5 render, 8k resolution, detailed textures, cinematic lighting, photorealism. ",
    StyleOption.CYBERPUNK: "Cyberpunk aesthetic, neon lights, night time, rain-slicked surfaces, futuristic hologram overlays, sci-fi atmosphere. ",
    StyleOption.CLAY: "Claymation style, plasticine textures, soft rounded edges, miniature lighting, stop-motion look, vibrant colors. ",
    StyleOption.SKETCH: "Architectural blueprint sketch, white lines on blue paper, technical drawing style, precise lines, wireframe. ",
    StyleOption.VOXEL: "Voxel art style, 3D pixels, minecraft-like aesthetic, blocky but detailed, bright colors, 8-bit 3D. ",
    StyleOption.LOW_POLY: "Low poly 3D art, flat shading, geometric shapes, minimalist details, clean sharp edges, vibrant pastel colors. ",
    StyleOption.ORIGAMI: "Origami papercraft style, folded paper textures, layered paper art, craft aesthetic, soft shadows, diorama look. ",
    StyleOption.STEAMPUNK: "Steampunk aesthetic, brass and copper gears, victorian architecture, industrial steam pipes, mechanical details, sepia tones. ",
    StyleOption.WATERCOLOR: "Watercolor painting style, soft brush strokes, paint splatter, artistic, dreamy atmosphere, wet-on-wet technique. ",
    StyleOption.SYNTHWAVE: "Synthwave aesthetic, retro 80s grid, purple and magenta neon, sunset gradient, vaporwave style, digital retro. ",
    StyleOption.NOIR: "Film Noir style, high contrast black and white, dramatic shadows, moody atmosphere, detective movie aesthetic, volumetric fog. ",
}

ULTRA_QUALITY_FRAGMENT = "Masterpiece, award-winning photography, highly detailed, 8k, raytracing. "

IMAGE_PROMPT_TEMPLATE = """Create a {visual_prompt}image of {location_name}.

Visual Context based on real-world data: {description}.

Ensure the image is high quality and coherent. No text overlays."""

if set(PERSPECTIVE_FRAGMENTS) != set(PerspectiveOption):
    raise RuntimeError("PERSPECTIVE_FRAGMENTS must cover every PerspectiveOption")
if set(STYLE_FRAGMENTS) != set(StyleOption) - {StyleOption.CUSTOM}:
    raise RuntimeError("STYLE_FRAGMENTS must cover every StyleOption except CUSTOM")


def build_location_prompt(query: str) -> str:
    """Instruction for the grounded location lookup."""
    return LOCATION_PROMPT_TEMPLATE.format(query=query)


def recommendable_styles() -> list[StyleOption]:
    """Styles the recommender may pick. CUSTOM has no text to go with it."""
    return [s for s in StyleOption if s is not StyleOption.CUSTOM]


def build_recommendation_prompt(location_name: str, description: str) -> str:
    """Instruction for the structured style recommendation."""
    return RECOMMENDATION_PROMPT_TEMPLATE.format(
        location_name=location_name,
        description=description,
        perspectives=", ".join(PerspectiveOption.values()),
        styles=", ".join(s.value for s in recommendable_styles()),
    )


def style_fragment(style: StyleOption, custom_style_text: str = "") -> str:
    """Phrase for the style slot. Blank custom text yields no fragment."""
    if style is StyleOption.CUSTOM:
        return f"{custom_style_text}. " if custom_style_text.strip() else ""
    return STYLE_FRAGMENTS[style]


def build_prompt(request: GenerationRequest) -> str:
    """
    Build the image-generation prompt for a request.

    Pure and deterministic: perspective fragment, style fragment, the Ultra
    emphasis fragment when quality is ULTRA, then the closing template naming
    the location and carrying its description.
    """
    visual_prompt = PERSPECTIVE_FRAGMENTS[request.perspective]
    visual_prompt += style_fragment(request.style, request.custom_style_text)

    if request.quality is QualityOption.ULTRA:
        visual_prompt += ULTRA_QUALITY_FRAGMENT

    return IMAGE_PROMPT_TEMPLATE.format(
        visual_prompt=visual_prompt,
        location_name=request.location_name,
        description=request.description,
    )
