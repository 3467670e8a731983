"""
Gemini 2.5 Flash Image generator for GeoGen.

Used for Standard quality. Returns image bytes embedded in a
generateContent response part.
"""

from ..core.gemini import GeminiClient, GeminiError
from ..errors import GenerationError
from ..models import GeneratedImage
from . import ImageGenerator


GEMINI_IMAGE_MODEL = "gemini-2.5-flash-image"


class InlineImageGenerator(ImageGenerator):
    """
    Gemini 2.5 Flash inline image generator.

    Requests IMAGE output modality and takes the first part that carries
    inline data.
    """

    def __init__(self, client: GeminiClient, model: str = GEMINI_IMAGE_MODEL):
        self.client = client
        self.model = model

    def name(self) -> str:
        return "inline"

    def generate(self, prompt: str) -> GeneratedImage:
        try:
            response = self.client.generate_content(
                self.model,
                prompt,
                generation_config={"responseModalities": ["IMAGE"]},
            )
        except GeminiError as e:
            raise GenerationError(f"Failed to generate image with Standard quality: {e}") from e

        data = response.inline_image_data
        if not data:
            if response.finish_reason == "SAFETY":
                raise GenerationError("Image generation blocked by safety filters")
            raise GenerationError("Failed to generate image with Standard quality")

        return GeneratedImage(data=data, model=self.model, route=self.name())
