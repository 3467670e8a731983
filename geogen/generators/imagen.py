"""
Imagen 4 generator for GeoGen.

Used for High and Ultra quality. Calls the dedicated predict endpoint for a
single 16:9 JPEG.
"""

from ..core.gemini import GeminiClient, GeminiError
from ..errors import GenerationError
from ..models import GeneratedImage
from . import ImageGenerator


IMAGEN_MODEL = "imagen-4.0-generate-001"
ASPECT_RATIO = "16:9"
OUTPUT_MIME_TYPE = "image/jpeg"


class ImagenGenerator(ImageGenerator):
    """
    Imagen dedicated image generator.

    Requests exactly one image and reads bytesBase64Encoded from the first
    prediction.
    """

    def __init__(self, client: GeminiClient, model: str = IMAGEN_MODEL):
        self.client = client
        self.model = model

    def name(self) -> str:
        return "imagen"

    def generate(self, prompt: str) -> GeneratedImage:
        try:
            predictions = self.client.predict_images(
                self.model,
                prompt,
                number_of_images=1,
                aspect_ratio=ASPECT_RATIO,
                mime_type=OUTPUT_MIME_TYPE,
            )
        except GeminiError as e:
            raise GenerationError(f"Failed to generate image with High/Ultra quality: {e}") from e

        data = predictions[0].get("bytesBase64Encoded") if predictions else None
        if not data:
            raise GenerationError("Failed to generate image with High/Ultra quality")

        return GeneratedImage(data=data, model=self.model, route=self.name())
