"""
Quality-based routing between image generators.

Standard quality goes to the inline Gemini image model; High and Ultra go to
the dedicated Imagen endpoint. Both come back as the same GeneratedImage, so
callers never need to know which route was taken. No retries, no failover.
"""

import logging
from typing import Optional

from ..core.gemini import GeminiClient
from ..models import GeneratedImage, QualityOption
from . import ImageGenerator, get_imagen_generator, get_inline_generator
from .gemini import GEMINI_IMAGE_MODEL
from .imagen import IMAGEN_MODEL

logger = logging.getLogger(__name__)


class GeneratorRouter:
    """Picks the generator for a quality level and runs it.

    Usage:
        router = GeneratorRouter(client)
        image = router.generate(prompt, QualityOption.HIGH)
        print(image.data_uri[:40], image.route)
    """

    def __init__(
        self,
        client: GeminiClient,
        inline_model: str = GEMINI_IMAGE_MODEL,
        image_model: str = IMAGEN_MODEL,
    ):
        """
        Initialize the router.

        Args:
            client: Shared Gemini client
            inline_model: Model for the Standard (inline image) route
            image_model: Model for the High/Ultra (Imagen) route
        """
        self.client = client
        self.inline_model = inline_model
        self.image_model = image_model

        # Lazy-loaded generators
        self._inline: Optional[ImageGenerator] = None
        self._imagen: Optional[ImageGenerator] = None

    @staticmethod
    def route_for(quality: QualityOption) -> str:
        """Name of the route used for a quality level."""
        return "inline" if quality is QualityOption.STANDARD else "imagen"

    def _get_generator(self, quality: QualityOption) -> ImageGenerator:
        """Lazy-load and return the generator for the quality level."""
        if self.route_for(quality) == "inline":
            if self._inline is None:
                self._inline = get_inline_generator()(self.client, model=self.inline_model)
            return self._inline
        else:
            if self._imagen is None:
                self._imagen = get_imagen_generator()(self.client, model=self.image_model)
            return self._imagen

    def generate(self, prompt: str, quality: QualityOption) -> GeneratedImage:
        """
        Generate an image on the route selected by quality.

        Raises:
            GenerationError: If the selected generator fails
        """
        generator = self._get_generator(quality)
        logger.info(f"Generating image via {generator.name()} route ({quality.value})")
        return generator.generate(prompt)
