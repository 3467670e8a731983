"""
Image generators for GeoGen.
"""

from abc import ABC, abstractmethod

from ..models import GeneratedImage


class ImageGenerator(ABC):
    """Abstract base class for image generators."""

    @abstractmethod
    def generate(self, prompt: str) -> GeneratedImage:
        """Generate an image from a prompt.

        Args:
            prompt: The generation prompt

        Returns:
            GeneratedImage wrapping the base64 payload

        Raises:
            GenerationError: If the call fails or returns no image bytes
        """
        pass

    @abstractmethod
    def name(self) -> str:
        """Return the generator (route) name."""
        pass


# Lazy imports to avoid loading all generators at startup
def get_inline_generator():
    from .gemini import InlineImageGenerator
    return InlineImageGenerator


def get_imagen_generator():
    from .imagen import ImagenGenerator
    return ImagenGenerator
