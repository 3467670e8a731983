"""
Core API clients for GeoGen.
"""

from .gemini import GeminiClient, ContentResponse, GeminiError, GeminiAuthError

__all__ = ["GeminiClient", "ContentResponse", "GeminiError", "GeminiAuthError"]
