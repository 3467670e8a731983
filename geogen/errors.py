"""
Error taxonomy for GeoGen.

Every flow surfaces one of these to its caller. None of them are retried.
"""


class GeoGenError(Exception):
    """Base exception for GeoGen errors."""
    pass


class ConfigurationError(GeoGenError):
    """Missing or invalid configuration (e.g. no API key)."""
    pass


class ResolutionError(GeoGenError):
    """Location lookup failed or returned no text."""
    pass


class RecommendationError(GeoGenError):
    """Style recommendation failed or returned an invalid payload."""
    pass


class GenerationError(GeoGenError):
    """Image generation failed or returned no image payload."""
    pass
