"""
Style recommendation for GeoGen.

Asks the backend for a perspective/style pairing under a strict JSON schema
and validates the answer before handing it back.
"""

import json
import logging

from .core.gemini import GeminiClient, GeminiError
from .errors import RecommendationError
from .models import PerspectiveOption, StyleOption, StyleRecommendation
from .prompts import build_recommendation_prompt, recommendable_styles


logger = logging.getLogger(__name__)


def recommendation_schema() -> dict:
    """responseSchema constraining the answer to the enumerated options.

    The style enum leaves out Custom: a recommendation has no free text to
    go with it, so only the fixed styles are offered.
    """
    return {
        "type": "OBJECT",
        "properties": {
            "perspective": {
                "type": "STRING",
                "enum": PerspectiveOption.values(),
            },
            "style": {
                "type": "STRING",
                "enum": [s.value for s in recommendable_styles()],
            },
            "reasoning": {
                "type": "STRING",
            },
        },
        "required": ["perspective", "style", "reasoning"],
    }


def parse_recommendation(text: str) -> StyleRecommendation:
    """
    Parse and validate a recommendation payload.

    Enum fields must match a wire value exactly. Anything else is rejected.

    Raises:
        RecommendationError: If text is not a JSON object matching the schema
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise RecommendationError(f"Recommendation is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise RecommendationError(f"Recommendation must be a JSON object, got {type(data).__name__}")

    for key in ("perspective", "style", "reasoning"):
        if not isinstance(data.get(key), str):
            raise RecommendationError(f"Recommendation field {key!r} missing or not a string")

    try:
        perspective = PerspectiveOption(data["perspective"])
    except ValueError as e:
        raise RecommendationError(f"Unknown perspective in recommendation: {data['perspective']!r}") from e

    if data["style"] not in {s.value for s in recommendable_styles()}:
        raise RecommendationError(f"Unknown style in recommendation: {data['style']!r}")

    return StyleRecommendation(
        perspective=perspective,
        style=StyleOption(data["style"]),
        reasoning=data["reasoning"],
    )


class StyleRecommender:
    """Recommends a perspective and art style for a resolved location."""

    def __init__(self, client: GeminiClient, model: str = "gemini-2.5-flash"):
        self.client = client
        self.model = model

    def recommend(self, location_name: str, description: str) -> StyleRecommendation:
        """
        Get a perspective/style recommendation.

        Args:
            location_name: Resolved location name
            description: Visual description of the location

        Returns:
            Validated StyleRecommendation

        Raises:
            RecommendationError: On backend failure or empty/invalid payload
        """
        try:
            response = self.client.generate_content(
                self.model,
                build_recommendation_prompt(location_name, description),
                generation_config={
                    "responseMimeType": "application/json",
                    "responseSchema": recommendation_schema(),
                },
            )
        except GeminiError as e:
            raise RecommendationError(f"Recommendation request failed: {e}") from e

        if not response.text.strip():
            raise RecommendationError("No recommendation returned")

        recommendation = parse_recommendation(response.text)
        logger.info(
            f"Recommended {recommendation.perspective.value} + {recommendation.style.value} for {location_name!r}"
        )
        return recommendation
