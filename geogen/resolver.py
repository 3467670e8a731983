"""
Location resolution for GeoGen.

Looks up a free-text place query with a search-grounded completion and
normalizes the answer into a LocationRecord.
"""

import logging
from typing import Optional

from .core.gemini import GeminiClient, GeminiError
from .errors import ResolutionError
from .models import GroundingSource, LocationRecord, MapPoint, WebSource, grounding_source_from_dict
from .prompts import build_location_prompt


logger = logging.getLogger(__name__)

GOOGLE_SEARCH_TOOL = {"google_search": {}}


def pick_location_name(query: str, sources: list[GroundingSource]) -> str:
    """Title of the first web source that has one, else the query verbatim."""
    for source in sources:
        if isinstance(source, WebSource) and source.title:
            return source.title
    return query


class LocationResolver:
    """Resolves place queries into LocationRecords."""

    def __init__(self, client: GeminiClient, model: str = "gemini-2.5-flash"):
        self.client = client
        self.model = model

    def resolve(self, query: str, coordinates: Optional[MapPoint] = None) -> LocationRecord:
        """
        Look up visual context for a place.

        Args:
            query: Non-empty place query (validated by the caller)
            coordinates: Optional user position. Accepted but not used in the prompt.

        Returns:
            LocationRecord whose description and raw_text are the answer text

        Raises:
            ResolutionError: If the backend call fails or returns no text
        """
        if coordinates is not None:
            logger.debug(f"User coordinates {coordinates} not used for search grounding")

        try:
            response = self.client.generate_content(
                self.model,
                build_location_prompt(query),
                tools=[GOOGLE_SEARCH_TOOL],
            )
        except GeminiError as e:
            raise ResolutionError(f"Location lookup failed for {query!r}: {e}") from e

        text = response.text
        if not text.strip():
            raise ResolutionError(f"Location lookup for {query!r} returned no text")

        sources = []
        for chunk in response.grounding_chunks:
            source = grounding_source_from_dict(chunk)
            if source is None:
                logger.debug(f"Skipping unrecognized grounding chunk: {sorted(chunk)}")
                continue
            sources.append(source)

        name = pick_location_name(query, sources)
        logger.info(f"Resolved {query!r} to {name!r} with {len(sources)} grounding sources")

        return LocationRecord(
            name=name,
            description=text,
            raw_text=text,
            grounding_sources=sources,
        )
