"""
Session controller for GeoGen.

Owns the session state (current selections, last resolved location, last
image and the activity log) and runs the user-facing flows:

- fetch_location: resolve a query into a LocationRecord
- auto_configure: resolve (if needed), then apply a style recommendation
- generate_visual: resolve (if needed), build the prompt, render the image
- share_link / apply_deep_link: round-trip the selections through a URL

Each flow is a sequential chain of at most two backend calls. Errors are
logged to the activity log and re-raised to the caller unchanged.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Callable, Optional

from .config import Config
from .core.gemini import GeminiClient
from .deeplink import DEFAULT_BASE_URL, DeepLinkParams, build_deep_link, parse_deep_link
from .errors import GenerationError, GeoGenError
from .generators.manager import GeneratorRouter
from .models import (
    GeneratedImage,
    GenerationRequest,
    LocationRecord,
    MapPoint,
    PerspectiveOption,
    QualityOption,
    StyleOption,
    StyleRecommendation,
)
from .prompts import build_prompt
from .recommender import StyleRecommender
from .resolver import LocationResolver


logger = logging.getLogger(__name__)

INITIAL_LOG_LINE = "> GeoGen 3D System initialized."


@dataclass
class SessionState:
    """Everything a single user session holds in memory."""

    query: str = ""
    perspective: PerspectiveOption = PerspectiveOption.ISOMETRIC
    style: StyleOption = StyleOption.REALISTIC
    quality: QualityOption = QualityOption.HIGH
    custom_style: str = ""
    coordinates: Optional[MapPoint] = None

    analyzed_query: str = ""
    location: Optional[LocationRecord] = None
    image: Optional[GeneratedImage] = None
    prompt: str = ""
    logs: list[str] = field(default_factory=lambda: [INITIAL_LOG_LINE])

    @classmethod
    def from_config(cls, config: Config) -> "SessionState":
        """Initial selections taken from configured defaults."""
        return cls(
            perspective=PerspectiveOption.parse(config.defaults.perspective) or PerspectiveOption.ISOMETRIC,
            style=StyleOption.parse(config.defaults.style) or StyleOption.REALISTIC,
            quality=QualityOption.parse(config.defaults.quality) or QualityOption.HIGH,
        )

    @property
    def location_is_fresh(self) -> bool:
        """Whether the stored location was resolved for the current query."""
        return self.location is not None and self.query == self.analyzed_query


class GeoGenSession:
    """Top-level controller that owns a SessionState."""

    def __init__(
        self,
        config: Optional[Config] = None,
        client_factory: Optional[Callable[[], GeminiClient]] = None,
        state: Optional[SessionState] = None,
    ):
        """
        Initialize the session.

        Args:
            config: Configuration (loaded from disk and environment if omitted)
            client_factory: Returns a fresh GeminiClient per flow. Defaults to
                building one from config with the API key re-read from the
                environment at call time.
            state: Existing state to continue from
        """
        self.config = config or Config.load()
        self._client_factory = client_factory or self._default_client
        self.state = state or SessionState.from_config(self.config)

    def _default_client(self) -> GeminiClient:
        config = replace(self.config, api_keys=self.config.api_keys.merge_env())
        return GeminiClient.from_config(config)

    def log(self, message: str) -> None:
        """Prepend a line to the activity log (newest first)."""
        self.state.logs.insert(0, f"> {message}")
        logger.info(message)

    def select(
        self,
        query: Optional[str] = None,
        perspective: Optional[PerspectiveOption] = None,
        style: Optional[StyleOption] = None,
        quality: Optional[QualityOption] = None,
        custom_style: Optional[str] = None,
        coordinates: Optional[MapPoint] = None,
    ) -> None:
        """Update any of the user's selections. None leaves a field unchanged."""
        if query is not None:
            self.state.query = query
        if perspective is not None:
            self.state.perspective = perspective
        if style is not None:
            self.state.style = style
        if quality is not None:
            self.state.quality = quality
        if custom_style is not None:
            self.state.custom_style = custom_style
        if coordinates is not None:
            self.state.coordinates = coordinates

    def _require_query(self) -> str:
        query = self.state.query.strip()
        if not query:
            raise ValueError("Location query must not be empty")
        return self.state.query

    def _resolve(self, client: GeminiClient, query: str) -> LocationRecord:
        resolver = LocationResolver(client, model=self.config.models.search)
        record = resolver.resolve(query, coordinates=self.state.coordinates)

        self.state.location = record
        self.state.analyzed_query = query
        self.log(f"Target acquired: {record.name}")
        if record.grounding_sources:
            self.log(f"{len(record.grounding_sources)} data sources acquired.")
        return record

    def _current_location(self, client: GeminiClient) -> LocationRecord:
        """Reuse the stored location unless the query changed since."""
        if self.state.location_is_fresh:
            return self.state.location
        return self._resolve(client, self.state.query)

    def fetch_location(self) -> LocationRecord:
        """
        Resolve the current query, replacing any stored location.

        Raises:
            ValueError: If the query is empty
            ConfigurationError: If no API key is configured
            ResolutionError: If the lookup fails
        """
        query = self._require_query()
        try:
            with self._client_factory() as client:
                return self._resolve(client, query)
        except GeoGenError:
            self.log("Error during location lookup.")
            raise

    def auto_configure(self) -> StyleRecommendation:
        """
        Ask for a perspective/style recommendation and apply it.

        On failure the current selections are left untouched.

        Raises:
            ValueError: If the query is empty
            ConfigurationError, ResolutionError, RecommendationError
        """
        self._require_query()
        try:
            with self._client_factory() as client:
                location = self._current_location(client)
                recommender = StyleRecommender(client, model=self.config.models.recommend)
                recommendation = recommender.recommend(location.name, location.raw_text)
        except GeoGenError:
            self.log("Error during auto-configuration.")
            raise

        self.state.perspective = recommendation.perspective
        self.state.style = recommendation.style
        self.log(f"AI Recommendation: {recommendation.perspective.value} + {recommendation.style.value}")
        self.log(f"Reasoning: {recommendation.reasoning}")
        return recommendation

    def build_request(self, location: LocationRecord) -> GenerationRequest:
        """GenerationRequest for the current selections and a location."""
        return GenerationRequest(
            location_name=location.name,
            description=location.description,
            perspective=self.state.perspective,
            style=self.state.style,
            quality=self.state.quality,
            custom_style_text=self.state.custom_style,
        )

    def generate_visual(self) -> GeneratedImage:
        """
        Render the current selections for the current query.

        Clears the previous image first. A Custom style with blank text is
        rejected before any backend call.

        Raises:
            ValueError: If the query is empty
            ConfigurationError, ResolutionError, GenerationError
        """
        self._require_query()
        self.state.image = None

        try:
            if self.state.style is StyleOption.CUSTOM and not self.state.custom_style.strip():
                raise GenerationError("Custom style selected but no custom style text provided")

            with self._client_factory() as client:
                location = self._current_location(client)

                request = self.build_request(location)
                issues = request.validate()
                if issues:
                    raise GenerationError("; ".join(issues))

                prompt = build_prompt(request)
                self.state.prompt = prompt

                router = GeneratorRouter(
                    client,
                    inline_model=self.config.models.inline_image,
                    image_model=self.config.models.image,
                )
                image = router.generate(prompt, request.quality)
        except GeoGenError:
            self.log("Mission failed: Generation error.")
            raise

        self.state.image = image
        self.log("Visual rendering complete.")
        return image

    def share_link(self, base_url: str = DEFAULT_BASE_URL) -> str:
        """Deep link reproducing the current selections."""
        link = build_deep_link(
            location=self.state.query,
            perspective=self.state.perspective,
            style=self.state.style,
            quality=self.state.quality,
            custom_style=self.state.custom_style,
            base_url=base_url,
        )
        self.log("Share link generated.")
        return link

    def apply_deep_link(self, link: str) -> DeepLinkParams:
        """Load selections from a deep link. Unrecognized values are ignored."""
        params = parse_deep_link(link)
        self.select(
            query=params.location,
            perspective=params.perspective,
            style=params.style,
            quality=params.quality,
            custom_style=params.custom_style,
        )
        if params.location:
            self.log("Mission parameters loaded from shared link.")
        return params
