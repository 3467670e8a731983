"""
Gemini REST API client for GeoGen.

Thin transport over the Generative Language API. Covers the two endpoints
the app needs: ``generateContent`` (grounded search, structured JSON and
inline images) and ``predict`` (Imagen image generation).
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

import httpx

from geogen.config import Config


API_BASE = "https://generativelanguage.googleapis.com/v1beta"

logger = logging.getLogger(__name__)


class GeminiError(Exception):
    """Base exception for Gemini API errors."""
    pass


class GeminiAuthError(GeminiError):
    """Authentication error."""
    pass


@dataclass
class ContentResponse:
    """The first candidate of a generateContent response."""

    parts: list[dict] = field(default_factory=list)
    grounding_chunks: list[dict] = field(default_factory=list)
    finish_reason: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "ContentResponse":
        candidates = data.get("candidates") or []
        if not candidates:
            return cls()

        candidate = candidates[0]
        metadata = candidate.get("groundingMetadata") or {}
        return cls(
            parts=(candidate.get("content") or {}).get("parts") or [],
            grounding_chunks=metadata.get("groundingChunks") or [],
            finish_reason=candidate.get("finishReason"),
        )

    @property
    def text(self) -> str:
        """Concatenated text of all text parts (empty if none)."""
        return "".join(
            part["text"] for part in self.parts
            if isinstance(part.get("text"), str) and not part.get("thought")
        )

    @property
    def inline_image_data(self) -> Optional[str]:
        """Base64 payload of the first part carrying inline data."""
        for part in self.parts:
            inline_data = part.get("inlineData") or {}
            if inline_data.get("data"):
                return inline_data["data"]
        return None


class GeminiClient:
    """Client for the Gemini / Imagen REST endpoints."""

    def __init__(
        self,
        api_key: str,
        timeout: float = 120.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize the Gemini client.

        Args:
            api_key: Gemini API key
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (used to stub the network in tests)
        """
        self.api_key = api_key
        self._client = httpx.Client(timeout=timeout, transport=transport)

    @classmethod
    def from_config(
        cls,
        config: Optional[Config] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> "GeminiClient":
        """Build a client from configuration, read at call time.

        Raises:
            ConfigurationError: If no API key is configured. No request is made.
        """
        config = config or Config.load()
        api_key = config.require_api_key()
        return cls(api_key=api_key, timeout=config.defaults.timeout, transport=transport)

    def _post(self, model: str, method: str, payload: dict) -> dict:
        """POST to models/{model}:{method} and return the decoded JSON body."""
        url = f"{API_BASE}/models/{model}:{method}"
        logger.debug(f"POST {url}")

        try:
            response = self._client.post(
                url,
                params={"key": self.api_key},
                json=payload,
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as e:
            raise GeminiError(f"Request to {model} failed: {e}") from e

        if response.status_code in (401, 403):
            raise GeminiAuthError(f"Gemini API rejected the API key ({response.status_code})")

        if not response.is_success:
            raise GeminiError(f"Gemini API error {response.status_code}: {response.text}")

        try:
            data = response.json()
        except ValueError as e:
            raise GeminiError(f"Gemini API returned invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise GeminiError("Gemini API returned an unexpected payload")

        error = data.get("error")
        if error:
            message = error.get("message", "Unknown error") if isinstance(error, dict) else str(error)
            raise GeminiError(f"Gemini API error: {message}")

        return data

    def generate_content(
        self,
        model: str,
        prompt: str,
        tools: Optional[list[dict]] = None,
        generation_config: Optional[dict] = None,
    ) -> ContentResponse:
        """
        Call generateContent with a single user text part.

        Args:
            model: Model identifier, e.g. "gemini-2.5-flash"
            prompt: Prompt text
            tools: Optional tool declarations, e.g. [{"google_search": {}}]
            generation_config: Optional generationConfig block

        Returns:
            ContentResponse for the first candidate
        """
        payload: dict = {
            "contents": [{
                "role": "user",
                "parts": [{"text": prompt}],
            }],
        }
        if tools:
            payload["tools"] = tools
        if generation_config:
            payload["generationConfig"] = generation_config

        return ContentResponse.from_dict(self._post(model, "generateContent", payload))

    def predict_images(
        self,
        model: str,
        prompt: str,
        number_of_images: int = 1,
        aspect_ratio: str = "16:9",
        mime_type: str = "image/jpeg",
    ) -> list[dict]:
        """
        Call the Imagen predict endpoint.

        Returns:
            The list of prediction dicts (each may carry bytesBase64Encoded)
        """
        payload = {
            "instances": [{"prompt": prompt}],
            "parameters": {
                "sampleCount": number_of_images,
                "aspectRatio": aspect_ratio,
                "outputOptions": {"mimeType": mime_type},
            },
        }

        data = self._post(model, "predict", payload)
        return data.get("predictions") or []

    def close(self):
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
