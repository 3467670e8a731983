"""Shared fixtures: a fake Gemini backend behind httpx.MockTransport."""

import base64
import json
from typing import Optional

import httpx
import pytest

from geogen.core.gemini import GeminiClient


INLINE_IMAGE_DATA = base64.b64encode(b"inline-image-bytes").decode()
IMAGEN_IMAGE_DATA = base64.b64encode(b"imagen-image-bytes").decode()


class FakeBackend:
    """Answers generateContent/predict calls with canned JSON and records them."""

    INLINE_IMAGE_DATA = INLINE_IMAGE_DATA
    IMAGEN_IMAGE_DATA = IMAGEN_IMAGE_DATA

    def __init__(self):
        self.requests: list[dict] = []
        self._responses: dict = {}

    def reply(self, method: str, body: dict, status: int = 200, model: Optional[str] = None) -> None:
        """Register a response for an endpoint method, optionally for one model only."""
        self._responses[(model, method)] = (status, body)

    def reply_text(self, text: str, chunks: Optional[list] = None, model: Optional[str] = None) -> None:
        self.reply("generateContent", {
            "candidates": [{
                "content": {"parts": [{"text": text}]},
                "groundingMetadata": {"groundingChunks": chunks or []},
            }],
        }, model=model)

    def reply_inline_image(self, data: str = INLINE_IMAGE_DATA, model: Optional[str] = None) -> None:
        self.reply("generateContent", {
            "candidates": [{
                "content": {"parts": [{"inlineData": {"mimeType": "image/png", "data": data}}]},
            }],
        }, model=model)

    def reply_predictions(self, data: str = IMAGEN_IMAGE_DATA, model: Optional[str] = None) -> None:
        self.reply("predict", {
            "predictions": [{"bytesBase64Encoded": data, "mimeType": "image/jpeg"}],
        }, model=model)

    def handler(self, request: httpx.Request) -> httpx.Response:
        model, method = request.url.path.rsplit("/", 1)[-1].split(":", 1)
        self.requests.append({
            "model": model,
            "method": method,
            "key": request.url.params.get("key"),
            "json": json.loads(request.content or b"{}"),
        })

        status, body = self._responses.get((model, method)) or self._responses.get((None, method)) or (
            404, {"error": {"message": f"no fake response for {model}:{method}"}}
        )
        return httpx.Response(status, json=body)

    def client(self) -> GeminiClient:
        return GeminiClient(api_key="test-key", transport=httpx.MockTransport(self.handler))

    def calls(self, method: Optional[str] = None) -> list[dict]:
        return [r for r in self.requests if method is None or r["method"] == method]


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def no_api_key(monkeypatch):
    """Remove every API key variable from the environment."""
    for name in ("GEMINI_API_KEY", "GOOGLE_API_KEY", "API_KEY"):
        monkeypatch.delenv(name, raising=False)
