"""Tests for image generators and quality routing."""

import pytest

from geogen.errors import GenerationError
from geogen.generators.gemini import InlineImageGenerator
from geogen.generators.imagen import ImagenGenerator
from geogen.generators.manager import GeneratorRouter
from geogen.models import QualityOption


class TestRouting:
    def test_standard_uses_only_inline_path(self, backend):
        backend.reply_inline_image()
        backend.reply_predictions()

        with backend.client() as client:
            image = GeneratorRouter(client).generate("prompt", QualityOption.STANDARD)

        assert image.data == backend.INLINE_IMAGE_DATA
        assert image.route == "inline"
        assert image.data_uri == f"data:image/jpeg;base64,{backend.INLINE_IMAGE_DATA}"
        assert [c["method"] for c in backend.calls()] == ["generateContent"]
        assert backend.calls()[0]["model"] == "gemini-2.5-flash-image"

    @pytest.mark.parametrize("quality", [QualityOption.HIGH, QualityOption.ULTRA])
    def test_high_and_ultra_use_only_imagen_path(self, backend, quality):
        backend.reply_inline_image()
        backend.reply_predictions()

        with backend.client() as client:
            image = GeneratorRouter(client).generate("prompt", quality)

        assert image.data == backend.IMAGEN_IMAGE_DATA
        assert image.route == "imagen"
        assert image.data_uri == f"data:image/jpeg;base64,{backend.IMAGEN_IMAGE_DATA}"
        assert [c["method"] for c in backend.calls()] == ["predict"]
        assert backend.calls()[0]["model"] == "imagen-4.0-generate-001"

    def test_generators_are_reused(self, backend):
        backend.reply_predictions()

        with backend.client() as client:
            router = GeneratorRouter(client)
            router.generate("a", QualityOption.HIGH)
            first = router._imagen
            router.generate("b", QualityOption.ULTRA)

        assert router._imagen is first
        assert router._inline is None

    def test_route_for(self):
        assert GeneratorRouter.route_for(QualityOption.STANDARD) == "inline"
        assert GeneratorRouter.route_for(QualityOption.HIGH) == "imagen"
        assert GeneratorRouter.route_for(QualityOption.ULTRA) == "imagen"


class TestInlineImageGenerator:
    def test_request_shape(self, backend):
        backend.reply_inline_image()

        with backend.client() as client:
            InlineImageGenerator(client).generate("a voxel castle")

        [call] = backend.calls()
        assert call["json"]["generationConfig"] == {"responseModalities": ["IMAGE"]}
        assert call["json"]["contents"][0]["parts"] == [{"text": "a voxel castle"}]

    def test_skips_text_parts(self, backend):
        backend.reply("generateContent", {
            "candidates": [{
                "content": {"parts": [
                    {"text": "Here is your image"},
                    {"inlineData": {"mimeType": "image/png", "data": "QUJD"}},
                ]},
            }],
        })

        with backend.client() as client:
            assert InlineImageGenerator(client).generate("p").data == "QUJD"

    def test_no_image_raises(self, backend):
        backend.reply_text("I can't draw that")

        with backend.client() as client:
            with pytest.raises(GenerationError, match="Standard quality"):
                InlineImageGenerator(client).generate("p")

    def test_safety_block(self, backend):
        backend.reply("generateContent", {"candidates": [{"finishReason": "SAFETY"}]})

        with backend.client() as client:
            with pytest.raises(GenerationError, match="safety"):
                InlineImageGenerator(client).generate("p")


class TestImagenGenerator:
    def test_request_shape(self, backend):
        backend.reply_predictions()

        with backend.client() as client:
            ImagenGenerator(client).generate("a clay city")

        [call] = backend.calls()
        assert call["json"] == {
            "instances": [{"prompt": "a clay city"}],
            "parameters": {
                "sampleCount": 1,
                "aspectRatio": "16:9",
                "outputOptions": {"mimeType": "image/jpeg"},
            },
        }

    def test_empty_predictions_raise(self, backend):
        backend.reply("predict", {"predictions": []})

        with backend.client() as client:
            with pytest.raises(GenerationError, match="High/Ultra"):
                ImagenGenerator(client).generate("p")

    def test_transport_error_raises(self, backend):
        backend.reply("predict", {"error": {"message": "bad"}}, status=400)

        with backend.client() as client:
            with pytest.raises(GenerationError):
                ImagenGenerator(client).generate("p")
