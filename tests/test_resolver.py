"""Tests for location resolution."""

import pytest

from geogen.errors import ResolutionError
from geogen.models import MapPoint, MapsSource, WebSource
from geogen.resolver import LocationResolver, pick_location_name


class TestPickLocationName:
    def test_first_titled_web_source(self):
        sources = [WebSource(title="Eiffel Tower"), WebSource(title="")]
        assert pick_location_name("eiffel", sources) == "Eiffel Tower"

    def test_skips_untitled_and_maps_sources(self):
        sources = [MapsSource(title="Maps Title"), WebSource(title=""), WebSource(title="Second")]
        assert pick_location_name("q", sources) == "Second"

    def test_falls_back_to_query(self):
        assert pick_location_name("big ben", [MapsSource(title="Big Ben")]) == "big ben"
        assert pick_location_name("big ben", []) == "big ben"


class TestLocationResolver:
    def test_resolve_uses_web_title(self, backend):
        backend.reply_text(
            "A wrought-iron lattice tower on the Champ de Mars.",
            chunks=[
                {"web": {"uri": "https://example.com/eiffel", "title": "Eiffel Tower"}},
                {"web": {"uri": "https://example.com/other", "title": ""}},
            ],
        )

        with backend.client() as client:
            record = LocationResolver(client).resolve("eiffel tower paris")

        assert record.name == "Eiffel Tower"
        assert record.description == "A wrought-iron lattice tower on the Champ de Mars."
        assert record.raw_text == record.description
        assert len(record.grounding_sources) == 2
        assert record.coordinates is None

    def test_maps_only_falls_back_to_query(self, backend):
        backend.reply_text(
            "Famous clock tower.",
            chunks=[{"maps": {"uri": "https://maps.example/bb", "title": "Big Ben", "placeId": "p1"}}],
        )

        with backend.client() as client:
            record = LocationResolver(client).resolve("big ben")

        assert record.name == "big ben"
        assert record.grounding_sources == [MapsSource(uri="https://maps.example/bb", title="Big Ben", place_id="p1")]

    def test_request_shape(self, backend):
        backend.reply_text("Some text")

        with backend.client() as client:
            LocationResolver(client, model="search-model").resolve("Shibuya Crossing", coordinates=MapPoint(35.66, 139.70))

        [call] = backend.calls()
        assert call["model"] == "search-model"
        assert call["method"] == "generateContent"
        assert call["key"] == "test-key"
        assert call["json"]["tools"] == [{"google_search": {}}]
        prompt = call["json"]["contents"][0]["parts"][0]["text"]
        assert '"Shibuya Crossing"' in prompt
        assert "35.66" not in prompt

    def test_unrecognized_chunks_are_dropped(self, backend):
        backend.reply_text("text", chunks=[{"retrievedContext": {"uri": "x"}}, {"web": {"title": "Kept"}}])

        with backend.client() as client:
            record = LocationResolver(client).resolve("q")

        assert record.grounding_sources == [WebSource(title="Kept")]

    def test_empty_text_raises(self, backend):
        backend.reply_text("")

        with backend.client() as client:
            with pytest.raises(ResolutionError):
                LocationResolver(client).resolve("nowhere")

    def test_no_candidates_raises(self, backend):
        backend.reply("generateContent", {"candidates": []})

        with backend.client() as client:
            with pytest.raises(ResolutionError):
                LocationResolver(client).resolve("nowhere")

    def test_backend_error_is_wrapped(self, backend):
        backend.reply("generateContent", {"error": {"message": "boom"}}, status=500)

        with backend.client() as client:
            with pytest.raises(ResolutionError) as exc_info:
                LocationResolver(client).resolve("anywhere")

        assert "500" in str(exc_info.value)
        assert exc_info.value.__cause__ is not None

    @pytest.mark.parametrize("body", [
        {"error": "quota exceeded"},
        ["not", "an", "object"],
    ])
    def test_malformed_body_is_wrapped(self, backend, body):
        backend.reply("generateContent", body)

        with backend.client() as client:
            with pytest.raises(ResolutionError) as exc_info:
                LocationResolver(client).resolve("Kyoto")

        assert exc_info.value.__cause__ is not None
