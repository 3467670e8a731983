"""Tests for data models."""

import base64

import pytest

from geogen.models import (
    GeneratedImage,
    GenerationRequest,
    LocationRecord,
    MapPoint,
    MapsSource,
    PerspectiveOption,
    QualityOption,
    ReviewSnippet,
    StyleOption,
    WebSource,
    grounding_source_from_dict,
)


class TestOptionEnums:
    def test_wire_values(self):
        assert PerspectiveOption.AERIAL.value == "Aerial / Drone"
        assert StyleOption.SKETCH.value == "Blueprint"
        assert QualityOption.ULTRA.value == "Ultra (Best)"
        assert len(StyleOption) == 12

    def test_from_string_accepts_value_and_name(self):
        assert PerspectiveOption.from_string("Isometric 3D") == PerspectiveOption.ISOMETRIC
        assert PerspectiveOption.from_string("isometric") == PerspectiveOption.ISOMETRIC
        assert StyleOption.from_string("low-poly") == StyleOption.LOW_POLY
        assert StyleOption.from_string("LOW_POLY") == StyleOption.LOW_POLY
        assert StyleOption.from_string("Synthwave / Retro 80s") == StyleOption.SYNTHWAVE
        assert QualityOption.from_string("ultra") == QualityOption.ULTRA

    def test_from_string_invalid(self):
        with pytest.raises(ValueError) as exc_info:
            StyleOption.from_string("baroque")
        assert "Unknown StyleOption" in str(exc_info.value)

    def test_parse_returns_none(self):
        assert QualityOption.parse("bogus") is None
        assert QualityOption.parse("") is None
        assert QualityOption.parse(None) is None


class TestGroundingSources:
    def test_web_chunk(self):
        source = grounding_source_from_dict({"web": {"uri": "https://a.example", "title": "Eiffel Tower"}})
        assert isinstance(source, WebSource)
        assert source.kind == "web"
        assert source.title == "Eiffel Tower"

    def test_maps_chunk_with_reviews(self):
        source = grounding_source_from_dict({
            "maps": {
                "uri": "https://maps.example/p",
                "title": "Shibuya Crossing",
                "placeId": "places/abc",
                "placeAnswerSources": {
                    "reviewSnippets": [{"snippet": "Busy!", "author": "Ana"}],
                },
            }
        })
        assert isinstance(source, MapsSource)
        assert source.kind == "maps"
        assert source.place_id == "places/abc"
        assert source.review_snippets == (ReviewSnippet(snippet="Busy!", author="Ana"),)

    def test_missing_fields_default_to_empty(self):
        source = grounding_source_from_dict({"web": {}})
        assert source == WebSource(uri="", title="")

    def test_unknown_chunk(self):
        assert grounding_source_from_dict({"retrievedContext": {}}) is None


class TestLocationRecord:
    def test_web_sources_filter(self):
        record = LocationRecord(
            name="X",
            description="d",
            raw_text="d",
            grounding_sources=[MapsSource(title="m"), WebSource(title="w")],
        )
        assert record.web_sources == [WebSource(title="w")]

    def test_serialization_roundtrip(self):
        record = LocationRecord(
            name="Eiffel Tower",
            description="Iron lattice",
            raw_text="Iron lattice",
            grounding_sources=[WebSource(uri="u", title="t"), MapsSource(uri="m", place_id="p")],
            coordinates=MapPoint(latitude=48.8584, longitude=2.2945),
        )
        assert LocationRecord.from_dict(record.to_dict()) == record

    def test_immutable(self):
        record = LocationRecord(name="a", description="b", raw_text="b")
        with pytest.raises(AttributeError):
            record.name = "c"


class TestGenerationRequest:
    def _request(self, **overrides):
        values = dict(
            location_name="Golden Gate Bridge",
            description="Red suspension bridge",
            perspective=PerspectiveOption.AERIAL,
            style=StyleOption.REALISTIC,
            quality=QualityOption.HIGH,
        )
        values.update(overrides)
        return GenerationRequest(**values)

    def test_valid(self):
        assert self._request().validate() == []

    def test_custom_without_text(self):
        issues = self._request(style=StyleOption.CUSTOM, custom_style_text="  ").validate()
        assert issues == ["Custom style selected but no custom style text provided"]

    def test_custom_with_text(self):
        assert self._request(style=StyleOption.CUSTOM, custom_style_text="Lego bricks").validate() == []

    def test_empty_location(self):
        assert "Location name is empty" in self._request(location_name="").validate()


class TestGeneratedImage:
    def test_data_uri(self):
        image = GeneratedImage(data="QUJD")
        assert image.data_uri == "data:image/jpeg;base64,QUJD"

    def test_save_writes_decoded_bytes(self, tmp_path):
        image = GeneratedImage(data=base64.b64encode(b"jpeg!").decode())
        path = image.save(tmp_path / "out" / "render.jpg")
        assert path.read_bytes() == b"jpeg!"

    def test_default_filename(self):
        assert GeneratedImage.default_filename("Shibuya Crossing, Tokyo") == "geogen_shibuya_crossing__tokyo.jpg"
        assert GeneratedImage.default_filename(None) == "geogen_geogen_visual.jpg"
        assert GeneratedImage.default_filename("") == "geogen_geogen_visual.jpg"
