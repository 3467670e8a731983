"""
Data models for GeoGen.
"""

import base64
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import ClassVar, Optional, Union


class _OptionEnum(Enum):
    """Enum whose values are the human-readable wire strings."""

    @classmethod
    def _normalize(cls, value: str) -> str:
        return re.sub(r"[\s_\-/]+", "", value).lower()

    @classmethod
    def parse(cls, value: Optional[str]):
        """Return the member matching a wire value or member name, or None."""
        if not value:
            return None
        for member in cls:
            if value == member.value:
                return member
        wanted = cls._normalize(value)
        for member in cls:
            if wanted in (cls._normalize(member.value), cls._normalize(member.name)):
                return member
        return None

    @classmethod
    def from_string(cls, value: str):
        """Like parse(), but raises ValueError for unknown input."""
        member = cls.parse(value)
        if member is None:
            choices = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown {cls.__name__} {value!r}. Choose from: {choices}")
        return member

    @classmethod
    def values(cls) -> list[str]:
        return [m.value for m in cls]


class PerspectiveOption(_OptionEnum):
    """Camera viewpoint for the render."""

    AERIAL = "Aerial / Drone"
    STREET = "Street View"
    ISOMETRIC = "Isometric 3D"


class StyleOption(_OptionEnum):
    """Art style for the render. CUSTOM uses user-supplied text."""

    REALISTIC = "Photorealistic"
    CYBERPUNK = "Cyberpunk"
    CLAY = "Claymation"
    SKETCH = "Blueprint"
    VOXEL = "Voxel / 8-bit"
    LOW_POLY = "Low Poly"
    ORIGAMI = "Origami / Papercraft"
    STEAMPUNK = "Steampunk"
    WATERCOLOR = "Watercolor"
    SYNTHWAVE = "Synthwave / Retro 80s"
    NOIR = "Film Noir"
    CUSTOM = "Custom"


class QualityOption(_OptionEnum):
    """Selects the image backend and whether extra emphasis is added."""

    STANDARD = "Standard (Fast)"
    HIGH = "High (Detailed)"
    ULTRA = "Ultra (Best)"


@dataclass(frozen=True)
class MapPoint:
    """A latitude/longitude pair."""

    latitude: float
    longitude: float

    def to_dict(self) -> dict:
        return {"latitude": self.latitude, "longitude": self.longitude}

    @classmethod
    def from_dict(cls, data: dict) -> "MapPoint":
        return cls(latitude=data["latitude"], longitude=data["longitude"])


@dataclass(frozen=True)
class ReviewSnippet:
    """A review excerpt attached to a maps grounding source."""

    snippet: str
    author: str = ""

    def to_dict(self) -> dict:
        return {"snippet": self.snippet, "author": self.author}


@dataclass(frozen=True)
class WebSource:
    """Grounding citation pointing at a web page."""

    kind: ClassVar[str] = "web"

    uri: str = ""
    title: str = ""

    def to_dict(self) -> dict:
        return {"web": {"uri": self.uri, "title": self.title}}


@dataclass(frozen=True)
class MapsSource:
    """Grounding citation pointing at a maps place."""

    kind: ClassVar[str] = "maps"

    uri: str = ""
    title: str = ""
    place_id: str = ""
    review_snippets: tuple[ReviewSnippet, ...] = ()

    def to_dict(self) -> dict:
        return {
            "maps": {
                "uri": self.uri,
                "title": self.title,
                "placeId": self.place_id,
                "placeAnswerSources": {
                    "reviewSnippets": [r.to_dict() for r in self.review_snippets],
                },
            }
        }


GroundingSource = Union[WebSource, MapsSource]


def grounding_source_from_dict(data: dict) -> Optional[GroundingSource]:
    """Build a grounding source from an API grounding chunk.

    Returns None for chunks that are neither web nor maps citations.
    """
    if data.get("web") is not None:
        web = data["web"]
        return WebSource(uri=web.get("uri") or "", title=web.get("title") or "")

    if data.get("maps") is not None:
        maps = data["maps"]
        answer_sources = maps.get("placeAnswerSources") or {}
        snippets = tuple(
            ReviewSnippet(snippet=s.get("snippet", ""), author=s.get("author", ""))
            for s in answer_sources.get("reviewSnippets") or []
        )
        return MapsSource(
            uri=maps.get("uri") or "",
            title=maps.get("title") or "",
            place_id=maps.get("placeId") or "",
            review_snippets=snippets,
        )

    return None


@dataclass(frozen=True)
class LocationRecord:
    """Resolved context about a place. Replaced, never mutated."""

    name: str
    description: str
    raw_text: str
    grounding_sources: list[GroundingSource] = field(default_factory=list)
    coordinates: Optional[MapPoint] = None

    @property
    def web_sources(self) -> list[WebSource]:
        return [s for s in self.grounding_sources if isinstance(s, WebSource)]

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "raw_text": self.raw_text,
            "grounding_sources": [s.to_dict() for s in self.grounding_sources],
            "coordinates": self.coordinates.to_dict() if self.coordinates else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LocationRecord":
        sources = [grounding_source_from_dict(s) for s in data.get("grounding_sources", [])]
        return cls(
            name=data["name"],
            description=data.get("description", ""),
            raw_text=data.get("raw_text", ""),
            grounding_sources=[s for s in sources if s is not None],
            coordinates=MapPoint.from_dict(data["coordinates"]) if data.get("coordinates") else None,
        )


@dataclass(frozen=True)
class StyleRecommendation:
    """Perspective and style suggested by the backend for a location."""

    perspective: PerspectiveOption
    style: StyleOption
    reasoning: str


@dataclass(frozen=True)
class GenerationRequest:
    """Everything the prompt builder needs, consumed as one unit."""

    location_name: str
    description: str
    perspective: PerspectiveOption
    style: StyleOption
    quality: QualityOption
    custom_style_text: str = ""

    def validate(self) -> list[str]:
        """Return a list of issues that make this request unusable."""
        issues = []

        if not self.location_name.strip():
            issues.append("Location name is empty")

        if self.style is StyleOption.CUSTOM and not self.custom_style_text.strip():
            issues.append("Custom style selected but no custom style text provided")

        return issues


@dataclass(frozen=True)
class GeneratedImage:
    """A generated image as base64 text, displayable as a data URI."""

    data: str
    mime_type: str = "image/jpeg"
    model: str = ""
    route: str = ""  # "inline" or "imagen"

    @property
    def data_uri(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"

    def to_bytes(self) -> bytes:
        return base64.b64decode(self.data)

    def save(self, path: Path) -> Path:
        """Write the decoded image bytes to path."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "wb") as f:
            f.write(self.to_bytes())
        return path

    @staticmethod
    def default_filename(location_name: Optional[str]) -> str:
        """File name for saving a render of location_name."""
        safe_name = re.sub(r"[^a-z0-9]", "_", location_name, flags=re.IGNORECASE).lower() if location_name else ""
        return f"geogen_{safe_name or 'geogen_visual'}.jpg"
