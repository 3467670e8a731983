"""
GeoGen - search-grounded, stylized 3D-map renders of real places.

Type a place name, get grounded visual context for it, optionally let the
model pick a perspective and art style, then render the scene.
"""

from pathlib import Path

# Read version from VERSION file (single source of truth)
_version_file = Path(__file__).parent.parent / "VERSION"
if _version_file.exists():
    __version__ = _version_file.read_text().strip()
else:
    __version__ = "0.1.0"  # Fallback for installed copies

from geogen.models import (
    PerspectiveOption,
    StyleOption,
    QualityOption,
    LocationRecord,
    StyleRecommendation,
    GenerationRequest,
    GeneratedImage,
)
from geogen.prompts import build_prompt
from geogen.session import GeoGenSession, SessionState
from geogen.config import Config

__all__ = [
    "__version__",
    "PerspectiveOption",
    "StyleOption",
    "QualityOption",
    "LocationRecord",
    "StyleRecommendation",
    "GenerationRequest",
    "GeneratedImage",
    "build_prompt",
    "GeoGenSession",
    "SessionState",
    "Config",
]
