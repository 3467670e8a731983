"""
Shareable deep links for GeoGen.

A deep link encodes a full generation configuration in query-string keys
``loc``, ``per``, ``sty``, ``qual`` and ``cust`` so a session can be
reproduced elsewhere.
"""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import parse_qs, urlencode

from .models import PerspectiveOption, QualityOption, StyleOption


DEFAULT_BASE_URL = "https://geogen.app/"


@dataclass
class DeepLinkParams:
    """Values recovered from a deep link. None means "keep the default"."""

    location: Optional[str] = None
    perspective: Optional[PerspectiveOption] = None
    style: Optional[StyleOption] = None
    quality: Optional[QualityOption] = None
    custom_style: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not any((self.location, self.perspective, self.style, self.quality, self.custom_style))


def _exact(enum_cls, value: Optional[str]):
    for member in enum_cls:
        if member.value == value:
            return member
    return None


def parse_deep_link(link: str) -> DeepLinkParams:
    """
    Parse a deep link (full URL or bare query string).

    Enum keys must match a wire value exactly; anything else is ignored.
    """
    link = link.split("#", 1)[0]
    query = link.split("?", 1)[1] if "?" in link else link
    values = {key: items[0] for key, items in parse_qs(query).items() if items}

    return DeepLinkParams(
        location=values.get("loc") or None,
        perspective=_exact(PerspectiveOption, values.get("per")),
        style=_exact(StyleOption, values.get("sty")),
        quality=_exact(QualityOption, values.get("qual")),
        custom_style=values.get("cust") or None,
    )


def build_deep_link(
    location: str,
    perspective: PerspectiveOption,
    style: StyleOption,
    quality: QualityOption,
    custom_style: str = "",
    base_url: str = DEFAULT_BASE_URL,
) -> str:
    """Build a shareable link for a configuration."""
    params = {}
    if location:
        params["loc"] = location
    params["per"] = perspective.value
    params["sty"] = style.value
    params["qual"] = quality.value
    if custom_style:
        params["cust"] = custom_style

    base = base_url.split("?", 1)[0]
    return f"{base}?{urlencode(params)}"
