"""
Configuration management for GeoGen.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import yaml

from geogen.errors import ConfigurationError


GLOBAL_CONFIG_DIR = Path.home() / ".geogen"
GLOBAL_CONFIG_FILE = GLOBAL_CONFIG_DIR / "config.yaml"

# Checked in order, first non-empty wins
API_KEY_ENV_VARS = ("GEMINI_API_KEY", "GOOGLE_API_KEY", "API_KEY")


@dataclass
class APIKeys:
    """API key configuration."""

    gemini: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "APIKeys":
        return cls(
            gemini=data.get("gemini", ""),
        )

    @classmethod
    def from_env(cls) -> "APIKeys":
        """Load API keys from environment variables."""
        for name in API_KEY_ENV_VARS:
            value = os.getenv(name, "")
            if value:
                return cls(gemini=value)
        return cls()

    def merge_env(self) -> "APIKeys":
        """Merge with environment variables (env takes precedence)."""
        env_keys = APIKeys.from_env()
        return APIKeys(
            gemini=env_keys.gemini or self.gemini,
        )


@dataclass
class Models:
    """Backend model identifiers."""

    search: str = "gemini-2.5-flash"
    recommend: str = "gemini-2.5-flash"
    inline_image: str = "gemini-2.5-flash-image"
    image: str = "imagen-4.0-generate-001"

    @classmethod
    def from_dict(cls, data: dict) -> "Models":
        defaults = cls()
        return cls(
            search=data.get("search", defaults.search),
            recommend=data.get("recommend", defaults.recommend),
            inline_image=data.get("inline_image", defaults.inline_image),
            image=data.get("image", defaults.image),
        )

    def to_dict(self) -> dict:
        return {
            "search": self.search,
            "recommend": self.recommend,
            "inline_image": self.inline_image,
            "image": self.image,
        }


@dataclass
class Defaults:
    """Default settings."""

    perspective: str = "Isometric 3D"
    style: str = "Photorealistic"
    quality: str = "High (Detailed)"
    timeout: float = 120.0  # Seconds per backend call
    output_dir: str = "."

    @classmethod
    def from_dict(cls, data: dict) -> "Defaults":
        return cls(
            perspective=data.get("perspective", "Isometric 3D"),
            style=data.get("style", "Photorealistic"),
            quality=data.get("quality", "High (Detailed)"),
            timeout=float(data.get("timeout", 120.0)),
            output_dir=data.get("output_dir", "."),
        )

    def to_dict(self) -> dict:
        return {
            "perspective": self.perspective,
            "style": self.style,
            "quality": self.quality,
            "timeout": self.timeout,
            "output_dir": self.output_dir,
        }


@dataclass
class Config:
    """Complete configuration."""

    api_keys: APIKeys = field(default_factory=APIKeys)
    models: Models = field(default_factory=Models)
    defaults: Defaults = field(default_factory=Defaults)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Config":
        """Load configuration from file and environment."""
        config_path = config_path or GLOBAL_CONFIG_FILE

        # Start with defaults
        config = cls()

        # Load from file if exists
        if config_path.exists():
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
                config.api_keys = APIKeys.from_dict(data.get("api_keys", {}))
                config.models = Models.from_dict(data.get("models", {}))
                config.defaults = Defaults.from_dict(data.get("defaults", {}))

        # Merge environment variables (they take precedence)
        config.api_keys = config.api_keys.merge_env()

        return config

    def save(self, config_path: Optional[Path] = None) -> None:
        """Save configuration to file."""
        config_path = config_path or GLOBAL_CONFIG_FILE
        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "api_keys": {
                "gemini": self.api_keys.gemini,
            },
            "models": self.models.to_dict(),
            "defaults": self.defaults.to_dict(),
        }

        with open(config_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False)

    def validate(self) -> list[str]:
        """Validate configuration and return list of issues."""
        from geogen.models import PerspectiveOption, StyleOption, QualityOption

        issues = []

        if not self.api_keys.gemini:
            issues.append(f"Gemini API key not configured ({' / '.join(API_KEY_ENV_VARS)})")

        for label, enum_cls, value in (
            ("perspective", PerspectiveOption, self.defaults.perspective),
            ("style", StyleOption, self.defaults.style),
            ("quality", QualityOption, self.defaults.quality),
        ):
            if enum_cls.parse(value) is None:
                issues.append(f"Unknown default {label}: {value!r}")

        return issues

    def require_api_key(self) -> str:
        """Return the API key or raise ConfigurationError if it is missing."""
        if not self.api_keys.gemini:
            raise ConfigurationError(
                f"API key not found. Set one of {', '.join(API_KEY_ENV_VARS)} "
                f"or run 'geogen setup-keys'."
            )
        return self.api_keys.gemini
