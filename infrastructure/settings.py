"""Settings access helpers and the resolved provider configuration."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
import json
import os
from pathlib import Path
from typing import Any

from loguru import logger

from core.models import SizeSpec

API_KEY_CONSTANT = "AMFUNSPLASH_API_KEY"
API_KEY_SETTING = "unsplash.api_key"
BASE_URL = "https://api.unsplash.com"

DEFAULT_TIMEOUT = 10.0
DEFAULT_UTM_SOURCE = "altis"

# Host defaults when settings.json does not register any sizes
DEFAULT_IMAGE_SIZES: dict[str, SizeSpec] = {
    "thumbnail": SizeSpec(150, 150, True),
    "medium": SizeSpec(300, 300, False),
    "medium_large": SizeSpec(768, 0, False),
    "large": SizeSpec(1024, 1024, False),
}


class JsonSettings:
    """Lightweight JSON settings store with dotted-key access."""

    def __init__(self, settings_path: str | Path) -> None:
        self._path = Path(settings_path)
        if not self._path.exists():
            raise FileNotFoundError(f"settings.json not found: {self._path}")
        with self._path.open("r", encoding="utf-8") as f:
            self._data = json.load(f)

    def get(self, key: str, default: Any | None = None) -> Any:
        """Return value for dotted `key`, or `default` if not present."""
        parts = key.split(".")
        node: Any = self._data
        for part in parts:
            if isinstance(node, dict) and part in node:
                node = node[part]
            else:
                return default
        return node

    def set(self, key: str, value: Any) -> None:
        """Set dotted `key` to `value`, creating intermediate objects."""
        parts = key.split(".")
        node = self._data
        for part in parts[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[parts[-1]] = value

    def save(self) -> None:
        """Write the current values back to the settings file."""
        with self._path.open("w", encoding="utf-8") as f:
            json.dump(self._data, f, indent=2)
            f.write("\n")


def _parse_image_sizes(raw: Any) -> dict[str, SizeSpec]:
    # Expect a mapping like: {"thumbnail": {"width": 150, "height": 150, "crop": true}, ...}
    if not isinstance(raw, dict):
        return dict(DEFAULT_IMAGE_SIZES)
    result: dict[str, SizeSpec] = {}
    for name, item in raw.items():
        if not isinstance(item, dict):
            continue
        try:
            result[str(name)] = SizeSpec(
                width=int(item.get("width", 0) or 0),
                height=int(item.get("height", 0) or 0),
                crop=bool(item.get("crop", False)),
            )
        except (ValueError, TypeError):
            logger.warning("Invalid image size {}: {}", name, item)
    return result


def resolve_api_key(
    settings: JsonSettings | None, environ: Mapping[str, str] | None = None
) -> tuple[str | None, bool]:
    """Return (api_key, from_constant).

    The deploy-time constant wins over the stored setting. Empty values
    count as unset.
    """
    env = os.environ if environ is None else environ
    constant = env.get(API_KEY_CONSTANT)
    if constant:
        return constant, True
    if settings is not None:
        stored = settings.get(API_KEY_SETTING)
        if isinstance(stored, str) and stored.strip():
            return stored.strip(), False
    return None, False


@dataclass
class ProviderConfig:
    """Configuration for the Unsplash provider, resolved once at startup."""

    api_key: str | None = None
    key_from_constant: bool = False
    timeout: float = DEFAULT_TIMEOUT
    utm_source: str = DEFAULT_UTM_SOURCE
    base_url: str = BASE_URL
    image_sizes: dict[str, SizeSpec] = field(default_factory=lambda: dict(DEFAULT_IMAGE_SIZES))

    @classmethod
    def from_settings(
        cls, settings: JsonSettings | None, environ: Mapping[str, str] | None = None
    ) -> ProviderConfig:
        """Build the configuration from `settings` and the environment."""
        api_key, from_constant = resolve_api_key(settings, environ)
        config = cls(api_key=api_key, key_from_constant=from_constant)
        if settings is None:
            return config

        try:
            config.timeout = float(settings.get("unsplash.request_timeout", DEFAULT_TIMEOUT))
        except (ValueError, TypeError):
            config.timeout = DEFAULT_TIMEOUT
        utm = settings.get("unsplash.utm_source", DEFAULT_UTM_SOURCE)
        if isinstance(utm, str) and utm:
            config.utm_source = utm
        base_url = settings.get("unsplash.base_url", BASE_URL)
        if isinstance(base_url, str) and base_url:
            config.base_url = base_url.rstrip("/")
        config.image_sizes = _parse_image_sizes(settings.get("image_sizes"))
        return config
