"""Wires the Unsplash provider into the host's hooks."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from loguru import logger

from app.provider import UnsplashProvider
from app.views.settings_view import FIELD_ID, SETTINGS_PAGE, register_settings_ui
from core.models import MAX_PER_PAGE
from core.services.interfaces import ScriptRegistry, SettingsPage
from infrastructure.hooks import HookRegistry
from infrastructure.photo_mapper import PhotoMapper
from infrastructure.settings import JsonSettings, ProviderConfig
from infrastructure.unsplash_client import UnsplashClient

PER_PAGE_SCRIPT = f"wp.media.model.Query.defaultArgs.posts_per_page = {MAX_PER_PAGE}"


class Plugin:
    """Holds the configuration and lazily built provider for one host."""

    def __init__(
        self,
        settings: JsonSettings,
        config: ProviderConfig | None = None,
        client: UnsplashClient | None = None,
    ) -> None:
        self.settings = settings
        self.config = config or ProviderConfig.from_settings(settings)
        self._client = client
        self._provider: UnsplashProvider | None = None
        self.registered_settings: dict[str, dict[str, Any]] = {}

    def get_provider(self, _current: Any = None) -> UnsplashProvider:
        """Return the provider, building it on first use."""
        if self._provider is None:
            client = self._client or UnsplashClient(self.config)
            mapper = PhotoMapper(self.config.image_sizes, self.config.utm_source)
            self._provider = UnsplashProvider(client, mapper)
        return self._provider

    def track_download(
        self, attachment: Any, selection: Mapping[str, Any], meta: Mapping[str, Any] | None
    ) -> None:
        """Record a download when an Unsplash photo is inserted.

        Unsplash's API terms require reporting each download.
        """
        if not meta or "unsplash_id" not in meta:
            return
        logger.debug("Inserted attachment {} from Unsplash", attachment)
        self.get_provider().track_download(str(meta["unsplash_id"]))

    def override_per_page(self, scripts: ScriptRegistry) -> None:
        """Cap the media library page size at the API limit."""
        scripts.add_inline_script("media-models", PER_PAGE_SCRIPT)

    def register_key_setting(self) -> None:
        """Register the API key setting."""
        self.registered_settings[FIELD_ID] = {
            "group": SETTINGS_PAGE,
            "type": "string",
            "description": "API key for Unsplash",
            "default": "",
        }

    def register_settings_ui(self, page: SettingsPage) -> bool:
        return register_settings_ui(page, self.config, self.settings)


def bootstrap(hooks: HookRegistry, settings: JsonSettings, **kwargs: Any) -> Plugin:
    """Register the plugin's hooks and return the plugin instance."""
    plugin = Plugin(settings, **kwargs)
    hooks.add_filter("amf/provider", plugin.get_provider)
    hooks.add_action("amf/inserted_attachment", plugin.track_download, 10, 3)
    hooks.add_action("wp_default_scripts", plugin.override_per_page, 100)
    hooks.add_action("plugins_loaded", plugin.register_key_setting, 10, 0)
    hooks.add_action("admin_init", plugin.register_settings_ui)
    return plugin
