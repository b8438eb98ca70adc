"""Settings screen for the Unsplash API key.

Rendering returns HTML strings; the host page decides where they go.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
import html
from typing import Any

from loguru import logger

from core.services.interfaces import SettingsPage
from infrastructure.settings import API_KEY_SETTING, JsonSettings, ProviderConfig

SETTINGS_PAGE = "media"
SECTION_ID = "amfunsplash"
FIELD_ID = "amfunsplash_api_key"
REGISTER_APP_URL = "https://unsplash.com/documentation#registering-your-application"


@dataclass
class SettingsSection:
    section_id: str
    title: str
    callback: Callable[[], str]


@dataclass
class SettingsField:
    field_id: str
    title: str
    callback: Callable[..., str]
    section: str
    args: dict[str, Any] = field(default_factory=dict)


@dataclass
class SettingsScreen:
    """Collects sections and fields registered for each settings page."""

    sections: dict[str, list[SettingsSection]] = field(default_factory=dict)
    fields: dict[str, list[SettingsField]] = field(default_factory=dict)

    def add_settings_section(
        self, section_id: str, title: str, callback: Callable[[], str], page: str
    ) -> None:
        self.sections.setdefault(page, []).append(SettingsSection(section_id, title, callback))

    def add_settings_field(
        self,
        field_id: str,
        title: str,
        callback: Callable[..., str],
        page: str,
        section: str,
        args: dict[str, Any] | None = None,
    ) -> None:
        self.fields.setdefault(page, []).append(
            SettingsField(field_id, title, callback, section, dict(args or {}))
        )

    def render(self, page: str) -> str:
        """Render every section of `page` followed by its fields."""
        parts: list[str] = []
        for section in self.sections.get(page, []):
            parts.append(f"<h2>{html.escape(section.title)}</h2>")
            parts.append(section.callback())
            for item in self.fields.get(page, []):
                if item.section == section.section_id:
                    label = html.escape(item.title)
                    parts.append(
                        f'<label for="{html.escape(item.field_id, quote=True)}">{label}</label>'
                    )
                    parts.append(item.callback())
        return "\n".join(parts)


def render_settings_description() -> str:
    """Render the description for the settings section."""
    return (
        "<p>To enable the Unsplash integration, "
        f'<a href="{html.escape(REGISTER_APP_URL, quote=True)}">register an application</a> '
        "and enter your API key here.</p>"
    )


def render_field_ui(value: str | None) -> str:
    """Render the API key input with `value` pre-filled."""
    return (
        "<input\n"
        '\tclass="regular-text code"\n'
        f'\tid="{FIELD_ID}"\n'
        f'\tname="{FIELD_ID}"\n'
        '\ttype="text"\n'
        f'\tvalue="{html.escape(value or "", quote=True)}"\n'
        "/>"
    )


def register_settings_ui(
    page: SettingsPage, config: ProviderConfig, settings: JsonSettings
) -> bool:
    """Add the API key section and field, unless the key is fixed by the constant.

    Returns True when the UI was registered.
    """
    if config.key_from_constant:
        logger.debug("API key fixed by constant; skipping settings UI")
        return False

    page.add_settings_section(
        SECTION_ID, "AMF Unsplash", render_settings_description, SETTINGS_PAGE
    )
    page.add_settings_field(
        FIELD_ID,
        "Unsplash API Key",
        lambda: render_field_ui(settings.get(API_KEY_SETTING, "")),
        SETTINGS_PAGE,
        SECTION_ID,
        {"label_for": FIELD_ID},
    )
    return True


def save_api_key(settings: JsonSettings, config: ProviderConfig, value: str | None) -> bool:
    """Store a submitted API key. Returns False when the constant is in force."""
    if config.key_from_constant:
        logger.warning("Ignoring submitted API key; key is fixed by constant")
        return False
    key = (value or "").strip()
    settings.set(API_KEY_SETTING, key)
    settings.save()
    config.api_key = key or None
    logger.info("Unsplash API key {}", "updated" if key else "cleared")
    return True
