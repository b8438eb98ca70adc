"""Core service interfaces and host-facing protocols.

The provider interfaces mirror what the media framework expects from a
provider. The protocols describe the small parts of the host (script
registry, settings screen) the plugin touches, so callers can supply
adapters for their own host types.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol

from core.models import ImageRecord, MediaQuery


class IMediaProvider:
    """Interface for media-library providers."""

    def get_id(self) -> str:
        """Return the unique provider ID."""
        raise NotImplementedError

    def get_name(self) -> str:
        """Return the human readable provider name."""
        raise NotImplementedError

    def request(self, query: MediaQuery) -> list[ImageRecord]:
        """Return the records matching `query`, in display order."""
        raise NotImplementedError


class IResize:
    """Interface for providers that support dynamically sized images."""

    def resize(
        self, attachment: ImageRecord, width: int, height: int, crop: bool | list[str] = False
    ) -> str:
        """Return a URL for `attachment` resized to `width` x `height`."""
        raise NotImplementedError


class ScriptRegistry(Protocol):
    """Registry of client-side scripts."""

    def add_inline_script(self, handle: str, data: str, position: str = "after") -> bool:
        """Attach inline `data` to the script registered as `handle`."""
        raise NotImplementedError


class SettingsPage(Protocol):
    """Settings screen sections and fields."""

    def add_settings_section(
        self, section_id: str, title: str, callback: Callable[[], str], page: str
    ) -> None:
        """Add a section to `page`."""
        raise NotImplementedError

    def add_settings_field(
        self,
        field_id: str,
        title: str,
        callback: Callable[..., str],
        page: str,
        section: str,
        args: dict[str, Any] | None = None,
    ) -> None:
        """Add a field to `section` of `page`."""
        raise NotImplementedError
