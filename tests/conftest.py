"""Shared fixtures: raw Unsplash photos and a fake HTTP session."""

from __future__ import annotations

from collections import deque
from datetime import datetime, timezone
import json
from pathlib import Path
from typing import Any

import pytest
import requests

from infrastructure.settings import JsonSettings, ProviderConfig


def iso(ts: int) -> str:
    """Unix timestamp to the API's ISO 8601 format."""
    return datetime.fromtimestamp(ts, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def make_photo(
    photo_id: str,
    ts: int | None = None,
    sponsored: bool = False,
    width: int = 4000,
    height: int = 3000,
    description: str | None = None,
    alt_description: str | None = "a tree in a field",
) -> dict[str, Any]:
    return {
        "id": photo_id,
        "created_at": iso(ts) if ts else None,
        "promoted_at": iso(ts) if ts else None,
        "width": width,
        "height": height,
        "description": description,
        "alt_description": alt_description,
        "urls": {
            "raw": f"https://images.unsplash.com/photo-{photo_id}?ixid=abc",
            "full": f"https://images.unsplash.com/photo-{photo_id}?ixid=abc&q=85",
        },
        "links": {"html": f"https://unsplash.com/photos/{photo_id}"},
        "user": {
            "name": "Jane Doe",
            "links": {"html": "https://unsplash.com/@jane"},
        },
        "sponsorship": {"tagline": "Made to change"} if sponsored else None,
    }


class FakeResponse:
    def __init__(self, payload: Any = None, status_code: int = 200, body: str | None = None):
        self.status_code = status_code
        self.headers = {"Content-Type": "application/json", "X-Total": "10000"}
        self._body = body if body is not None else json.dumps(payload)

    def json(self) -> Any:
        return json.loads(self._body)


class FakeSession:
    """Stands in for `requests.Session`; replies from a queue and records calls."""

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []
        self.replies: deque[Any] = deque()
        self.closed = False

    def reply(self, item: Any) -> None:
        self.replies.append(item)

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"url": url, **kwargs})
        item = self.replies.popleft() if self.replies else FakeResponse({})
        if isinstance(item, Exception):
            raise item
        return item

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def tracker_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def config() -> ProviderConfig:
    return ProviderConfig(api_key="test-key")


@pytest.fixture
def settings_file(tmp_path: Path) -> Path:
    path = tmp_path / "settings.json"
    path.write_text(
        json.dumps(
            {
                "unsplash": {"api_key": "stored-key", "request_timeout": 5},
                "image_sizes": {
                    "thumbnail": {"width": 150, "height": 150, "crop": True},
                    "medium": {"width": 300, "height": 300, "crop": False},
                },
            }
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def settings(settings_file: Path) -> JsonSettings:
    return JsonSettings(settings_file)


@pytest.fixture
def request_error() -> Exception:
    return requests.ConnectionError("connection refused")
