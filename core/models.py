"""Core domain models for media queries and normalized image records."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any

MIME_JPEG = "image/jpeg"
MAX_PER_PAGE = 30

DATE_DISPLAY_FMT = "%B %d, %Y"


def _absint(value: Any) -> int | None:
    """Return abs(int(value)), or None when `value` is not numeric."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return abs(int(value))
    except (ValueError, TypeError):
        return None


@dataclass
class MediaQuery:
    """A media-library query as issued by the host."""

    posts_per_page: int | None = None
    paged: int | None = None
    orderby: str | None = None
    order: str | None = None
    s: str | None = None

    @classmethod
    def from_args(cls, args: Mapping[str, Any]) -> MediaQuery:
        """Build a query from host-style args, ignoring values of the wrong type."""
        orderby = args.get("orderby")
        order = args.get("order")
        search = args.get("s")
        return cls(
            posts_per_page=_absint(args.get("posts_per_page")),
            paged=_absint(args.get("paged")),
            orderby=str(orderby) if orderby else None,
            order=str(order) if order else None,
            s=str(search) if search is not None else None,
        )

    @property
    def search_term(self) -> str | None:
        """Search term, or None when absent or blank."""
        if self.s is None or not self.s.strip():
            return None
        return self.s


@dataclass
class UnsplashQuery:
    """Query parameters understood by the Unsplash API."""

    page: int = 1
    per_page: int = MAX_PER_PAGE
    order_by: str = "latest"
    query: str | None = None

    @property
    def is_search(self) -> bool:
        return self.query is not None

    def to_params(self) -> dict[str, Any]:
        """Return the query-string parameters for the API call."""
        params: dict[str, Any] = {
            "page": self.page,
            "per_page": self.per_page,
            "order_by": self.order_by,
        }
        if self.query is not None:
            params["query"] = self.query
        return params


@dataclass(frozen=True)
class SizeSpec:
    """An image size registered with the host."""

    width: int
    height: int
    crop: bool = False


@dataclass
class ImageSize:
    """A dimensioned URL for one named size of an image."""

    width: int
    height: int
    orientation: str
    url: str


@dataclass
class ImageRecord:
    """A normalized photo, ready to hand to the media library."""

    id: str
    url: str
    filename: str
    link: str
    title: str
    width: int
    height: int
    alt: str = ""
    description: str = ""
    caption: str = ""
    mime: str = MIME_JPEG
    sizes: dict[str, ImageSize] = field(default_factory=dict)
    # Effective date used for ordering; 0 until one is assigned
    date: int = 0
    date_formatted: str = ""
    amf_meta: dict[str, Any] = field(default_factory=dict)

    def set_date(self, timestamp: int) -> None:
        """Set the effective date and the human readable date together."""
        self.date = int(timestamp)
        self.date_formatted = datetime.fromtimestamp(self.date, tz=timezone.utc).strftime(
            DATE_DISPLAY_FMT
        )

    @property
    def has_date(self) -> bool:
        return bool(self.date)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready representation."""
        return asdict(self)


@dataclass
class FetchResult:
    """Decoded response of an API call."""

    headers: Mapping[str, str]
    data: Any
    status_code: int = 200
