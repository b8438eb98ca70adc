"""Mapping of raw Unsplash photo objects to `ImageRecord`.

Raw photos are the decoded JSON objects returned by the API. Malformed items
are skipped with an error log rather than failing the whole page.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
import html
from typing import Any

from loguru import logger

from core.models import ImageRecord, ImageSize, SizeSpec
from core.services.resize_service import add_query_args
from infrastructure.settings import DEFAULT_IMAGE_SIZES, DEFAULT_UTM_SOURCE
from infrastructure.utils import parse_api_timestamp

UNSPLASH_HOME = "https://unsplash.com/"


def _orientation(width: int, height: int) -> str:
    return "portrait" if height > width else "landscape"


class PhotoMapper:
    """Builds `ImageRecord` objects from raw API photos."""

    def __init__(
        self,
        image_sizes: Mapping[str, SizeSpec] | None = None,
        utm_source: str = DEFAULT_UTM_SOURCE,
    ) -> None:
        self._image_sizes = dict(DEFAULT_IMAGE_SIZES if image_sizes is None else image_sizes)
        self._utm = f"?utm_source={utm_source}&utm_medium=referral"

    def map(self, raw: Mapping[str, Any]) -> ImageRecord:
        """Map one raw photo. Raises KeyError/TypeError/ValueError when malformed."""
        photo_id = str(raw["id"])
        raw_url = str(raw["urls"]["raw"])
        width = int(raw["width"])
        height = int(raw["height"])

        item = ImageRecord(
            id=photo_id,
            url=raw_url,
            filename=f"{photo_id}.jpg",
            link=str(raw["links"]["html"]),
            title=raw.get("description") or raw.get("alt_description") or "",
            width=width,
            height=height,
            alt=raw.get("alt_description") or "",
        )

        # Sponsored photos get their dates from neighbours later on
        if not raw.get("sponsorship"):
            timestamp = parse_api_timestamp(raw.get("promoted_at") or raw.get("created_at"))
            if timestamp:
                item.set_date(timestamp)

        attribution = self.build_attribution(raw["user"])
        item.description = attribution
        item.caption = attribution

        item.sizes = self.build_sizes(raw_url, width, height)
        item.amf_meta["unsplash_id"] = photo_id
        return item

    def map_many(self, raws: Iterable[Any]) -> Iterator[ImageRecord]:
        """Yield records for `raws`, skipping malformed items."""
        for _, item in self.map_indexed(raws):
            yield item

    def map_indexed(self, raws: Iterable[Any]) -> Iterator[tuple[int, ImageRecord]]:
        """Yield (index in `raws`, record) pairs, skipping malformed items."""
        for index, raw in enumerate(raws):
            try:
                yield index, self.map(raw)
            except (KeyError, TypeError, ValueError) as ex:
                logger.error("Photo mapping error: {} | photo={}", ex, raw)
                continue

    def build_attribution(self, user: Mapping[str, Any]) -> str:
        """Return the "Photo by ... on Unsplash" credit line as HTML."""
        profile = html.escape(str(user["links"]["html"]) + self._utm, quote=True)
        name = html.escape(str(user.get("name") or ""))
        home = html.escape(UNSPLASH_HOME + self._utm, quote=True)
        return f'Photo by <a href="{profile}">{name}</a> on <a href="{home}">Unsplash</a>'

    def build_sizes(self, raw_url: str, width: int, height: int) -> dict[str, ImageSize]:
        """Return the named size variants for a photo.

        `full` is the original size; `medium` is always cropped.
        """
        registered = dict(self._image_sizes)
        registered["full"] = SizeSpec(width, height, False)
        if "medium" in registered:
            medium = registered["medium"]
            registered["medium"] = SizeSpec(medium.width, medium.height, True)

        orientation = _orientation(width, height)
        sizes: dict[str, ImageSize] = {}
        for name, spec in registered.items():
            args = {
                "w": spec.width,
                "h": spec.height,
                "fit": "crop" if spec.crop else "max",
            }
            sizes[name] = ImageSize(
                width=spec.width,
                height=spec.height,
                orientation=orientation,
                url=add_query_args(raw_url, args),
            )
        return sizes
