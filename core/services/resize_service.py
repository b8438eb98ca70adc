"""Resized image URL construction for Unsplash (imgix) image URLs."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

DEFAULT_CROP = "faces,focalpoint"


def add_query_args(url: str, args: Mapping[str, Any]) -> str:
    """Return `url` with `args` added to its query string.

    Existing parameters keep their position; ones named in `args` are
    replaced in place. New parameters are appended in `args` order.
    """
    parts = urlsplit(url)
    params = dict(parse_qsl(parts.query, keep_blank_values=True))
    for key, value in args.items():
        params[key] = "" if value is None else str(value)
    return urlunsplit(parts._replace(query=urlencode(params)))


def build_resize_url(
    base_url: str, width: int, height: int, crop: bool | list[str] = False
) -> str:
    """Return `base_url` resized to `width` x `height`.

    `crop` may be a flag or a list of crop anchors. "center" is dropped from
    anchor lists since imgix centres by default.
    """
    args: dict[str, Any] = {
        "w": width,
        "h": height,
        "fit": "crop" if crop else "clip",
        "crop": DEFAULT_CROP,
    }
    if isinstance(crop, (list, tuple)):
        args["crop"] = ",".join(str(anchor) for anchor in crop if anchor != "center")
    return add_query_args(base_url, args)
