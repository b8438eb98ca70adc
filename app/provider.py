"""Unsplash provider for the media library.

Mediates between the media library's queries and the Unsplash client,
returning normalized and ordering-repaired records.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from loguru import logger

from core.models import ImageRecord, MediaQuery, UnsplashQuery
from core.services.interfaces import IMediaProvider, IResize
from core.services.query_service import QueryService
from core.services.resize_service import build_resize_url
from core.services.stream_service import StreamService
from infrastructure.photo_mapper import PhotoMapper
from infrastructure.unsplash_client import UnsplashClient


class UnsplashProvider(IMediaProvider, IResize):
    """Media-library provider backed by the Unsplash API."""

    def __init__(
        self,
        client: UnsplashClient,
        mapper: PhotoMapper | None = None,
        query_service: QueryService | None = None,
        stream_service: StreamService | None = None,
    ) -> None:
        """Create a provider.

        Args:
            client: Client used for all API calls.
            mapper: Raw photo mapper (defaults to host default sizes).
            query_service: Query translator (defaults to `QueryService`).
            stream_service: Ordering repair (defaults to `StreamService`).
        """
        self._client = client
        self._mapper = mapper or PhotoMapper()
        self._queries = query_service or QueryService()
        self._stream = stream_service or StreamService()

    def get_id(self) -> str:
        return "unsplash"

    def get_name(self) -> str:
        return "Unsplash"

    @property
    def client(self) -> UnsplashClient:
        return self._client

    def query(self, args: Mapping[str, Any]) -> list[ImageRecord]:
        """Run a query given as host-style args."""
        return self.request(MediaQuery.from_args(args))

    def request(self, query: MediaQuery) -> list[ImageRecord]:
        """Return the records for `query`; an empty list when the fetch fails."""
        upstream = self._queries.translate(query)
        if upstream.is_search:
            return self._search_images(upstream)
        return self._request_images(upstream)

    def _request_images(self, upstream: UnsplashQuery) -> list[ImageRecord]:
        response = self._client.fetch_photos(upstream)
        if response is None:
            return []
        if not isinstance(response.data, list):
            logger.warning("Unexpected listing payload (status {})", response.status_code)
            return []
        records = self._mapper.map_many(response.data)
        items = self._stream.normalize_listing(records)
        logger.info("Listing page {}: {} photos", upstream.page, len(items))
        return items

    def _search_images(self, upstream: UnsplashQuery) -> list[ImageRecord]:
        response = self._client.search_photos(upstream)
        if response is None:
            return []
        data = response.data
        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, list):
            logger.warning("Unexpected search payload (status {})", response.status_code)
            return []
        indexed = list(self._mapper.map_indexed(results))
        items = self._stream.assign_search_dates(
            [record for _, record in indexed],
            upstream.page,
            upstream.per_page,
            positions=[index for index, _ in indexed],
        )
        logger.info(
            "Search {!r} page {}: {} of {} photos",
            upstream.query,
            upstream.page,
            len(items),
            data.get("total", len(items)),
        )
        return items

    def resize(
        self, attachment: ImageRecord, width: int, height: int, crop: bool | list[str] = False
    ) -> str:
        """Return the URL of `attachment` resized to `width` x `height`."""
        return build_resize_url(attachment.url, width, height, crop)

    def track_download(self, photo_id: str) -> None:
        """Report a download of `photo_id` without blocking."""
        self._client.track_download(photo_id)
