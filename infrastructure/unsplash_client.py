"""HTTP client for the Unsplash API.

Fetch failures (transport errors and non-JSON bodies) are logged and
reported as `None`; nothing is retried. Download tracking runs on a
background worker and never reports back to the caller.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Any
from urllib.parse import quote

from loguru import logger
import requests

from core.models import FetchResult, UnsplashQuery
from infrastructure.settings import ProviderConfig


class UnsplashClient:
    """Thin wrapper around `requests.Session` for the Unsplash endpoints."""

    def __init__(
        self,
        config: ProviderConfig,
        session: requests.Session | None = None,
        tracker_session: requests.Session | None = None,
    ) -> None:
        """Create a client.

        Args:
            config: Resolved provider configuration.
            session: Session for listing and search calls.
            tracker_session: Session owned by the download tracking worker.
        """
        self._config = config
        self._session = session or requests.Session()
        # Sessions are not shared across threads; the single worker owns this one
        self._tracker_session = tracker_session or requests.Session()
        self._tracker = ThreadPoolExecutor(max_workers=1, thread_name_prefix="unsplash-track")

    def _default_headers(self) -> dict[str, str]:
        # A missing key is sent as-is; the API rejects the request
        return {
            "Accept-Version": "v1",
            "Authorization": f"Client-ID {self._config.api_key or ''}",
        }

    def fetch(self, path: str, params: dict[str, Any] | None = None) -> FetchResult | None:
        """GET `path` (prefixed with /) and decode the JSON body."""
        return self._fetch_with(self._session, path, params)

    def _fetch_with(
        self, session: requests.Session, path: str, params: dict[str, Any] | None
    ) -> FetchResult | None:
        url = self._config.base_url + path
        try:
            response = session.get(
                url,
                params=params or {},
                headers=self._default_headers(),
                timeout=self._config.timeout,
            )
        except requests.RequestException as ex:
            logger.warning("Unsplash request failed for {}: {}", path, ex)
            return None

        try:
            data = response.json()
        except ValueError as ex:
            logger.warning(
                "Unsplash returned non-JSON body for {} (status {}): {}",
                path,
                response.status_code,
                ex,
            )
            return None

        if response.status_code >= 400:
            logger.warning("Unsplash returned status {} for {}", response.status_code, path)
        return FetchResult(
            headers=dict(response.headers),
            data=data,
            status_code=response.status_code,
        )

    def fetch_photos(self, query: UnsplashQuery) -> FetchResult | None:
        """Fetch one page of the photo listing."""
        return self.fetch("/photos", query.to_params())

    def search_photos(self, query: UnsplashQuery) -> FetchResult | None:
        """Fetch one page of search results."""
        return self.fetch("/search/photos", query.to_params())

    def track_download(self, photo_id: str) -> None:
        """Tell Unsplash that `photo_id` was downloaded, without waiting."""
        try:
            self._tracker.submit(self._send_download_event, photo_id)
        except RuntimeError as ex:
            # Executor already shut down
            logger.debug("Download tracking skipped for {}: {}", photo_id, ex)

    def _send_download_event(self, photo_id: str) -> None:
        try:
            path = f"/photos/{quote(photo_id, safe='')}/download"
            result = self._fetch_with(self._tracker_session, path, None)
        except Exception as ex:  # pylint: disable=broad-exception-caught
            logger.debug("Download tracking failed for {}: {}", photo_id, ex)
            return
        if result is None:
            logger.debug("Download tracking got no result for {}", photo_id)
        else:
            logger.info("Download tracked for {}", photo_id)

    def close(self) -> None:
        """Wait for pending download events and release both sessions."""
        self._tracker.shutdown(wait=True)
        self._tracker_session.close()
        self._session.close()
