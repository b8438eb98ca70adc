"""Translation of media-library queries into Unsplash API queries."""

from __future__ import annotations

from loguru import logger

from core.models import MAX_PER_PAGE, MediaQuery, UnsplashQuery

# Upstream search only supports relevance ordering
SEARCH_ORDER = "relevant"


class QueryService:
    """Maps `MediaQuery` objects to `UnsplashQuery` objects."""

    def translate(self, query: MediaQuery) -> UnsplashQuery:
        """Return the upstream query for `query`.

        Unsupported sort fields are ignored and the default order is kept.
        A non-blank search term forces relevance ordering.
        """
        result = UnsplashQuery()

        if query.posts_per_page is not None:
            result.per_page = min(max(query.posts_per_page, 1), MAX_PER_PAGE)
        if query.paged is not None:
            result.page = max(query.paged, 1)

        if query.orderby:
            direction = (query.order or "desc").lower()
            if query.orderby == "date":
                result.order_by = "latest" if direction == "desc" else "oldest"
            else:
                logger.debug("Ignoring unsupported orderby: {}", query.orderby)

        term = query.search_term
        if term is not None:
            result.query = term
            result.order_by = SEARCH_ORDER

        return result
