"""Paginated feed store.

Owns the list of articles shown by the viewer, the cursor of the next page
to request and the in-flight flag that keeps at most one page request
outstanding. All state changes are published to subscribers as immutable
``FeedState`` snapshots.
"""

from collections.abc import Callable
from typing import Any

import httpx
import structlog
from pydantic import BaseModel, ConfigDict

from news_shorts.exceptions import FetchFailed, NewsAPIError
from news_shorts.models import Article
from news_shorts.news_client import NewsClient

logger = structlog.get_logger()

# Errors that count as a failed page fetch. ValueError covers JSON decode
# errors and invalid article records.
FETCH_ERRORS = (NewsAPIError, httpx.HTTPError, httpx.InvalidURL, ValueError)

StateListener = Callable[["FeedState"], None]


class FeedState(BaseModel):
    """Snapshot of the feed at one point in time."""

    model_config = ConfigDict(frozen=True)

    items: tuple[Article, ...] = ()
    next_page: int = 1
    fetch_in_flight: bool = False
    last_error: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def is_loading(self) -> bool:
        return self.fetch_in_flight


class FeedStore:
    """Fetches pages of articles and appends them to a growing feed."""

    def __init__(
        self,
        client: NewsClient | Any,
        on_error: Callable[[FetchFailed], None] | None = None,
    ) -> None:
        """Initialize an empty feed.

        Args:
            client: NewsClient instance (or mock for testing).
            on_error: Optional callback invoked with each FetchFailed.
        """
        self._client = client
        self._on_error = on_error
        self._items: list[Article] = []
        self._next_page = 1
        self._fetch_in_flight = False
        self._last_error: str | None = None
        self._listeners: list[StateListener] = []

    @property
    def items(self) -> tuple[Article, ...]:
        return tuple(self._items)

    @property
    def next_page(self) -> int:
        return self._next_page

    @property
    def fetch_in_flight(self) -> bool:
        return self._fetch_in_flight

    @property
    def state(self) -> FeedState:
        return FeedState(
            items=tuple(self._items),
            next_page=self._next_page,
            fetch_in_flight=self._fetch_in_flight,
            last_error=self._last_error,
        )

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a listener for state changes.

        The listener is called synchronously with a new snapshot after every
        change. Returns a function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        # A failing listener must not leave the in-flight flag set.
        snapshot = self.state
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("state_listener_failed", listener=repr(listener))

    async def fetch_next_page(self) -> None:
        """Fetch the next page and append its displayable articles.

        Does nothing while another fetch is in flight. A failed fetch is
        reported through the log and ``on_error``; it leaves the items and the
        page cursor untouched, so the next call requests the same page again.
        """
        if self._fetch_in_flight:
            logger.debug("fetch_skipped_in_flight", page=self._next_page)
            return

        page = self._next_page
        self._fetch_in_flight = True
        self._notify()

        failure: FetchFailed | None = None
        try:
            articles = await self._client.fetch_page(page)
        except FETCH_ERRORS as e:
            failure = FetchFailed(f"Failed to fetch page {page}: {e}", page=page, original_error=e)
            self._last_error = str(failure)
        else:
            kept = [article for article in articles if article.is_displayable]
            self._items.extend(kept)
            self._next_page += 1
            self._last_error = None
            logger.info("page_fetched", page=page, received=len(articles), kept=len(kept))
        finally:
            self._fetch_in_flight = False
            self._notify()

        if failure is not None:
            logger.error("page_fetch_failed", page=page, error=str(failure.original_error))
            if self._on_error is not None:
                self._on_error(failure)

    async def on_viewer_position_changed(self, index: int) -> bool:
        """Prefetch the next page when the viewer reaches the second-to-last item.

        Returns:
            True if the position triggered a fetch attempt.
        """
        if index != len(self._items) - 2:
            return False

        logger.debug("prefetch_triggered", index=index, loaded=len(self._items))
        await self.fetch_next_page()
        return True
