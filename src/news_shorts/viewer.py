"""Sequential viewer: shows one article of the feed at a time."""

from collections.abc import Awaitable, Callable
from typing import Any

from news_shorts.feed_store import FeedState, FeedStore
from news_shorts.link_opener import LinkOpener, open_link
from news_shorts.models import Article

PositionListener = Callable[[int], Awaitable[Any]]


class SequentialViewer:
    """Tracks the visible position in a growing feed.

    The viewer follows the store through a subscription, so pages appended
    while an article is displayed never move the current position. Every
    position change is reported to ``on_position_changed``, which defaults
    to the store's prefetch check.
    """

    def __init__(
        self,
        store: FeedStore,
        opener: LinkOpener,
        on_position_changed: PositionListener | None = None,
    ) -> None:
        self._opener = opener
        self._on_position_changed = on_position_changed or store.on_viewer_position_changed
        self._items: tuple[Article, ...] = store.items
        self._index = 0
        self._unsubscribe = store.subscribe(self._on_state)

    def _on_state(self, state: FeedState) -> None:
        self._items = state.items

    def close(self) -> None:
        """Stop following the store."""
        self._unsubscribe()

    @property
    def index(self) -> int:
        return self._index

    @property
    def items(self) -> tuple[Article, ...]:
        return self._items

    @property
    def current(self) -> Article | None:
        if not self._items:
            return None
        return self._items[self._index]

    async def advance(self) -> bool:
        """Move to the next article if one is loaded."""
        if self._index + 1 >= len(self._items):
            return False
        await self._move_to(self._index + 1)
        return True

    async def back(self) -> bool:
        """Move to the previous article if there is one."""
        if self._index == 0:
            return False
        await self._move_to(self._index - 1)
        return True

    async def jump_to(self, index: int) -> None:
        """Move directly to ``index``.

        Raises:
            IndexError: If index is outside the loaded articles.
        """
        if not 0 <= index < len(self._items):
            raise IndexError(f"index {index} out of range for {len(self._items)} articles")
        if index != self._index:
            await self._move_to(index)

    async def _move_to(self, index: int) -> None:
        self._index = index
        await self._on_position_changed(index)

    def read_more(self) -> bool:
        """Open the current article's link.

        Returns:
            True if a link was opened. False when there is no article, the
            article has no link, or opening failed.
        """
        article = self.current
        if article is None or not article.link_url:
            return False
        return open_link(self._opener, article.link_url) is None
