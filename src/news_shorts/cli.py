"""Command-line interface for News Shorts."""

import asyncio
import sys
import textwrap

import click
import structlog

from news_shorts.config import Config
from news_shorts.feed_store import FeedStore
from news_shorts.link_opener import BrowserLinkOpener, LinkOpener
from news_shorts.logging_config import configure_logging
from news_shorts.models import Article
from news_shorts.news_client import NewsClient
from news_shorts.viewer import SequentialViewer

logger = structlog.get_logger()

NEXT_KEYS = ("n", " ", "\r", "\n", "j")
BACK_KEYS = ("p", "k")
OPEN_KEYS = ("o",)
QUIT_KEYS = ("q", "")

LOADING_MESSAGE = "Loading news..."
EMPTY_MESSAGE = "No news found. Please try again later."
HELP_LINE = "[n] next  [p] previous  [o] read full story  [q] quit"


def render_card(article: Article, position: int, total: int, width: int = 72) -> str:
    """Format one article as a terminal card."""
    lines = [
        "=" * width,
        f"{position}/{total}",
        click.style(article.title, bold=True),
        f"Image: {article.image_url}",
        "",
        textwrap.fill(article.content, width=width),
        "-" * width,
    ]
    if article.link_url:
        lines.append("Press o to read the full story →")
    lines.append(HELP_LINE)
    return "\n".join(lines)


async def browse(client: NewsClient, opener: LinkOpener) -> int:
    """Run the interactive card loop until the user quits.

    Returns:
        The number of articles loaded into the feed.
    """
    store = FeedStore(client)
    prefetches: set[asyncio.Task] = set()

    def prefetch_done(task: asyncio.Task) -> None:
        prefetches.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("prefetch_failed", error=repr(task.exception()))

    async def prefetch_in_background(index: int) -> None:
        task = asyncio.create_task(store.on_viewer_position_changed(index))
        prefetches.add(task)
        task.add_done_callback(prefetch_done)

    viewer = SequentialViewer(store, opener, on_position_changed=prefetch_in_background)

    click.echo(LOADING_MESSAGE)
    await store.fetch_next_page()

    try:
        while True:
            if store.state.is_empty:
                click.echo(EMPTY_MESSAGE)
                break

            article = viewer.current
            click.echo(render_card(article, viewer.index + 1, len(viewer.items)))
            try:
                key = await asyncio.to_thread(click.getchar)
            except (EOFError, KeyboardInterrupt):
                break

            if key in QUIT_KEYS:
                break
            if key in NEXT_KEYS:
                if not await viewer.advance():
                    if store.state.is_loading:
                        click.echo(LOADING_MESSAGE)
                    else:
                        click.echo("No more news right now.")
            elif key in BACK_KEYS:
                await viewer.back()
            elif key in OPEN_KEYS:
                if article.link_url and not viewer.read_more():
                    click.echo(f"Could not open {article.link_url}", err=True)
    finally:
        viewer.close()
        if prefetches:
            # Failures are logged by prefetch_done.
            await asyncio.gather(*prefetches, return_exceptions=True)

    return len(store.items)


@click.command()
@click.option("--source", help="NewsAPI source id (overrides NEWS_SOURCE).")
@click.option("--verbose", "-v", is_flag=True, help="Log fetch activity to stderr.")
def main(source: str | None, verbose: bool) -> None:
    """Browse top headlines one full-screen card at a time.

    Requires NEWS_API_KEY in the environment.
    """
    configure_logging(verbose)

    try:
        config = Config(news_source=source) if source else Config()
    except Exception as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    try:
        client = NewsClient(
            api_key=config.news_api_key,
            source=config.news_source,
            base_url=config.news_api_url,
        )
        loaded = asyncio.run(browse(client, BrowserLinkOpener()))

    except Exception as e:
        click.echo(f"Unexpected error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Loaded {loaded} articles from {config.news_source}")


if __name__ == "__main__":
    main()
