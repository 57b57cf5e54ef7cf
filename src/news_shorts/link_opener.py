"""Opening article links outside the app."""

import webbrowser
from typing import Protocol

import structlog

from news_shorts.exceptions import OpenFailed

logger = structlog.get_logger()


class LinkOpener(Protocol):
    """Capability to show a URL to the user.

    Implementations raise OpenFailed when the URL could not be opened.
    """

    def open(self, url: str) -> None: ...


class BrowserLinkOpener:
    """Opens links in the host's web browser."""

    def __init__(self, new_tab: bool = True) -> None:
        self._new = 2 if new_tab else 0

    def open(self, url: str) -> None:
        try:
            opened = webbrowser.open(url, new=self._new)
        except webbrowser.Error as e:
            raise OpenFailed(url, original_error=e) from e

        if not opened:
            raise OpenFailed(url)


def open_link(opener: LinkOpener, url: str) -> OpenFailed | None:
    """Open ``url`` with ``opener``.

    An empty URL is a no-op. Failures are logged and returned rather than
    raised.
    """
    if not url:
        return None

    try:
        opener.open(url)
    except OpenFailed as e:
        logger.warning("link_open_failed", url=url, error=str(e))
        return e

    return None
