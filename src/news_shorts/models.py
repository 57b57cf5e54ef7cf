"""Pydantic models for NewsAPI article data."""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict

DEFAULT_TITLE = "No Title"
DEFAULT_CONTENT = "No content available."


class Article(BaseModel):
    """A single news card shown in the feed."""

    model_config = ConfigDict(frozen=True)

    title: str
    image_url: str | None = None
    content: str
    link_url: str = ""

    @classmethod
    def from_raw(cls, record: Mapping[str, Any]) -> "Article":
        """Build an Article from one entry of the API's ``articles`` array.

        Missing or null ``title``, ``content`` and ``url`` fall back to
        defaults. ``urlToImage`` is taken verbatim so that articles without
        an image can be filtered out of the feed.

        Raises:
            ValueError: If the record is not an object or a field has the
                wrong type (pydantic.ValidationError is a ValueError).
        """
        if not isinstance(record, Mapping):
            raise ValueError(f"article record must be an object, got {type(record).__name__}")

        title = record.get("title")
        content = record.get("content")
        url = record.get("url")

        return cls(
            title=title if title is not None else DEFAULT_TITLE,
            image_url=record.get("urlToImage"),
            content=content if content is not None else DEFAULT_CONTENT,
            link_url=url if url is not None else "",
        )

    @property
    def is_displayable(self) -> bool:
        """True when the article has both body text and an image."""
        return bool(self.content) and self.image_url is not None
