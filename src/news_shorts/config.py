"""Configuration management via environment variables."""

import httpx
from pydantic import field_validator
from pydantic_settings import BaseSettings

from news_shorts.news_client import DEFAULT_SOURCE, NEWS_API_URL


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    news_api_key: str
    news_source: str = DEFAULT_SOURCE
    news_api_url: str = NEWS_API_URL

    @field_validator("news_api_key", "news_source", "news_api_url")
    @classmethod
    def must_not_be_empty(cls, v: str) -> str:
        """Reject empty or whitespace-only values."""
        if not v or not v.strip():
            raise ValueError("must not be empty or whitespace")
        return v

    @field_validator("news_api_url")
    @classmethod
    def must_be_http_url(cls, v: str) -> str:
        """Reject base URLs httpx cannot request."""
        try:
            url = httpx.URL(v)
        except httpx.InvalidURL as e:
            raise ValueError(f"invalid URL: {e}") from e
        if url.scheme not in ("http", "https") or not url.host:
            raise ValueError("must be an http or https URL")
        return v
