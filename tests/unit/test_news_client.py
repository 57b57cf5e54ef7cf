"""Unit tests for the NewsAPI client.

These tests use respx to mock HTTP responses, ensuring we never hit
the real NewsAPI during unit tests.
"""

import httpx
import pytest
import respx

from news_shorts.exceptions import NewsAPIError, RateLimitError
from news_shorts.models import Article
from news_shorts.news_client import NewsClient

# Endpoint for the default base URL
TOP_HEADLINES_URL = "https://newsapi.org/v2/top-headlines"


# --- Fixtures ---


@pytest.fixture
def api_key() -> str:
    """Provide a test API key."""
    return "test-api-key-12345"


@pytest.fixture
def client(api_key: str) -> NewsClient:
    """Create a NewsClient instance for testing."""
    return NewsClient(api_key=api_key)


@pytest.fixture
def sample_api_response(raw_article: dict) -> dict:
    """Sample successful response from NewsAPI."""
    return {
        "status": "ok",
        "totalResults": 2,
        "articles": [
            raw_article,
            {
                "title": "No image on this one",
                "url": "https://techcrunch.com/no-image/",
                "urlToImage": None,
                "content": "Text only",
            },
        ],
    }


# --- Client Instantiation Tests ---


def test_client_requires_api_key():
    """Client without API key should refuse to instantiate."""
    with pytest.raises(ValueError, match="API key"):
        NewsClient(api_key="")

    with pytest.raises(ValueError, match="API key"):
        NewsClient(api_key="   ")


def test_client_requires_source():
    with pytest.raises(ValueError, match="source"):
        NewsClient(api_key="key", source="")


def test_client_builds_endpoint_from_base_url():
    """Trailing slashes on the base URL should not double up."""
    client = NewsClient(api_key="key", base_url="https://example.test/v2/")

    assert client.endpoint == "https://example.test/v2/top-headlines"


# --- Request Tests ---


@pytest.mark.asyncio
@respx.mock
async def test_fetch_page_sends_source_page_and_key(client: NewsClient, api_key: str):
    """Source, page and API key should all be query parameters."""
    respx.get(TOP_HEADLINES_URL).mock(
        return_value=httpx.Response(200, json={"status": "ok", "articles": []})
    )

    await client.fetch_page(3)

    assert respx.calls.last is not None
    request = respx.calls.last.request
    assert request.method == "GET"
    assert request.url.params["sources"] == "techcrunch"
    assert request.url.params["page"] == "3"
    assert request.url.params["apiKey"] == api_key
    # Key must not leak into the path
    assert api_key not in request.url.path


@pytest.mark.asyncio
async def test_fetch_page_rejects_page_below_one(client: NewsClient):
    with pytest.raises(ValueError, match="page"):
        await client.fetch_page(0)


# --- Successful Fetch Tests ---


@pytest.mark.asyncio
@respx.mock
async def test_fetch_page_returns_all_articles_unfiltered(
    client: NewsClient, sample_api_response: dict
):
    """Filtering is the feed's job; the client returns every record."""
    respx.get(TOP_HEADLINES_URL).mock(
        return_value=httpx.Response(200, json=sample_api_response)
    )

    results = await client.fetch_page(1)

    assert len(results) == 2
    assert all(isinstance(article, Article) for article in results)
    assert results[0].title == "Startup raises $20M to build better batteries"
    assert results[1].image_url is None


@pytest.mark.asyncio
@respx.mock
async def test_fetch_page_handles_empty_page(client: NewsClient):
    """A page past the end should return an empty list, not error."""
    respx.get(TOP_HEADLINES_URL).mock(
        return_value=httpx.Response(200, json={"status": "ok", "articles": []})
    )

    assert await client.fetch_page(9) == []


# --- Error Handling Tests ---


@pytest.mark.asyncio
@respx.mock
async def test_fetch_page_handles_api_error(client: NewsClient):
    """API 500 should raise NewsAPIError."""
    respx.get(TOP_HEADLINES_URL).mock(
        return_value=httpx.Response(500, json={"status": "error"})
    )

    with pytest.raises(NewsAPIError) as exc_info:
        await client.fetch_page(1)

    assert exc_info.value.status_code == 500


@pytest.mark.asyncio
@respx.mock
async def test_fetch_page_treats_other_success_codes_as_errors(client: NewsClient):
    """Only 200 counts as success."""
    respx.get(TOP_HEADLINES_URL).mock(return_value=httpx.Response(204))

    with pytest.raises(NewsAPIError) as exc_info:
        await client.fetch_page(1)

    assert exc_info.value.status_code == 204


@pytest.mark.asyncio
@respx.mock
async def test_fetch_page_handles_rate_limit(client: NewsClient):
    """API 429 should raise RateLimitError."""
    respx.get(TOP_HEADLINES_URL).mock(
        return_value=httpx.Response(429, json={"status": "error", "code": "rateLimited"})
    )

    with pytest.raises(RateLimitError):
        await client.fetch_page(1)


@pytest.mark.asyncio
@respx.mock
async def test_fetch_page_rejects_invalid_json(client: NewsClient):
    respx.get(TOP_HEADLINES_URL).mock(
        return_value=httpx.Response(200, content=b"<html>oops</html>")
    )

    with pytest.raises(ValueError):
        await client.fetch_page(1)


@pytest.mark.asyncio
@respx.mock
async def test_fetch_page_rejects_body_without_articles(client: NewsClient):
    respx.get(TOP_HEADLINES_URL).mock(
        return_value=httpx.Response(200, json={"status": "ok", "articles": None})
    )

    with pytest.raises(NewsAPIError, match="articles"):
        await client.fetch_page(1)


@pytest.mark.asyncio
@respx.mock
async def test_fetch_page_propagates_transport_errors(client: NewsClient):
    respx.get(TOP_HEADLINES_URL).mock(side_effect=httpx.ConnectError("no route to host"))

    with pytest.raises(httpx.ConnectError):
        await client.fetch_page(1)
