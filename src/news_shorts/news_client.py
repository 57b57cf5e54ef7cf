"""NewsAPI client for fetching pages of top headlines."""

import httpx

from news_shorts.exceptions import NewsAPIError, RateLimitError
from news_shorts.models import Article

NEWS_API_URL = "https://newsapi.org/v2"
DEFAULT_SOURCE = "techcrunch"


class NewsClient:
    """Client for the NewsAPI ``top-headlines`` endpoint."""

    def __init__(
        self,
        api_key: str,
        source: str = DEFAULT_SOURCE,
        base_url: str = NEWS_API_URL,
    ) -> None:
        """Initialize client with API key and source filter.

        Args:
            api_key: The NewsAPI key for authentication.
            source: NewsAPI source id to restrict headlines to.
            base_url: Root of the NewsAPI v2 endpoints.

        Raises:
            ValueError: If api_key or source is empty or whitespace-only.
        """
        if not api_key or not api_key.strip():
            raise ValueError("API key must not be empty")
        if not source or not source.strip():
            raise ValueError("source must not be empty")
        self._api_key = api_key
        self.source = source
        self.endpoint = f"{base_url.rstrip('/')}/top-headlines"

    async def fetch_page(self, page: int) -> list[Article]:
        """Fetch one page of headlines.

        Args:
            page: 1-based page number.

        Returns:
            Every article on the page, in API order. No filtering is applied.

        Raises:
            ValueError: If page is below 1, or the body is not valid JSON
                or holds an invalid article record.
            NewsAPIError: If the API returns a non-200 status or the body
                has no ``articles`` array.
            RateLimitError: If the API returns a 429 rate limit response.
            httpx.HTTPError: On transport failures.
        """
        if page < 1:
            raise ValueError("page must be 1 or greater")

        params = {
            "sources": self.source,
            "page": page,
            "apiKey": self._api_key,
        }

        async with httpx.AsyncClient() as http:
            response = await http.get(self.endpoint, params=params)

        if response.status_code == 429:
            raise RateLimitError()

        if response.status_code != 200:
            raise NewsAPIError(
                f"NewsAPI error: {response.status_code}",
                status_code=response.status_code,
            )

        data = response.json()
        results = data.get("articles") if isinstance(data, dict) else None
        if not isinstance(results, list):
            raise NewsAPIError("NewsAPI response has no articles array", status_code=200)

        return [Article.from_raw(item) for item in results]
