"""Shared fixtures for News Shorts tests."""

import pytest
import structlog


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo any logging configuration a test (e.g. the CLI) applied."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def raw_article() -> dict:
    """A complete article record as returned by NewsAPI."""
    return {
        "source": {"id": "techcrunch", "name": "TechCrunch"},
        "author": "Jane Doe",
        "title": "Startup raises $20M to build better batteries",
        "description": "The round was led by a climate fund.",
        "url": "https://techcrunch.com/2024/05/01/battery-startup/",
        "urlToImage": "https://techcrunch.com/wp-content/uploads/battery.jpg",
        "publishedAt": "2024-05-01T12:00:00Z",
        "content": "A battery startup said on Wednesday it raised $20 million… [+2100 chars]",
    }


@pytest.fixture
def make_raw():
    """Factory for displayable raw article records numbered ``n``."""

    def _make_raw(n: int, **overrides) -> dict:
        record = {
            "title": f"Headline {n}",
            "url": f"https://techcrunch.com/story-{n}/",
            "urlToImage": f"https://techcrunch.com/img-{n}.jpg",
            "content": f"Body of story {n}",
        }
        record.update(overrides)
        return record

    return _make_raw
