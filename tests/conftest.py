"""Pytest fixtures for content-press tests."""

from unittest.mock import MagicMock

import pytest

from content_press.clients import ContentClient
from schemas.content import ContentSource

BASE_URL = "https://content.example.com"


def make_response(url, data=None, status_code=200):
    """Create a mock httpx response carrying a decoded JSON body."""
    response = MagicMock()
    response.status_code = status_code
    response.is_success = 200 <= status_code < 300
    response.url = url
    response.json.return_value = data
    return response


@pytest.fixture
def sample_records():
    """Full item records keyed by slug, as published by the CMS."""
    return {
        "hello-world": {
            "slug": "hello-world",
            "name": "Hello World",
            "summary": "The first post on the new site.",
            "body": "<p>Welcome to the <strong>new</strong> site.</p>",
        },
        "second-post": {
            "slug": "second-post",
            "name": "Second Post",
            "summary": "More news & updates.",
            "body": "<p>Second post body.</p><ul><li>One</li><li>Two</li></ul>",
        },
        "third-post": {
            "slug": "third-post",
            "name": "Third Post",
            "summary": "",
            "body": "<h2>Heading</h2><p>Third post body.</p>",
            "author": "Editorial Team",
        },
    }


@pytest.fixture
def sample_index(sample_records):
    """Collection index listing the sample records in display order."""
    return {
        "total_items": len(sample_records),
        "items": [
            {"slug": r["slug"], "name": r["name"], "summary": r["summary"]}
            for r in sample_records.values()
        ],
    }


@pytest.fixture
def sample_categories():
    """Category documents keyed by slug."""
    return {
        "news": {"slug": "news", "name": "News"},
        "guides": {"slug": "guides", "name": "Guides"},
    }


@pytest.fixture
def documents(sample_index, sample_records, sample_categories):
    """Every document in the content source, keyed by relative path."""
    docs = {"blogs/_index.json": sample_index}
    for slug, record in sample_records.items():
        docs[f"blogs/{slug}.json"] = record
    docs["categories/_index.json"] = list(sample_categories)
    for slug, category in sample_categories.items():
        docs[f"categories/{slug}.json"] = category
    return docs


@pytest.fixture
def routed_http():
    """Factory for a mock httpx.Client that serves documents by URL.

    Paths missing from ``documents`` answer 404; ``statuses`` forces a status
    code for specific paths.
    """

    def _make(documents, statuses=None):
        statuses = statuses or {}

        def request(method, url, **kwargs):
            path = url.removeprefix(f"{BASE_URL}/")
            if path in statuses:
                return make_response(url, None, statuses[path])
            if path not in documents:
                return make_response(url, None, 404)
            return make_response(url, documents[path])

        http_client = MagicMock()
        http_client.request.side_effect = request
        return http_client

    return _make


@pytest.fixture
def content_source():
    return ContentSource(base_url=BASE_URL)


@pytest.fixture
def content_client(content_source, routed_http, documents):
    """ContentClient backed by the sample documents."""
    client = ContentClient(content_source)
    client._client = routed_http(documents)
    return client
