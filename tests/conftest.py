"""Shared fixtures for the test suite."""

import json

import httpx
import pytest

from lingo.clients.glotpress_client import GlotPressClient

BASE_URL = "https://glotpress.test/api/projects"

MOCK_STRINGS = [
    {
        "original_id": "1001",
        "singular": "Hello World",
        "plural": None,
        "context": None,
        "references": ["src/greeting.php:42"],
        "priority": "normal",
        "project_id": "2905",
    },
    {
        "original_id": "1002",
        "singular": "Save Changes",
        "plural": None,
        "context": "button label",
        "references": ["src/settings.php:100"],
        "priority": "high",
        "project_id": "2905",
    },
    {
        "original_id": "1003",
        "singular": "Are you sure?",
        "plural": None,
        "context": "confirmation dialog",
        "references": ["src/modal.php:25"],
        "priority": "normal",
        "project_id": "2905",
    },
    {
        "original_id": "1004",
        "singular": "%d item",
        "plural": "%d items",
        "context": "item count",
        "references": ["src/list.php:88"],
        "priority": "normal",
        "project_id": "2905",
    },
    {
        "original_id": "1005",
        "singular": "Loading...",
        "plural": None,
        "context": None,
        "references": ["src/loader.php:12"],
        "priority": "normal",
        "project_id": "2905",
    },
]


def make_glotpress_client(rows=None, status_code=200, wrap_rows=False, stats=None):
    """Build a GlotPressClient backed by an in-memory transport."""
    rows = MOCK_STRINGS if rows is None else rows
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if status_code != 200:
            return httpx.Response(status_code, json={"error": "nope"})
        if request.url.path.endswith("/default/"):
            body = {"rows": rows} if wrap_rows else rows
            return httpx.Response(200, content=json.dumps(body))
        return httpx.Response(200, json=stats or {})

    client = GlotPressClient(
        base_url=BASE_URL,
        client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )
    client.requests = requests
    return client


@pytest.fixture
def mock_strings():
    return [dict(row) for row in MOCK_STRINGS]
