import json

import httpx
import pytest
import pytest_asyncio

from codemenu_mcp.client import CodeMenuClient, CodeMenuSettings


class FakeCodeMenuBackend:
    """Serves canned responses keyed by (method, path) and records every request."""

    def __init__(self):
        self.requests = []
        self.routes = {}
        self.refuse_connections = False
        self.time_out_reads = False

    def add(self, method, path, *, status=200, json_body=None, text=None):
        self.routes[(method, path)] = (status, json_body, text)

    def handler(self, request):
        self.requests.append(request)
        if self.refuse_connections:
            raise httpx.ConnectError("[Errno 111] Connection refused", request=request)
        if self.time_out_reads:
            raise httpx.ReadTimeout("timed out", request=request)

        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, text="Not Found")
        status, json_body, text = route
        if json_body is not None:
            return httpx.Response(status, json=json_body)
        return httpx.Response(status, text=text or "")

    def query_params(self, index=-1):
        return dict(self.requests[index].url.params)

    def json_body(self, index=-1):
        return json.loads(self.requests[index].content)


SNIPPETS = [
    {
        "id": "3f1c2a9e-0001",
        "title": "Fetch JSON",
        "description": "GET a URL and decode JSON",
        "language": "javascript",
        "abbreviation": "fj",
        "code": "const r = await fetch(url);\nreturn r.json();",
        "tags": ["tag-web"],
        "group": "group-js",
    },
    {
        "id": "3f1c2a9e-0002",
        "title": "Empty placeholder",
        "language": "python",
        "code": "",
        "tags": [],
        "group": None,
    },
]


@pytest.fixture
def snippets():
    return [dict(item) for item in SNIPPETS]


@pytest.fixture
def backend():
    return FakeCodeMenuBackend()


@pytest.fixture
def settings():
    return CodeMenuSettings(api_url="http://codemenu.test/v1", api_key="secret")


@pytest_asyncio.fixture
async def http_client(backend):
    async with httpx.AsyncClient(transport=httpx.MockTransport(backend.handler)) as mock_client:
        yield mock_client


@pytest.fixture
def client(http_client, settings):
    return CodeMenuClient(settings, http_client=http_client)
