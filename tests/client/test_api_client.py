import httpx
import pytest

from codemenu_mcp.client import ApiResult, CodeMenuClient, CodeMenuSettings, ErrorKind


def test_build_params_drops_empty_values():
    client = CodeMenuClient(CodeMenuSettings(api_key="secret"))

    params = client.build_params({"query": "fetch", "language": "", "tag": None, "group": "  "})

    assert params == {"key": "secret", "query": "fetch"}


def test_build_url_joins_base_and_path():
    client = CodeMenuClient(CodeMenuSettings(api_url="http://127.0.0.1:1300/v1/"))

    assert client.build_url("/tags/") == "http://127.0.0.1:1300/v1/tags/"


@pytest.mark.asyncio
async def test_successful_json_response(backend, client):
    backend.add("GET", "/v1/tags/", json_body=[{"id": "t1", "name": "web"}])

    result = await client.get("/tags/")

    assert isinstance(result, ApiResult)
    assert result.success is True
    assert result.status_code == 200
    assert result.body == [{"id": "t1", "name": "web"}]
    assert result.error_kind is None
    assert backend.query_params() == {"key": "secret"}


@pytest.mark.asyncio
async def test_non_success_status_is_classified_as_http_error(backend, client):
    backend.add("GET", "/v1/groups/", status=403, text="Invalid API key")

    result = await client.get("/groups/")

    assert result.success is False
    assert result.status_code == 403
    assert result.error_kind is ErrorKind.HTTP
    assert result.error == "Invalid API key"


@pytest.mark.asyncio
async def test_connection_failure_is_classified_as_network_error(backend, client):
    backend.refuse_connections = True

    result = await client.get("/snippets/")

    assert result.success is False
    assert result.status_code == 0
    assert result.error_kind is ErrorKind.NETWORK
    assert result.url == "http://codemenu.test/v1/snippets/"


@pytest.mark.asyncio
async def test_bearer_mode_sends_authorization_header(backend):
    settings = CodeMenuSettings(api_url="http://codemenu.test/v1", api_key="tok", auth_mode="bearer")
    backend.add("GET", "/v1/tags/", json_body=[])

    async with httpx.AsyncClient(transport=httpx.MockTransport(backend.handler)) as http_client:
        result = await CodeMenuClient(settings, http_client=http_client).get("/tags/")

    assert result.success is True
    request = backend.requests[0]
    assert request.headers["Authorization"] == "Bearer tok"
    assert "key" not in request.url.params


@pytest.mark.asyncio
async def test_post_sends_json_body(backend, client):
    backend.add("POST", "/v1/snippets/", status=201, json_body={"id": "new"})

    result = await client.post("/snippets/", {"title": "t"})

    assert result.success is True
    assert result.body == {"id": "new"}
    assert backend.json_body() == {"title": "t"}


@pytest.mark.asyncio
async def test_empty_body_decodes_to_none(backend, client):
    backend.add("DELETE", "/v1/snippets/abc/", status=204)

    result = await client.delete("/snippets/abc/")

    assert result.success is True
    assert result.body is None


@pytest.mark.asyncio
async def test_read_timeout_is_classified_as_network_error(backend, client):
    backend.time_out_reads = True

    result = await client.get("/tags/")

    assert result.success is False
    assert result.status_code == 0
    assert result.error_kind is ErrorKind.NETWORK
    assert result.error.startswith("Request timed out")


@pytest.mark.asyncio
async def test_unset_timeout_keeps_http_client_default(backend, client):
    backend.add("GET", "/v1/tags/", json_body=[])

    await client.get("/tags/")

    assert backend.requests[0].extensions["timeout"] == httpx.Timeout(5.0).as_dict()


@pytest.mark.asyncio
async def test_configured_timeout_is_applied(backend):
    settings = CodeMenuSettings(api_url="http://codemenu.test/v1", timeout=2.5)
    backend.add("GET", "/v1/tags/", json_body=[])

    async with httpx.AsyncClient(transport=httpx.MockTransport(backend.handler)) as http_client:
        await CodeMenuClient(settings, http_client=http_client).get("/tags/")

    assert backend.requests[0].extensions["timeout"]["read"] == 2.5
