"""Tests for the Notion API client using httpx.MockTransport."""
import json
import httpx
import pytest
from unittest.mock import AsyncMock
from template_deployer.core.errors import NotionAPIError, NotionErrorKind
from template_deployer.core.notion import NotionClient, classify_status


def make_client(handler, sleep=None, **kwargs) -> NotionClient:
    return NotionClient(
        token="secret_test",
        api_base="https://notion.test/v1",
        transport=httpx.MockTransport(handler),
        sleep=sleep or AsyncMock(),
        **kwargs,
    )


def test_classify_status():
    assert classify_status(401) == NotionErrorKind.UNAUTHORIZED
    assert classify_status(403) == NotionErrorKind.UNAUTHORIZED
    assert classify_status(404) == NotionErrorKind.NOT_FOUND
    assert classify_status(429) == NotionErrorKind.RATE_LIMITED
    assert classify_status(400) == NotionErrorKind.INVALID_REQUEST
    assert classify_status(502) == NotionErrorKind.INTERNAL


@pytest.mark.asyncio
async def test_create_database_request_shape():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["headers"] = request.headers
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"id": "db-123"})

    client = make_client(handler)
    database_id = await client.create_database("page-1", "Acme - Projects", {"Name": {"title": {}}})

    assert database_id == "db-123"
    assert seen["method"] == "POST"
    assert seen["url"] == "https://notion.test/v1/databases"
    assert seen["headers"]["Authorization"] == "Bearer secret_test"
    assert seen["headers"]["Notion-Version"] == "2022-06-28"
    assert seen["body"]["parent"] == {"type": "page_id", "page_id": "page-1"}
    assert seen["body"]["title"][0]["text"]["content"] == "Acme - Projects"


@pytest.mark.asyncio
async def test_create_page_at_workspace_root():
    bodies = []

    def handler(request):
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json={"id": "page-1"})

    client = make_client(handler)
    assert await client.create_page("Acme Construction Management") == "page-1"
    assert bodies[0]["parent"] == {"type": "workspace", "workspace": True}
    assert "children" not in bodies[0]


@pytest.mark.asyncio
async def test_search_returns_ids():
    def handler(request):
        body = json.loads(request.content)
        assert body["filter"] == {"property": "object", "value": "page"}
        return httpx.Response(200, json={"results": [{"id": "a"}, {"id": "b"}]})

    client = make_client(handler)
    assert await client.search("Acme", object_type="page") == ["a", "b"]


@pytest.mark.asyncio
async def test_rate_limited_requests_back_off_and_retry():
    calls = []

    def handler(request):
        calls.append(request)
        if len(calls) < 3:
            return httpx.Response(429, json={"message": "slow down"})
        return httpx.Response(200, json={"id": "user-1"})

    sleep = AsyncMock()
    client = make_client(handler, sleep=sleep, retry_delay=0.5, retry_attempts=3)
    user = await client.identity_probe()

    assert user == {"id": "user-1"}
    assert len(calls) == 3
    assert [c.args[0] for c in sleep.await_args_list] == [0.5, 1.0]


@pytest.mark.asyncio
async def test_retry_after_header_is_honoured():
    calls = []

    def handler(request):
        calls.append(request)
        if len(calls) == 1:
            return httpx.Response(429, headers={"Retry-After": "7"}, json={"message": "later"})
        return httpx.Response(200, json={"id": "x"})

    sleep = AsyncMock()
    client = make_client(handler, sleep=sleep)
    await client.retrieve_page("x")
    sleep.assert_awaited_once_with(7.0)


@pytest.mark.asyncio
async def test_rate_limit_gives_up_after_retry_attempts():
    def handler(request):
        return httpx.Response(429, json={"message": "slow down"})

    client = make_client(handler, retry_attempts=2)
    with pytest.raises(NotionAPIError) as exc:
        await client.identity_probe()
    assert exc.value.kind == NotionErrorKind.RATE_LIMITED
    assert exc.value.status_code == 429


@pytest.mark.asyncio
async def test_other_errors_are_not_retried():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(401, json={"message": "API token is invalid."})

    client = make_client(handler)
    with pytest.raises(NotionAPIError) as exc:
        await client.identity_probe()
    assert exc.value.kind == NotionErrorKind.UNAUTHORIZED
    assert "API token is invalid." in str(exc.value)
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_timeouts_are_classified():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    client = make_client(handler)
    with pytest.raises(NotionAPIError) as exc:
        await client.identity_probe()
    assert exc.value.kind == NotionErrorKind.TIMEOUT


@pytest.mark.asyncio
async def test_transport_errors_are_classified():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(handler)
    with pytest.raises(NotionAPIError) as exc:
        await client.identity_probe()
    assert exc.value.kind == NotionErrorKind.TRANSPORT
