"""Tests for the HTTP adapters of the store and scheduler contracts."""

import json
import uuid

import httpx
import pytest

from threadqueue.composer.segment import Segment
from threadqueue.infrastructure.api_client import ApiClient, ApiClientError, ProxyManager
from threadqueue.infrastructure.remote_store import RemotePostStore, RemoteScheduler
from threadqueue.schemas.post_schema import ErrorKind, PostCreate, PostUpdate, RawEvent
from threadqueue.services.composition import CompositionOrchestrator

POST_ID = str(uuid.uuid4())


def _post(raw_events, is_draft=False):
    return {"id": POST_ID, "account_ref": "acct", "raw_events": raw_events, "is_draft": is_draft}


class RecordingApi:
    """MockTransport handler that records requests and serves a tiny posts API."""

    def __init__(self, schedule_status=200):
        self.requests = []
        self.schedule_status = schedule_status

    def __call__(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else None
        self.requests.append((request.method, request.url.path, body))
        if request.method == "POST" and request.url.path == "/posts/":
            return httpx.Response(201, json={"post": _post(body["raw_events"], body["is_draft"])})
        if request.method == "PUT":
            return httpx.Response(200, json={"post": _post(body.get("raw_events", []), body.get("is_draft", False))})
        if request.method == "GET" and request.url.path == "/posts/":
            return httpx.Response(200, json={"posts": [_post([{"content": "a"}])]})
        if request.method == "GET":
            return httpx.Response(200, json={"post": _post([{"content": "a"}, {"content": "b"}])})
        if request.url.path.endswith("/schedule"):
            if self.schedule_status >= 400:
                return httpx.Response(self.schedule_status, text="scheduler offline")
            return httpx.Response(200, json={"status": "pending"})
        return httpx.Response(404)


def _client(handler):
    return ApiClient(base_url="http://posts.test/", transport=httpx.MockTransport(handler), proxy_manager=ProxyManager())


class TestApiClient:
    @pytest.mark.asyncio
    async def test_error_status_raises(self):
        client = _client(lambda request: httpx.Response(503, text="busy"))
        with pytest.raises(ApiClientError) as excinfo:
            await client.get("/posts")
        assert excinfo.value.status_code == 503

    @pytest.mark.asyncio
    async def test_transport_error_raises(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(ApiClientError) as excinfo:
            await _client(handler).post("/posts/", json={})
        assert excinfo.value.status_code is None

    @pytest.mark.asyncio
    async def test_empty_body_returns_empty_dict(self):
        assert await _client(lambda request: httpx.Response(204)).post("/x") == {}

    def test_proxy_manager_without_proxies(self):
        assert ProxyManager().pick() is None
        assert ProxyManager(["http://p:1"]).pick() == "http://p:1"


class TestRemoteStore:
    @pytest.mark.asyncio
    async def test_contract_calls(self):
        api = RecordingApi()
        store = RemotePostStore(_client(api))

        created = await store.create(PostCreate(account_ref="acct", raw_events=[RawEvent(content="x")], is_draft=True))
        updated = await store.update(POST_ID, PostUpdate(is_draft=False))
        fetched = await store.get(POST_ID)
        listed = await store.list("acct")

        assert str(created.id) == POST_ID
        assert created.is_draft is True
        assert updated.is_draft is False
        assert [e.content for e in fetched.raw_events] == ["a", "b"]
        assert len(listed) == 1
        # unset fields are not sent on update
        assert api.requests[1] == ("PUT", f"/posts/{POST_ID}", {"is_draft": False})

    @pytest.mark.asyncio
    async def test_orchestrator_over_http(self):
        api = RecordingApi()
        client = _client(api)
        orchestrator = CompositionOrchestrator(RemotePostStore(client), RemoteScheduler(client))

        result = await orchestrator.schedule_thread(None, "acct", [Segment(id="1", content="hi"), Segment(id="2", content=" ")])

        assert result.post_id == POST_ID
        assert [(m, p) for m, p, _ in api.requests] == [("POST", "/posts/"), ("POST", f"/posts/{POST_ID}/schedule")]
        assert api.requests[0][2]["raw_events"] == [{"content": "hi"}]
        assert api.requests[1][2] == {}

    @pytest.mark.asyncio
    async def test_remote_schedule_failure_is_schedule_error(self):
        api = RecordingApi(schedule_status=500)
        client = _client(api)
        orchestrator = CompositionOrchestrator(RemotePostStore(client), RemoteScheduler(client))

        result = await orchestrator.schedule_thread(None, "acct", [Segment(id="1", content="hi")])

        assert result.kind == ErrorKind.SCHEDULE
        assert result.post_id == POST_ID
        assert "scheduler offline" in result.message
        assert sum(1 for m, p, _ in api.requests if p == "/posts/") == 1
