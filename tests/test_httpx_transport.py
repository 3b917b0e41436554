"""
Unit tests for HttpxTransport (HTTP faked with httpx.MockTransport)
"""

import json

import httpx
import pytest

from conftest import AGILE_URL
from jira_sprint.adapters.outbound.httpx_transport import HttpxTransport, clean_query
from jira_sprint.domain.errors import JiraTransportError
from jira_sprint.domain.sprint import HttpMethod, RequestDescriptor


def _transport(handler) -> HttpxTransport:
    return HttpxTransport(user="user", password="secret", transport=httpx.MockTransport(handler))


class CallbackRecorder:
    def __init__(self):
        self.calls = []

    def __call__(self, error, result):
        self.calls.append((error, result))


class TestCleanQuery:

    def test_drops_none_and_formats_values(self):
        cleaned = clean_query({
            "filter": None,
            "startAt": 0,
            "validateQuery": True,
            "fields": ["summary", "status"],
            "jql": "project = X",
        })

        assert cleaned == {
            "startAt": "0",
            "validateQuery": "true",
            "fields": "summary,status",
            "jql": "project = X",
        }


class TestRequestShape:

    @pytest.mark.asyncio
    async def test_get_sends_only_set_query_values_and_no_body(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["params"] = dict(request.url.params)
            seen["content"] = request.content
            seen["auth"] = request.headers.get("Authorization", "")
            return httpx.Response(200, json={"id": 42})

        descriptor = RequestDescriptor(
            url=f"{AGILE_URL}/sprint/42",
            method=HttpMethod.GET,
            query={"filter": None, "startAt": None, "maxResults": 50},
        )

        result = await _transport(handler).execute(descriptor)

        assert result == {"id": 42}
        assert seen["method"] == "GET"
        assert seen["params"] == {"maxResults": "50"}
        assert seen["content"] == b""
        assert seen["auth"].startswith("Basic ")

    @pytest.mark.asyncio
    async def test_put_sends_json_body(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = json.loads(request.content)
            seen["content_type"] = request.headers["Content-Type"]
            return httpx.Response(200, json={"id": 331, "name": "Sprint 5"})

        descriptor = RequestDescriptor(
            url=f"{AGILE_URL}/sprint/331",
            method=HttpMethod.PUT,
            body={"name": "Sprint 5"},
        )

        await _transport(handler).execute(descriptor)

        assert seen["body"] == {"name": "Sprint 5"}
        assert seen["content_type"] == "application/json"

    @pytest.mark.asyncio
    async def test_post_with_empty_body_still_sends_json_object(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = json.loads(request.content)
            return httpx.Response(201, json={"id": 1})

        descriptor = RequestDescriptor(url=f"{AGILE_URL}/sprint", method=HttpMethod.POST)
        await _transport(handler).execute(descriptor)

        assert seen["body"] == {}

    @pytest.mark.asyncio
    async def test_follows_redirects(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path.endswith("/sprint/1"):
                return httpx.Response(302, headers={"Location": f"{AGILE_URL}/sprint/2"})
            return httpx.Response(200, json={"id": 2})

        descriptor = RequestDescriptor(url=f"{AGILE_URL}/sprint/1", method=HttpMethod.GET)

        assert await _transport(handler).execute(descriptor) == {"id": 2}

    @pytest.mark.asyncio
    async def test_no_content_returns_none(self):
        descriptor = RequestDescriptor(
            url=f"{AGILE_URL}/sprint/7/issue",
            method=HttpMethod.POST,
            body={"issues": ["ISS-1"]},
        )

        result = await _transport(lambda request: httpx.Response(204)).execute(descriptor)

        assert result is None


class TestErrors:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [400, 401, 403, 404, 500])
    async def test_http_error_raises_transport_error(self, status):
        descriptor = RequestDescriptor(url=f"{AGILE_URL}/sprint/9", method=HttpMethod.GET)
        transport = _transport(lambda request: httpx.Response(status, text="boom"))

        with pytest.raises(JiraTransportError) as exc_info:
            await transport.execute(descriptor)

        assert exc_info.value.status_code == status
        assert exc_info.value.response_text == "boom"

    @pytest.mark.asyncio
    async def test_network_error_raises_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        descriptor = RequestDescriptor(url=f"{AGILE_URL}/sprint/9", method=HttpMethod.GET)

        with pytest.raises(JiraTransportError) as exc_info:
            await _transport(handler).execute(descriptor)

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_invalid_json_raises_transport_error(self):
        descriptor = RequestDescriptor(url=f"{AGILE_URL}/sprint/9", method=HttpMethod.GET)
        transport = _transport(lambda request: httpx.Response(200, text="<html>"))

        with pytest.raises(JiraTransportError):
            await transport.execute(descriptor)


class TestCallbackDispatch:

    @pytest.mark.asyncio
    async def test_success_reaches_callback_and_return_value(self):
        callback = CallbackRecorder()
        descriptor = RequestDescriptor(url=f"{AGILE_URL}/sprint/42", method=HttpMethod.GET)
        transport = _transport(lambda request: httpx.Response(200, json={"id": 42}))

        result = await transport.execute(descriptor, callback)

        assert callback.calls == [(None, {"id": 42})]
        assert result == {"id": 42}

    @pytest.mark.asyncio
    async def test_failure_reaches_callback_and_raise(self):
        callback = CallbackRecorder()
        descriptor = RequestDescriptor(url=f"{AGILE_URL}/sprint/42", method=HttpMethod.DELETE)
        transport = _transport(lambda request: httpx.Response(403))

        with pytest.raises(JiraTransportError) as exc_info:
            await transport.execute(descriptor, callback)

        assert len(callback.calls) == 1
        error, result = callback.calls[0]
        assert error is exc_info.value
        assert result is None

    @pytest.mark.asyncio
    async def test_async_callback_is_awaited(self):
        calls = []

        async def callback(error, result):
            calls.append((error, result))

        descriptor = RequestDescriptor(url=f"{AGILE_URL}/sprint/1", method=HttpMethod.GET)
        transport = _transport(lambda request: httpx.Response(200, json={"id": 1}))

        await transport.execute(descriptor, callback)

        assert calls == [(None, {"id": 1})]

    @pytest.mark.asyncio
    async def test_request_performed_once_with_callback(self):
        hits = []

        def handler(request: httpx.Request) -> httpx.Response:
            hits.append(request)
            return httpx.Response(200, json={})

        descriptor = RequestDescriptor(url=f"{AGILE_URL}/sprint/1", method=HttpMethod.GET)
        await _transport(handler).execute(descriptor, CallbackRecorder())

        assert len(hits) == 1

    @pytest.mark.asyncio
    async def test_raising_callback_does_not_change_success_result(self):
        calls = []

        def callback(error, result):
            calls.append((error, result))
            raise RuntimeError("callback failed")

        descriptor = RequestDescriptor(url=f"{AGILE_URL}/sprint/1", method=HttpMethod.GET)
        transport = _transport(lambda request: httpx.Response(200, json={"id": 1}))

        result = await transport.execute(descriptor, callback)

        assert result == {"id": 1}
        assert calls == [(None, {"id": 1})]

    @pytest.mark.asyncio
    async def test_raising_callback_keeps_original_transport_error(self):
        calls = []

        async def callback(error, result):
            calls.append((error, result))
            raise ValueError("callback failed")

        descriptor = RequestDescriptor(url=f"{AGILE_URL}/sprint/1", method=HttpMethod.GET)
        transport = _transport(lambda request: httpx.Response(404, text="Not Found"))

        with pytest.raises(JiraTransportError) as exc_info:
            await transport.execute(descriptor, callback)

        assert exc_info.value.status_code == 404
        assert calls == [(exc_info.value, None)]
