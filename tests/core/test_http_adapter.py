"""Tests for the shared HTTP client."""

import asyncio

import httpx
import pytest

from leadscope.core.exceptions import MalformedPayloadError, TransportError
from leadscope.core.http_adapter import HttpClient, HttpConfig, create_http_client

from support import json_response, mock_http_client


class TestHttpConfig:
    def test_defaults(self):
        config = HttpConfig()
        assert config.timeout == 30.0
        assert config.user_agent.startswith("leadscope/")

    @pytest.mark.parametrize(
        "kwargs",
        [{"timeout": 0}, {"max_redirects": -1}, {"concurrent_requests": 0}],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            HttpConfig(**kwargs)

    def test_factory(self):
        client = create_http_client(timeout=5.0, concurrent_requests=2)
        assert client.http_config.timeout == 5.0
        assert client.http_config.concurrent_requests == 2


class TestHttpClient:
    @pytest.mark.asyncio
    async def test_get_json_sends_params_and_headers(self):
        seen = {}

        def handler(request):
            seen["params"] = dict(request.url.params)
            seen["accept"] = request.headers["accept"]
            return json_response({"data": [1, 2]})

        async with mock_http_client(handler) as client:
            payload = await client.get_json("https://api.example.test/x", provider="test", params={"limit": 5})

        assert payload == {"data": [1, 2]}
        assert seen == {"params": {"limit": "5"}, "accept": "application/json"}

    @pytest.mark.asyncio
    async def test_error_status_raises_transport_error(self):
        async with mock_http_client(lambda request: json_response({}, status_code=503)) as client:
            with pytest.raises(TransportError) as exc_info:
                await client.get_json("https://api.example.test/x", provider="fdic")

        assert exc_info.value.status_code == 503
        assert exc_info.value.provider_name == "fdic"
        assert exc_info.value.error_code == "NETWORK_ERROR"

    @pytest.mark.asyncio
    async def test_network_failure_raises_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with mock_http_client(handler) as client:
            with pytest.raises(TransportError) as exc_info:
                await client.get_json("https://api.example.test/x", provider="ncua")

        assert exc_info.value.status_code is None
        assert exc_info.value.details["error_type"] == "ConnectError"

    @pytest.mark.asyncio
    async def test_invalid_json_raises_malformed_payload(self):
        async with mock_http_client(lambda request: httpx.Response(200, text="<html>")) as client:
            with pytest.raises(MalformedPayloadError):
                await client.get_json("https://api.example.test/x", provider="proxy")

    @pytest.mark.asyncio
    async def test_put_json_returns_status(self):
        async with mock_http_client(lambda request: httpx.Response(204)) as client:
            status = await client.put_json("https://api.example.test/o/1", {"notes": "x"}, provider="remote")
        assert status == 204

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self):
        client = HttpClient(transport=httpx.MockTransport(lambda request: json_response({})))
        await client.get_json("https://api.example.test/", provider="test")
        await client.close()
        await client.close()
        assert client._client is None

    def test_contended_requests_across_event_loops(self):
        async def handler(request):
            await asyncio.sleep(0)
            return json_response({"ok": True})

        client = HttpClient(HttpConfig(concurrent_requests=1), transport=httpx.MockTransport(handler))

        async def burst():
            try:
                return await asyncio.gather(
                    *(client.get_json("https://api.example.test/", provider="test") for _ in range(3))
                )
            finally:
                await client.close()

        assert asyncio.run(burst()) == [{"ok": True}] * 3
        assert asyncio.run(burst()) == [{"ok": True}] * 3
