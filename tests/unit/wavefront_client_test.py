"""Tests for the Wavefront chart API adapter.

Covers:
- request shape (path, query parameters, bearer token)
- response parsing into raw series
- upstream query errors and transport failures
"""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from wavefront_promql_proxy.backend.wavefront import CHART_API_PATH, WavefrontQueryExecutor, normalize_address
from wavefront_promql_proxy.core.errors import TransportError
from wavefront_promql_proxy.core.models import RawSeries, TranslatedQuery

MOCK_CHART_RESPONSE: dict[str, Any] = {
    "name": "ts(cpu.load)",
    "query": "ts(cpu.load)",
    "granularity": 1,
    "stats": {"keys": 12, "points": 48},
    "timeseries": [
        {
            "label": "cpu.load",
            "host": "web-01",
            "tags": {"env": "prod", "dc": "eu-west"},
            "data": [[85.0, 0.25], [86.0, 0.5], [131.0, 0.75]],
        },
        {
            "label": "cpu.load",
            "host": "web-02",
            "data": [],
        },
    ],
}

_QUERY = TranslatedQuery(expression="ts(cpu.load)", start_ms=85000, end_ms=131000)


def _executor(handler: Any) -> WavefrontQueryExecutor:
    return WavefrontQueryExecutor("wavefront.example.com", "secret-token", transport=httpx.MockTransport(handler))


class TestNormalizeAddress:
    def test_bare_host_gets_https(self) -> None:
        assert normalize_address("example.wavefront.com") == "https://example.wavefront.com"

    def test_scheme_kept(self) -> None:
        assert normalize_address("http://localhost:8080/") == "http://localhost:8080"


class TestWavefrontQueryExecutor:
    @pytest.mark.asyncio
    async def test_sends_chart_request(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=MOCK_CHART_RESPONSE)

        executor = _executor(handler)
        await executor.execute(_QUERY)
        await executor.dispose()

        request = seen[0]
        assert request.method == "GET"
        assert request.url.host == "wavefront.example.com"
        assert request.url.path == CHART_API_PATH
        assert dict(request.url.params) == {"q": "ts(cpu.load)", "s": "85000", "e": "131000", "g": "s"}
        assert request.headers["authorization"] == "Bearer secret-token"

    @pytest.mark.asyncio
    async def test_parses_series(self) -> None:
        executor = _executor(lambda request: httpx.Response(200, json=MOCK_CHART_RESPONSE))
        result = await executor.execute(_QUERY)
        await executor.dispose()

        assert not result.failed
        assert result.series == (
            RawSeries(
                label="cpu.load",
                host="web-01",
                tags={"env": "prod", "dc": "eu-west"},
                samples=((85.0, 0.25), (86.0, 0.5), (131.0, 0.75)),
            ),
            RawSeries(label="cpu.load", host="web-02"),
        )

    @pytest.mark.asyncio
    async def test_query_error_reported_in_result(self) -> None:
        body = {"errorType": "QueryError", "errorMessage": "Query syntax error: Missing ')'"}
        executor = _executor(lambda request: httpx.Response(200, json=body))
        result = await executor.execute(_QUERY)
        await executor.dispose()

        assert result.failed
        assert result.error_message == "Query syntax error: Missing ')'"
        assert result.series == ()

    @pytest.mark.asyncio
    async def test_http_error_status_raises_transport_error(self) -> None:
        executor = _executor(lambda request: httpx.Response(401, text="unauthorized"))
        with pytest.raises(TransportError, match="HTTP 401: unauthorized"):
            await executor.execute(_QUERY)
        await executor.dispose()

    @pytest.mark.asyncio
    async def test_connection_failure_raises_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        executor = _executor(handler)
        with pytest.raises(TransportError, match="connection refused") as exc_info:
            await executor.execute(_QUERY)
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        await executor.dispose()

    @pytest.mark.asyncio
    async def test_non_json_body_raises_transport_error(self) -> None:
        executor = _executor(lambda request: httpx.Response(200, text="<html>maintenance</html>"))
        with pytest.raises(TransportError, match="unreadable response"):
            await executor.execute(_QUERY)
        await executor.dispose()

    @pytest.mark.asyncio
    async def test_malformed_points_raise_transport_error(self) -> None:
        body = json.dumps({"timeseries": [{"label": "x", "data": [["soon", 1.0]]}]})
        executor = _executor(lambda request: httpx.Response(200, text=body))
        with pytest.raises(TransportError):
            await executor.execute(_QUERY)
        await executor.dispose()
