"""Tests for the analysis service client."""

import asyncio
import json

import httpx
import pytest
import respx
from httpx import Response

from conftest import make_record
from siterank.client import AnalysisClient
from siterank.config import ViewerConfig
from siterank.errors import (
    AnalysisInProgressError,
    DecodeError,
    HttpStatusError,
    NetworkError,
)

SERVICE = "http://analyzer.test"
ENDPOINT = f"{SERVICE}/analyze"


def _client(**kwargs) -> AnalysisClient:
    return AnalysisClient(ViewerConfig(service_url=SERVICE, **kwargs))


@pytest.mark.asyncio
@respx.mock
async def test_analyze_posts_all_urls_in_one_request(sample_payload):
    route = respx.post(ENDPOINT).mock(return_value=Response(200, json=sample_payload))

    results = await _client().analyze(["a.com", "b.com"])

    assert route.call_count == 1
    request = route.calls.last.request
    assert json.loads(request.content) == {"urls": ["a.com", "b.com"]}
    assert request.headers["content-type"] == "application/json"
    assert [r.url for r in results] == ["a.com", "b.com"]


@pytest.mark.asyncio
@respx.mock
async def test_results_keep_response_order():
    payload = [make_record("b.com", 1, 1, 1), make_record("a.com", 2, 2, 2)]
    respx.post(ENDPOINT).mock(return_value=Response(200, json=payload))

    results = await _client().analyze(["a.com", "b.com"])

    assert [r.url for r in results] == ["b.com", "a.com"]


@pytest.mark.asyncio
@respx.mock
async def test_trailing_slash_in_service_url():
    route = respx.post(ENDPOINT).mock(return_value=Response(200, json=[]))
    client = AnalysisClient(ViewerConfig(service_url=f"{SERVICE}/"))

    assert await client.analyze(["a.com"]) == []
    assert route.called


@pytest.mark.asyncio
@respx.mock
async def test_http_500_raises_status_error():
    respx.post(ENDPOINT).mock(return_value=Response(500, json=[make_record("a.com", 1, 1, 1)]))

    with pytest.raises(HttpStatusError) as exc_info:
        await _client().analyze(["a.com"])

    assert exc_info.value.status_code == 500
    assert "500" in str(exc_info.value)


@pytest.mark.asyncio
@respx.mock
async def test_connection_failure_raises_network_error():
    respx.post(ENDPOINT).mock(side_effect=httpx.ConnectError("connection refused"))

    with pytest.raises(NetworkError, match="connection refused"):
        await _client().analyze(["a.com"])


@pytest.mark.asyncio
@respx.mock
async def test_timeout_raises_network_error():
    respx.post(ENDPOINT).mock(side_effect=httpx.ReadTimeout("too slow"))

    with pytest.raises(NetworkError, match="timed out"):
        await _client(timeout=0.5).analyze(["a.com"])


@pytest.mark.asyncio
@respx.mock
async def test_invalid_json_raises_decode_error():
    respx.post(ENDPOINT).mock(return_value=Response(200, content=b"<html>oops</html>"))

    with pytest.raises(DecodeError):
        await _client().analyze(["a.com"])


@pytest.mark.asyncio
@respx.mock
async def test_non_array_body_raises_decode_error():
    respx.post(ENDPOINT).mock(return_value=Response(200, json={"error": "nope"}))

    with pytest.raises(DecodeError):
        await _client().analyze(["a.com"])


@pytest.mark.asyncio
@respx.mock
async def test_outcome_wraps_success(sample_payload):
    respx.post(ENDPOINT).mock(return_value=Response(200, json=sample_payload))

    outcome = await _client().analyze_outcome(["a.com", "b.com"])

    assert outcome.ok
    assert outcome.error is None
    assert len(outcome.results) == 2


@pytest.mark.asyncio
@respx.mock
async def test_outcome_wraps_failure_without_partial_results():
    respx.post(ENDPOINT).mock(
        return_value=Response(200, json=[make_record("a.com", 1, 1, 1), 42])
    )

    outcome = await _client().analyze_outcome(["a.com", "b.com"])

    assert not outcome.ok
    assert isinstance(outcome.error, DecodeError)
    assert outcome.results == []


class _SlowHttpClient:
    """Stands in for httpx.AsyncClient; answers once released."""

    def __init__(self):
        self.release = asyncio.Event()
        self.requests = []

    async def post(self, url, json=None):
        self.requests.append(json)
        await self.release.wait()
        return Response(200, json=[], request=httpx.Request("POST", url))


@pytest.mark.asyncio
async def test_second_call_while_pending_is_rejected():
    http_client = _SlowHttpClient()
    release = http_client.release
    client = AnalysisClient(ViewerConfig(service_url=SERVICE), http_client=http_client)

    first = asyncio.create_task(client.analyze(["a.com"]))
    await asyncio.sleep(0)
    assert client.pending

    with pytest.raises(AnalysisInProgressError):
        await client.analyze(["b.com"])

    release.set()
    assert await first == []
    assert not client.pending
    assert http_client.requests == [{"urls": ["a.com"]}]


@pytest.mark.asyncio
@respx.mock
async def test_injected_http_client_is_used(sample_payload):
    route = respx.post(ENDPOINT).mock(return_value=Response(200, json=sample_payload))

    async with httpx.AsyncClient() as http_client:
        client = AnalysisClient(ViewerConfig(service_url=SERVICE), http_client=http_client)
        results = await client.analyze(["a.com", "b.com"])

    assert route.called
    assert len(results) == 2
