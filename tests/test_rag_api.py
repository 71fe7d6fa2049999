from __future__ import annotations

import asyncio
import json
from typing import Callable, List

import httpx

from crisis_assistant.rag_api import CONNECTION_ERROR, RATE_LIMITED_ERROR, UNAVAILABLE_ERROR, RagApiClient

BASE_URL = "http://backend.test/api/v1"

REQUEST = {
    "message": "What happened?",
    "context": {
        "articleTitle": "Floods",
        "articleText": "Text",
        "articleSummary": "Summary",
        "classification": {
            "cause": "disaster_relief",
            "geoName": "Valencia",
            "severity": "high",
            "identified_needs": [],
            "affectedGroups": [],
        },
        "matchedCharities": [],
    },
    "history": [],
    "enableWebSearch": False,
}


def _client(handler: Callable[[httpx.Request], httpx.Response], max_retries: int = 2) -> RagApiClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return RagApiClient(BASE_URL, max_retries=max_retries, backoff_seconds=0, http_client=http_client)


def _send(client: RagApiClient):
    async def run():
        try:
            return await client.send_message(REQUEST)
        finally:
            await client.aclose()

    return asyncio.run(run())


def test_success_posts_request_body() -> None:
    seen: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"message": "It flooded.", "suggestions": ["Why?"]})

    result = _send(_client(handler))

    assert result == {"success": True, "data": {"message": "It flooded.", "suggestions": ["Why?"]}}
    assert seen[0].method == "POST"
    assert str(seen[0].url) == f"{BASE_URL}/chat/message"
    assert json.loads(seen[0].content)["message"] == "What happened?"


def test_rate_limit_is_not_retried() -> None:
    calls: List[int] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(1)
        return httpx.Response(429, json={"error": "slow down"})

    result = _send(_client(handler))

    assert result == {"success": False, "error": RATE_LIMITED_ERROR}
    assert len(calls) == 1


def test_unavailable_is_retried_until_exhausted() -> None:
    calls: List[int] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(1)
        return httpx.Response(503, json={"error": "down"})

    result = _send(_client(handler, max_retries=2))

    assert result == {"success": False, "error": UNAVAILABLE_ERROR}
    assert len(calls) == 3


def test_retry_recovers_after_transient_failure() -> None:
    responses = [httpx.Response(500, json={"error": "Internal hiccup"}), httpx.Response(200, json={"message": "ok"})]

    def handler(request: httpx.Request) -> httpx.Response:
        return responses.pop(0)

    result = _send(_client(handler))

    assert result["success"] is True
    assert result["data"]["message"] == "ok"


def test_validation_error_is_not_retried() -> None:
    calls: List[int] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(1)
        return httpx.Response(400, json={"error": "Request validation failed"})

    result = _send(_client(handler))

    assert result == {"success": False, "error": "Request validation failed"}
    assert len(calls) == 1


def test_error_without_body_message_reports_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, json={})

    result = _send(_client(handler, max_retries=0))

    assert result == {"success": False, "error": "Request failed with status 502"}


def test_transport_error_reports_connection_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    result = _send(_client(handler, max_retries=1))

    assert result == {"success": False, "error": CONNECTION_ERROR}


def test_non_json_body_is_a_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>oops</html>")

    result = _send(_client(handler, max_retries=0))

    assert result["success"] is False
    assert result["error"].startswith("Invalid response from chat service")


def test_check_health() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/v1/chat/health"
        return httpx.Response(200, json={"status": "ok"})

    client = _client(handler)

    async def run():
        try:
            return await client.check_health()
        finally:
            await client.aclose()

    assert asyncio.run(run()) is True
