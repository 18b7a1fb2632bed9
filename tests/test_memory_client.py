"""Unit tests for the semantic memory HTTP client."""

import asyncio
import json
import time

import httpx
import pytest

from orion_templates.config.template_config import TemplateEngineConfig
from orion_templates.models.template_models import SearchStatus
from orion_templates.retrieval.memory_client import SemanticMemoryClient

BASE_URL = "http://memory.test"


def make_client(handler) -> SemanticMemoryClient:
    """Create a client backed by an in-process mock transport."""
    config = TemplateEngineConfig(memory_api_url=BASE_URL, search_threshold=0.6)
    return SemanticMemoryClient(config=config, transport=httpx.MockTransport(handler))


class TrickleStream(httpx.AsyncByteStream):
    """Response body delivered a few bytes at a time."""

    def __init__(self, chunks: int = 10, interval: float = 0.2):
        self.chunks = chunks
        self.interval = interval

    async def __aiter__(self):
        yield b'{"results": ['
        for _ in range(self.chunks):
            await asyncio.sleep(self.interval)
            yield b" "
        yield b"]}"


class SlowTransport(httpx.AsyncBaseTransport):
    """Transport that stalls before answering."""

    def __init__(self, delay: float):
        self.delay = delay

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(self.delay)
        return httpx.Response(200, json={"results": []})


@pytest.mark.asyncio
class TestSearch:
    """Test memory search calls."""

    async def test_search_success(self):
        """Test request shape and parsed results."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(
                200,
                json={
                    "results": [
                        {"id": "mem-1", "content": "Hero layout", "similarity": 0.91},
                        {"id": 2, "content": "Card grid"},
                    ]
                },
            )

        client = make_client(handler)
        results = await client.search("hero section layout", 2)
        await client.close()

        assert seen["method"] == "POST"
        assert seen["url"] == f"{BASE_URL}/api/memory/search"
        assert seen["body"] == {
            "query": "hero section layout",
            "limit": 2,
            "threshold": 0.6,
        }
        assert [r.id for r in results] == ["mem-1", "2"]
        assert results[0].similarity == 0.91
        assert results[1].similarity is None

    async def test_malformed_rows_skipped(self):
        """Test rows that fail validation are dropped individually."""

        def handler(request):
            return httpx.Response(
                200,
                json={
                    "results": [
                        {"id": 1, "content": "kept", "similarity": 0.9},
                        "junk",
                        {"id": 3, "content": "bad score", "similarity": 1.7},
                        {"id": 4, "content": None},
                    ]
                },
            )

        client = make_client(handler)
        outcome = await client.search_outcome("q", 5)
        await client.close()

        assert outcome.succeeded
        assert [r.id for r in outcome.results] == ["1", "4"]
        assert outcome.results[1].content == ""

    async def test_missing_results_is_empty_success(self):
        """Test a body without results is an empty success."""
        client = make_client(lambda request: httpx.Response(200, json={}))
        outcome = await client.search_outcome("q", 5)
        await client.close()

        assert outcome.status == SearchStatus.SUCCESS
        assert outcome.results == []

    async def test_server_error(self):
        """Test non-2xx responses become a failed outcome."""
        client = make_client(lambda request: httpx.Response(500, text="boom"))
        outcome = await client.search_outcome("q", 5)
        await client.close()

        assert outcome.status == SearchStatus.FAILED
        assert outcome.results == []
        assert outcome.error == "HTTP 500"

    async def test_timeout(self):
        """Test timeouts become a failed outcome."""

        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        client = make_client(handler)
        outcome = await client.search_outcome("q", 5)
        await client.close()

        assert outcome.status == SearchStatus.FAILED
        assert "timeout" in outcome.error

    async def test_stalled_server_bounded_by_timeout(self):
        """Test a call that never answers gives up at the search timeout."""
        client = SemanticMemoryClient(
            config=TemplateEngineConfig(
                memory_api_url=BASE_URL, search_timeout_seconds=0.3
            ),
            transport=SlowTransport(delay=5.0),
        )

        started = time.monotonic()
        outcome = await client.search_outcome("q", 5)
        elapsed = time.monotonic() - started
        await client.close()

        assert outcome.status == SearchStatus.FAILED
        assert outcome.error == "timeout after 0.3s"
        assert elapsed < 1.5

    async def test_trickling_body_bounded_by_timeout(self):
        """Test a body that keeps arriving slowly is cut off at the timeout."""

        def handler(request):
            return httpx.Response(200, stream=TrickleStream(chunks=10, interval=0.2))

        client = SemanticMemoryClient(
            config=TemplateEngineConfig(
                memory_api_url=BASE_URL, search_timeout_seconds=0.3
            ),
            transport=httpx.MockTransport(handler),
        )

        started = time.monotonic()
        outcome = await client.search_outcome("q", 5)
        elapsed = time.monotonic() - started
        await client.close()

        assert outcome.status == SearchStatus.FAILED
        assert "timeout" in outcome.error
        assert elapsed < 1.5

    async def test_connection_error(self):
        """Test transport errors collapse to an empty list."""

        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        client = make_client(handler)
        results = await client.search("q", 5)
        await client.close()

        assert results == []

    async def test_invalid_json(self):
        """Test unparseable bodies become a failed outcome."""
        client = make_client(lambda request: httpx.Response(200, text="not json"))
        outcome = await client.search_outcome("q", 5)
        await client.close()

        assert outcome.status == SearchStatus.FAILED
        assert "invalid JSON" in outcome.error

    async def test_unexpected_payload(self):
        """Test a non-object body becomes a failed outcome."""
        client = make_client(lambda request: httpx.Response(200, json=[1, 2]))
        outcome = await client.search_outcome("q", 5)
        await client.close()

        assert outcome.status == SearchStatus.FAILED


@pytest.mark.asyncio
class TestHealthAndLifecycle:
    """Test health probe and client ownership."""

    async def test_health_check_healthy(self):
        """Test a reachable service reports vector count."""

        def handler(request):
            assert request.url.path == "/health"
            return httpx.Response(200, json={"status": "ok", "vectors_stored": 42})

        client = make_client(handler)
        health = await client.health_check()
        await client.close()

        assert health == {"status": "healthy", "connected": True, "vectorsStored": 42}

    async def test_health_check_degraded(self):
        """Test an unreachable service reports degraded."""

        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        client = make_client(handler)
        health = await client.health_check()
        await client.close()

        assert health["status"] == "degraded"
        assert health["connected"] is False
        assert health["vectorsStored"] == 0
        assert "error" in health

    async def test_context_manager_closes_owned_client(self):
        """Test the owned httpx client is closed on exit."""
        client = make_client(lambda request: httpx.Response(200, json={}))
        async with client:
            pass

        assert client.client.is_closed

    async def test_injected_client_left_open(self):
        """Test a caller-supplied httpx client is not closed."""
        http_client = httpx.AsyncClient(
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json={}))
        )
        client = SemanticMemoryClient(
            config=TemplateEngineConfig(memory_api_url=BASE_URL),
            client=http_client,
        )
        await client.close()

        assert not http_client.is_closed
        await http_client.aclose()

    async def test_client_and_transport_rejected(self):
        """Test a client and a transport cannot both be supplied."""
        http_client = httpx.AsyncClient()
        with pytest.raises(ValueError):
            SemanticMemoryClient(
                config=TemplateEngineConfig(memory_api_url=BASE_URL),
                client=http_client,
                transport=SlowTransport(delay=0.0),
            )
        await http_client.aclose()
