"""HTTP client for the ORION semantic memory service."""

import asyncio
import logging
from typing import Dict, Any, List, Optional
import httpx
from pydantic import ValidationError

from .base import BaseRetrievalClient, RetrievalError
from ..config.template_config import TemplateEngineConfig
from ..models.template_models import RetrievalResult, SearchOutcome, SearchStatus

logger = logging.getLogger(__name__)


class SemanticMemoryClient(BaseRetrievalClient):
    """
    Semantic memory search over HTTP.

    PATTERN: HTTP-based API communication with async httpx
    CRITICAL: Every failure is absorbed per call; siblings are unaffected
    GOTCHA: Each call carries its own timeout, independent of other calls
    """

    SEARCH_PATH = "/api/memory/search"
    HEALTH_PATH = "/health"

    def __init__(
        self,
        config: Optional[TemplateEngineConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize memory client.

        Args:
            config: Engine configuration (loaded from env if None)
            client: Preconfigured httpx client to use instead of a new one
            transport: Custom httpx transport for a newly created client

        Raises:
            ValueError: If both client and transport are given
        """
        if client is not None and transport is not None:
            raise ValueError("Pass either client or transport, not both")

        self.config = config or TemplateEngineConfig()
        self.base_url = self.config.memory_api_url.rstrip("/")
        self.timeout = self.config.search_timeout_seconds
        self.threshold = self.config.search_threshold
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            timeout=self.timeout,
            transport=transport,
        )
        self.logger = logging.getLogger(__name__)

    async def search_outcome(self, query: str, limit: int) -> SearchOutcome:
        """
        Search memory and tag the outcome.

        CRITICAL: Never raises; errors become a FAILED outcome

        Args:
            query: Search query text
            limit: Maximum results requested

        Returns:
            Tagged search outcome
        """
        try:
            results = await self._post_search(query, limit)
        except RetrievalError as e:
            self.logger.warning(f"Memory search failed for query '{query}': {e}")
            return SearchOutcome(query=query, status=SearchStatus.FAILED, error=str(e))
        except Exception as e:
            self.logger.warning(
                f"Unexpected memory search error for query '{query}': {e}"
            )
            return SearchOutcome(query=query, status=SearchStatus.FAILED, error=str(e))

        self.logger.debug(f"Memory search '{query}' returned {len(results)} results")
        return SearchOutcome(query=query, status=SearchStatus.SUCCESS, results=results)

    async def _post_search(self, query: str, limit: int) -> List[RetrievalResult]:
        """
        POST the search request and parse the response.

        Raises:
            RetrievalError: On timeout, transport error, non-2xx or bad payload
        """
        payload = {
            "query": query,
            "limit": limit,
            "threshold": self.threshold,
        }

        try:
            data = await asyncio.wait_for(
                self._request_json(payload), timeout=self.timeout
            )
        except asyncio.TimeoutError as e:
            raise RetrievalError(f"timeout after {self.timeout}s") from e
        except httpx.TimeoutException as e:
            raise RetrievalError(f"timeout after {self.timeout}s") from e
        except httpx.HTTPStatusError as e:
            raise RetrievalError(f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise RetrievalError(f"transport error: {e}") from e
        except ValueError as e:
            raise RetrievalError(f"invalid JSON body: {e}") from e

        return self._parse_results(data)

    async def _request_json(self, payload: Dict[str, Any]) -> Any:
        """
        Send one search request and decode its body.

        GOTCHA: httpx timeouts are per phase; a trickling body only stops
        at the overall deadline applied by the caller
        """
        response = await self.client.post(
            f"{self.base_url}{self.SEARCH_PATH}",
            json=payload,
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()

    def _parse_results(self, data: Any) -> List[RetrievalResult]:
        """Convert a response body into results, skipping malformed rows."""
        if not isinstance(data, dict):
            raise RetrievalError(f"unexpected payload type {type(data).__name__}")

        rows = data.get("results") or []
        if not isinstance(rows, list):
            raise RetrievalError("'results' is not a list")

        results: List[RetrievalResult] = []
        for row in rows:
            if not isinstance(row, dict):
                continue
            try:
                results.append(RetrievalResult.model_validate(row))
            except ValidationError as e:
                self.logger.debug(f"Skipping malformed search result: {e}")
        return results

    async def health_check(self) -> Dict[str, Any]:
        """
        Probe the memory service.

        Returns:
            Health report; status is "healthy" or "degraded", never raises
        """
        try:
            response = await self.client.get(
                f"{self.base_url}{self.HEALTH_PATH}",
                timeout=self.config.health_timeout_seconds,
            )
            response.raise_for_status()
            data = response.json()
            vectors = data.get("vectors_stored", 0) if isinstance(data, dict) else 0
            return {
                "status": "healthy",
                "connected": True,
                "vectorsStored": vectors or 0,
            }
        except Exception as e:
            self.logger.warning(f"Memory service health check failed: {e}")
            return {
                "status": "degraded",
                "connected": False,
                "vectorsStored": 0,
                "error": str(e),
            }

    async def close(self):
        """Close HTTP client if this instance created it."""
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> "SemanticMemoryClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
