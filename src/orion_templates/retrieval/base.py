"""Base retrieval client abstraction."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from ..models.template_models import RetrievalResult, SearchOutcome


class BaseRetrievalClient(ABC):
    """
    Abstract base class for semantic memory clients.

    CRITICAL: search_outcome() must never raise; failures are reported
    as a FAILED outcome with an empty result list
    """

    @abstractmethod
    async def search_outcome(self, query: str, limit: int) -> SearchOutcome:
        """
        Run one semantic search and tag the outcome.

        Args:
            query: Search query text
            limit: Maximum results requested

        Returns:
            Tagged search outcome
        """
        pass

    async def search(self, query: str, limit: int) -> List[RetrievalResult]:
        """
        Run one semantic search, collapsing failures to an empty list.

        Args:
            query: Search query text
            limit: Maximum results requested

        Returns:
            Retrieved results (empty on failure)
        """
        outcome = await self.search_outcome(query, limit)
        return outcome.results

    async def health_check(self) -> Dict[str, Any]:
        """
        Report service reachability.

        Returns:
            Health report (clients without a probe report "unknown")
        """
        return {"status": "unknown", "connected": False, "vectorsStored": 0}

    async def close(self):
        """Release client resources."""
        pass


class RetrievalError(Exception):
    """Raised by the transport layer when a memory search fails."""

    pass
