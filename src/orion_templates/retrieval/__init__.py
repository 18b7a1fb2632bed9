"""Retrieval clients for the semantic memory service."""

from .base import BaseRetrievalClient, RetrievalError
from .memory_client import SemanticMemoryClient

__all__ = [
    "BaseRetrievalClient",
    "RetrievalError",
    "SemanticMemoryClient",
]
