"""Template recommendation service orchestrating retrieval, extraction and synthesis."""

import asyncio
import logging
import math
from datetime import datetime, timezone
from typing import Dict, Any, List, Optional, Sequence

from pydantic import ValidationError

from ..assembly.assembler import TemplateAssembler
from ..catalog.pattern_catalog import PatternCatalog, get_pattern_catalog
from ..config.template_config import TemplateEngineConfig
from ..extraction.feature_extractor import FeatureExtractor
from ..models.template_models import (
    GenerationMethod,
    Pattern,
    Provenance,
    RecommendationMetadata,
    RecommendationRequest,
    RecommendationResponse,
    RetrievalStats,
    SearchOutcome,
    SearchStatus,
    Template,
    TemplateSeed,
)
from ..retrieval.base import BaseRetrievalClient
from ..retrieval.memory_client import SemanticMemoryClient
from ..synthesis.random_source import RandomSource
from ..synthesis.synthesizer import TemplateSynthesizer

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def _iso_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class TemplateRecommendationService:
    """
    Template recommendation pipeline.

    Runs Start -> Fan-out -> Collect -> Backfill -> Rank -> Done, with any
    uncaught exception diverted to a fully synthetic fallback response.

    PATTERN: asyncio.gather join over calls that cannot fail
    CRITICAL: Always returns exactly `limit` templates in a success envelope
    GOTCHA: Retrieval failures degrade richness, never availability
    """

    def __init__(
        self,
        retrieval_client: Optional[BaseRetrievalClient] = None,
        config: Optional[TemplateEngineConfig] = None,
        catalog: Optional[PatternCatalog] = None,
        extractor: Optional[FeatureExtractor] = None,
        synthesizer: Optional[TemplateSynthesizer] = None,
        assembler: Optional[TemplateAssembler] = None,
        random_source: Optional[RandomSource] = None,
    ):
        """
        Initialize recommendation service.

        Args:
            retrieval_client: Semantic memory client (HTTP client if None)
            config: Engine configuration (loaded from env if None)
            catalog: Pattern catalog (process-wide catalog if None)
            extractor: Feature extractor
            synthesizer: Synthetic template generator
            assembler: Template assembler/ranker
            random_source: Shared randomness for ids, scores and names
        """
        self.config = config or TemplateEngineConfig()
        self.random = random_source or RandomSource()
        self.catalog = catalog or get_pattern_catalog()
        self._owns_client = retrieval_client is None
        self.retrieval = retrieval_client or SemanticMemoryClient(config=self.config)
        self.extractor = extractor or FeatureExtractor(catalog=self.catalog)
        self.synthesizer = synthesizer or TemplateSynthesizer(
            extractor=self.extractor,
            random_source=self.random,
            config=self.config,
        )
        self.assembler = assembler or TemplateAssembler(random_source=self.random)
        self.logger = logging.getLogger(__name__)

    async def generate_templates(
        self,
        context_key: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> RecommendationResponse:
        """
        Generate a ranked, fixed-size list of template recommendations.

        Args:
            context_key: Design context (configured default if None)
            limit: Number of templates (configured default if None)

        Returns:
            Success envelope holding exactly `limit` templates

        Raises:
            ValueError: If the request is invalid (e.g. limit < 1)
        """
        request = self._validate_request(context_key, limit)
        context_key = (
            self.config.default_context
            if request.context_key is None
            else request.context_key
        )
        limit = request.limit or self.config.default_limit

        try:
            return await self._run_pipeline(context_key, limit)
        except Exception as e:
            self.logger.error(
                f"Template generation failed for context '{context_key}': {e}",
                exc_info=True,
            )
            return self.generate_fallback(context_key, limit)

    async def recommend(self, request: RecommendationRequest) -> RecommendationResponse:
        """Run the pipeline for an already validated request."""
        return await self.generate_templates(
            context_key=request.context_key,
            limit=request.limit,
        )

    def _validate_request(
        self,
        context_key: Optional[str],
        limit: Optional[int],
    ) -> RecommendationRequest:
        try:
            return RecommendationRequest(context_key=context_key, limit=limit)
        except ValidationError as e:
            raise ValueError(f"Invalid recommendation request: {e}") from e

    async def _run_pipeline(self, context_key: str, limit: int) -> RecommendationResponse:
        # Start
        pattern = self.catalog.lookup(context_key)
        queries = list(pattern.search_queries)
        per_query_limit = math.ceil(limit / len(queries)) if queries else limit

        self.logger.info(
            f"Generating {limit} templates for context '{context_key}' "
            f"({len(queries)} queries, {per_query_limit} results each)"
        )

        # Fan-out
        outcomes = await self._fan_out(queries, per_query_limit)
        failed = sum(1 for outcome in outcomes if not outcome.succeeded)

        if queries and failed == len(queries) and self.config.fallback_on_total_outage:
            self.logger.warning(
                f"All {failed} memory queries failed for context '{context_key}'"
            )
            return self.generate_fallback(context_key, limit)

        # Collect
        collected = [result for outcome in outcomes for result in outcome.results]
        collected = collected[: limit * self.config.overfetch_factor]

        seeds: List[TemplateSeed] = []
        for result in collected[:limit]:
            features = self.extractor.extract(result.content, pattern)
            seeds.append(
                self.assembler.seed_from_retrieval(result, features, pattern, context_key)
            )
        retrieved = len(seeds)

        # Backfill
        while len(seeds) < limit:
            seeds.append(self.synthesizer.synthesize(pattern, context_key, len(seeds)))

        # Rank
        templates = self.assembler.rank(self.assembler.assemble(seeds))

        self.logger.info(
            f"Generated {len(templates)} templates "
            f"({retrieved} retrieved, {limit - retrieved} synthetic)"
        )

        return RecommendationResponse(
            templates=templates,
            metadata=RecommendationMetadata(
                context=context_key,
                pattern=pattern.characteristics,
                enhanced_schemas=True,
                orion_powered=retrieved > 0,
                generation_time=_now_ms(),
                retrieval=RetrievalStats(
                    queries=len(queries),
                    failed_queries=failed,
                    results_collected=len(collected),
                ),
            ),
            context_used=[context_key],
            confidence=self.assembler.overall_confidence(templates),
            timestamp=_iso_now(),
        )

    async def _fan_out(
        self,
        queries: Sequence[str],
        per_query_limit: int,
    ) -> List[SearchOutcome]:
        """
        Run every query concurrently and wait for all of them.

        CRITICAL: One query failing never cancels its siblings

        Args:
            queries: Search queries in submission order
            per_query_limit: Results requested per query

        Returns:
            Outcomes in query order
        """
        if not queries:
            return []

        results = await asyncio.gather(
            *[self.retrieval.search_outcome(query, per_query_limit) for query in queries],
            return_exceptions=True,
        )

        outcomes: List[SearchOutcome] = []
        for query, result in zip(queries, results):
            if isinstance(result, BaseException):
                self.logger.warning(f"Memory query '{query}' raised: {result}")
                outcomes.append(
                    SearchOutcome(query=query, status=SearchStatus.FAILED, error=str(result))
                )
            else:
                outcomes.append(result)
        return outcomes

    def generate_fallback(self, context_key: str, limit: int) -> RecommendationResponse:
        """
        Build a fully synthetic response.

        CRITICAL: Must never raise

        Args:
            context_key: Caller's context key
            limit: Number of templates

        Returns:
            Success envelope flagged with fallbackMode
        """
        self.logger.info(f"Generating {limit} fallback templates for '{context_key}'")

        try:
            pattern: Pattern = self.catalog.lookup(context_key)
            seeds = [
                self.synthesizer.synthesize(pattern, context_key, index)
                for index in range(limit)
            ]
            templates = self.assembler.rank(self.assembler.assemble(seeds))
        except Exception as e:
            self.logger.error(
                f"Fallback synthesis failed, using default templates: {e}",
                exc_info=True,
            )
            templates = [
                Template(
                    id=f"fallback-{context_key}-{index}",
                    ai=Provenance(
                        context_type=context_key,
                        generation_method=GenerationMethod.SYNTHETIC_ENHANCED,
                    ),
                )
                for index in range(limit)
            ]

        return RecommendationResponse(
            templates=templates,
            metadata=RecommendationMetadata(
                context=context_key,
                enhanced_schemas=True,
                orion_powered=False,
                generation_time=_now_ms(),
                fallback_mode=True,
            ),
            context_used=[context_key],
            confidence=self.config.fallback_confidence,
            timestamp=_iso_now(),
        )

    async def health_check(self) -> Dict[str, Any]:
        """
        Report recommendation service and memory service health.

        Returns:
            Health report dictionary
        """
        memory_health = await self.retrieval.health_check()
        return {
            "status": "healthy" if memory_health.get("connected") else "degraded",
            "service": "template-recommendations",
            "orionConnected": bool(memory_health.get("connected")),
            "orionVectors": memory_health.get("vectorsStored", 0),
            "timestamp": _iso_now(),
        }

    async def close(self):
        """Close the retrieval client if this service created it."""
        if self._owns_client:
            await self.retrieval.close()

    async def __aenter__(self) -> "TemplateRecommendationService":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
