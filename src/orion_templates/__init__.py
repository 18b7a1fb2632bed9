"""ORION template recommendation engine."""

from .config.template_config import TemplateEngineConfig
from .catalog.pattern_catalog import PatternCatalog, get_pattern_catalog
from .retrieval.base import BaseRetrievalClient, RetrievalError
from .retrieval.memory_client import SemanticMemoryClient
from .extraction.feature_extractor import FeatureExtractor
from .synthesis.random_source import RandomSource
from .synthesis.synthesizer import TemplateSynthesizer
from .assembly.assembler import TemplateAssembler
from .services.template_service import TemplateRecommendationService
from .models.template_models import (
    Template,
    TemplateSeed,
    RecommendationRequest,
    RecommendationResponse,
)

__version__ = "0.1.0"

__all__ = [
    "TemplateEngineConfig",
    "PatternCatalog",
    "get_pattern_catalog",
    "BaseRetrievalClient",
    "RetrievalError",
    "SemanticMemoryClient",
    "FeatureExtractor",
    "RandomSource",
    "TemplateSynthesizer",
    "TemplateAssembler",
    "TemplateRecommendationService",
    "Template",
    "TemplateSeed",
    "RecommendationRequest",
    "RecommendationResponse",
]
