"""Models package for the template engine."""

from .template_models import (
    DEFAULT_PALETTE,
    DEFAULT_MOTION_PRESETS,
    DEFAULT_TAGS,
    MAX_PALETTE_COLORS,
    MIN_PALETTE_COLORS,
    MAX_MOTION_PRESETS,
    MAX_MODULES,
    MAX_TAGS,
    Complexity,
    GenerationMethod,
    SearchStatus,
    TemplateMetadata,
    DesignProfile,
    Palette,
    Styling,
    Interaction,
    TemplateModule,
    Architecture,
    Features,
    Provenance,
    Deployment,
    Template,
    RetrievalResult,
    SearchOutcome,
    PatternCharacteristics,
    Pattern,
    ExtractedFeatures,
    TemplateSeed,
    RecommendationRequest,
    RetrievalStats,
    RecommendationMetadata,
    RecommendationResponse,
    default_modules,
)

__all__ = [
    # Constants
    "DEFAULT_PALETTE",
    "DEFAULT_MOTION_PRESETS",
    "DEFAULT_TAGS",
    "MAX_PALETTE_COLORS",
    "MIN_PALETTE_COLORS",
    "MAX_MOTION_PRESETS",
    "MAX_MODULES",
    "MAX_TAGS",
    # Enums
    "Complexity",
    "GenerationMethod",
    "SearchStatus",
    # Template schema
    "TemplateMetadata",
    "DesignProfile",
    "Palette",
    "Styling",
    "Interaction",
    "TemplateModule",
    "Architecture",
    "Features",
    "Provenance",
    "Deployment",
    "Template",
    "default_modules",
    # Pipeline models
    "RetrievalResult",
    "SearchOutcome",
    "PatternCharacteristics",
    "Pattern",
    "ExtractedFeatures",
    "TemplateSeed",
    # Envelope
    "RecommendationRequest",
    "RetrievalStats",
    "RecommendationMetadata",
    "RecommendationResponse",
]
