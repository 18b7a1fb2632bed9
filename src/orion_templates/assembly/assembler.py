"""Template assembly and ranking."""

import logging
from typing import Any, Dict, Iterable, List, Optional, Set

from ..models.template_models import (
    DEFAULT_PALETTE,
    MAX_MODULES,
    MAX_MOTION_PRESETS,
    MAX_PALETTE_COLORS,
    MAX_TAGS,
    MIN_PALETTE_COLORS,
    Architecture,
    DesignProfile,
    ExtractedFeatures,
    Features,
    GenerationMethod,
    Interaction,
    Palette,
    Pattern,
    Provenance,
    RetrievalResult,
    Styling,
    Template,
    TemplateMetadata,
    TemplateSeed,
)
from ..synthesis.random_source import RandomSource

logger = logging.getLogger(__name__)

# Score used when the memory service omits similarity
DEFAULT_SIMILARITY = 0.7
REASON_EXCERPT_CHARS = 80


def _present(**fields: Any) -> Dict[str, Any]:
    """Keep only the fields a seed actually set."""
    return {key: value for key, value in fields.items() if value is not None}


def _clamp_score(value: Optional[float]) -> Optional[float]:
    if value is None:
        return None
    return max(0.0, min(1.0, float(value)))


class TemplateAssembler:
    """
    Normalize seeds into canonical templates and rank them.

    PATTERN: One default-filling path for retrieved and synthetic seeds
    CRITICAL: Enforce bounded fields (palette 3-5, tags 8, modules 4, motion 3)
    GOTCHA: Confidence is carried over from the seed, never re-derived
    """

    def __init__(self, random_source: Optional[RandomSource] = None):
        """
        Initialize assembler.

        Args:
            random_source: Id generator
        """
        self.random = random_source or RandomSource()
        self.logger = logging.getLogger(__name__)

    def seed_from_retrieval(
        self,
        result: RetrievalResult,
        features: ExtractedFeatures,
        pattern: Pattern,
        context_key: str,
    ) -> TemplateSeed:
        """
        Build a seed from one retrieved snippet and its extracted features.

        Args:
            result: Retrieved memory snippet
            features: Features extracted from the snippet
            pattern: Active pattern
            context_key: Caller's context key

        Returns:
            Template seed marked rag-enhanced
        """
        similarity = (
            result.similarity if result.similarity is not None else DEFAULT_SIMILARITY
        )
        excerpt = result.content[:REASON_EXCERPT_CHARS]

        return TemplateSeed(
            name=features.name,
            summary=features.summary,
            reason=f'Generated from ORION-CORE memory: "{excerpt}..."',
            orion_score=similarity,
            confidence=similarity,
            context_type=context_key,
            source_memory_id=result.id,
            category=features.category,
            complexity=pattern.characteristics.complexity,
            purpose=pattern.characteristics.purpose,
            visual_style=features.visual_style,
            palette=features.palette,
            motion_presets=features.motion_presets,
            modules=features.modules,
            tags=features.tags,
            generation_method=GenerationMethod.RAG_ENHANCED,
            learning_data={
                "sourceMemory": result.id,
                "similarity": result.similarity,
                "extractedFeatures": list(features.features),
            },
        )

    def assemble(self, seeds: Iterable[TemplateSeed]) -> List[Template]:
        """
        Convert seeds into templates with ids unique within this call.

        Args:
            seeds: Retrieved and/or synthetic seeds

        Returns:
            Templates in seed order
        """
        used_ids: Set[str] = set()
        templates: List[Template] = []

        for seed in seeds:
            template_id = self._new_id(seed, used_ids)
            used_ids.add(template_id)
            templates.append(self.build(seed, template_id))

        return templates

    def build(self, seed: TemplateSeed, template_id: str) -> Template:
        """Default-fill a single seed into a template."""
        palette = self.normalize_palette(seed.palette)
        motion = modules = tags = None
        if seed.motion_presets is not None:
            motion = seed.motion_presets[:MAX_MOTION_PRESETS]
        if seed.modules is not None:
            modules = seed.modules[:MAX_MODULES]
        if seed.tags is not None:
            tags = self.normalize_tags(seed.tags)

        return Template(
            id=template_id,
            metadata=TemplateMetadata(
                **_present(
                    name=seed.name,
                    category=seed.category,
                    complexity=seed.complexity,
                    purpose=seed.purpose,
                )
            ),
            design=DesignProfile(
                **_present(
                    summary=seed.summary,
                    reason=seed.reason,
                    confidence=_clamp_score(seed.confidence),
                    orion_score=_clamp_score(seed.orion_score),
                    visual_style=seed.visual_style,
                )
            ),
            styling=Styling(palette=Palette(primary=palette)),
            interaction=Interaction(**_present(motion_presets=motion)),
            architecture=Architecture(**_present(modules=modules)),
            features=Features(**_present(tags=tags)),
            ai=Provenance(
                **_present(
                    source_memory_id=seed.source_memory_id,
                    context_type=seed.context_type,
                    generation_method=seed.generation_method,
                    learning_data=seed.learning_data,
                )
            ),
        )

    @staticmethod
    def normalize_palette(colors: Optional[List[str]]) -> List[str]:
        """Three to five colors; shorter palettes are replaced wholesale."""
        valid = [color for color in (colors or []) if isinstance(color, str) and color]
        if len(valid) < MIN_PALETTE_COLORS:
            return list(DEFAULT_PALETTE)
        return valid[:MAX_PALETTE_COLORS]

    @staticmethod
    def normalize_tags(tags: List[str]) -> List[str]:
        return list(dict.fromkeys(tags))[:MAX_TAGS]

    def rank(self, templates: List[Template]) -> List[Template]:
        """
        Sort by orionScore, highest first.

        CRITICAL: Stable; equal scores keep input order

        Args:
            templates: Assembled templates

        Returns:
            New ranked list
        """
        return sorted(templates, key=lambda t: t.design.orion_score, reverse=True)

    @staticmethod
    def overall_confidence(templates: List[Template]) -> float:
        """Mean orionScore of the templates (0.0 for none)."""
        if not templates:
            return 0.0
        total = sum(template.design.orion_score for template in templates)
        return max(0.0, min(1.0, total / len(templates)))

    def _new_id(self, seed: TemplateSeed, used_ids: Set[str]) -> str:
        kind = (
            "synthetic"
            if seed.generation_method == GenerationMethod.SYNTHETIC_ENHANCED
            else "enhanced"
        )
        prefix = f"{kind}-{seed.context_type or 'template'}"
        template_id = self.random.new_id(prefix)
        while template_id in used_ids:
            template_id = self.random.new_id(prefix)
        return template_id
