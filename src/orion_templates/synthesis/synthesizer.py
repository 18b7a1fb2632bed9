"""Synthetic template generation for backfill and fallback."""

import logging
from typing import Dict, Optional, Tuple

from .random_source import RandomSource
from ..catalog.pattern_catalog import PatternCatalog
from ..config.template_config import TemplateEngineConfig
from ..extraction.feature_extractor import FeatureExtractor
from ..models.template_models import GenerationMethod, Pattern, TemplateSeed

logger = logging.getLogger(__name__)


class TemplateSynthesizer:
    """
    Fabricate template seeds without retrieval input.

    PATTERN: Catalog metadata plus bounded randomization
    CRITICAL: Palette, motion, modules and tags come from the extractor's
    empty-input defaults so synthetic and retrieved templates share one shape
    GOTCHA: Scores are drawn independently; confidence != orionScore
    """

    SYNTHETIC_NAMES: Dict[str, Tuple[str, ...]] = {
        "landing_pages": ("Conversion Hero", "Impact Landing", "Engagement Focus"),
        "dashboards": ("Analytics Hub", "Data Command", "Insight Center"),
        "portfolios": ("Creative Showcase", "Visual Story", "Artist Gallery"),
        "modular_systems": ("Component Library", "Design System", "Modular Framework"),
    }
    DEFAULT_NAMES: Tuple[str, ...] = ("Modern Template",)
    REASON = "Synthesized template generated when ORION memory patterns insufficient"

    def __init__(
        self,
        extractor: Optional[FeatureExtractor] = None,
        random_source: Optional[RandomSource] = None,
        config: Optional[TemplateEngineConfig] = None,
    ):
        """
        Initialize synthesizer.

        Args:
            extractor: Feature extractor providing default branches
            random_source: Randomness for names and scores
            config: Engine configuration (score range)
        """
        self.extractor = extractor or FeatureExtractor()
        self.random = random_source or RandomSource()
        self.config = config or TemplateEngineConfig()

    def synthesize(
        self,
        pattern: Pattern,
        context_key: str,
        index: int,
        deterministic: bool = False,
    ) -> TemplateSeed:
        """
        Create one synthetic seed.

        Args:
            pattern: Pattern to impersonate
            context_key: Caller's context key
            index: Position of this seed in the output list
            deterministic: Pick the name by index instead of at random

        Returns:
            Template seed marked synthetic-enhanced
        """
        characteristics = pattern.characteristics
        low = self.config.synthetic_score_min
        high = self.config.synthetic_score_max

        return TemplateSeed(
            name=self._pick_name(context_key, index, deterministic),
            summary=(
                f"AI-synthesized {characteristics.purpose} template optimized for "
                f"{', '.join(characteristics.focus_areas)}"
            ),
            reason=self.REASON,
            orion_score=self.random.score(low, high),
            confidence=self.random.score(low, high),
            context_type=context_key,
            category=PatternCatalog.category_for(context_key),
            complexity=characteristics.complexity,
            purpose=characteristics.purpose,
            visual_style="modern",
            palette=self.extractor.extract_palette(""),
            motion_presets=self.extractor.extract_motion_presets(""),
            modules=self.extractor.generate_modules("", pattern),
            tags=self.extractor.extract_tags(pattern),
            generation_method=GenerationMethod.SYNTHETIC_ENHANCED,
            learning_data={
                "sourcePattern": characteristics.model_dump(by_alias=True, mode="json"),
                "synthetic": True,
            },
        )

    def _pick_name(self, context_key: str, index: int, deterministic: bool) -> str:
        names = self.SYNTHETIC_NAMES.get(context_key, self.DEFAULT_NAMES)
        if deterministic:
            return names[index % len(names)]
        return self.random.choice(names)
