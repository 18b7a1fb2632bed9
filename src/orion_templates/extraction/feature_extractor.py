"""Heuristic design-feature extraction from retrieved memory text."""

import logging
import re
from typing import Dict, List, Optional, Sequence, Tuple

from .strategies import DEFAULT_NAME_STRATEGIES, NameStrategy, first_match
from ..catalog.pattern_catalog import PatternCatalog, get_pattern_catalog
from ..models.template_models import (
    DEFAULT_MOTION_PRESETS,
    DEFAULT_PALETTE,
    MAX_MODULES,
    MAX_MOTION_PRESETS,
    MAX_TAGS,
    ExtractedFeatures,
    Pattern,
    TemplateModule,
)

logger = logging.getLogger(__name__)

PLACEHOLDER_NAME = "ORION-Enhanced Template"
PLACEHOLDER_SUMMARY = "AI-generated template with ORION-CORE intelligence"


class FeatureExtractor:
    """
    Derive template features from a single retrieved snippet.

    PATTERN: Keyword tables plus regex strategies, first match wins
    CRITICAL: Every method is pure, deterministic and total
    GOTCHA: Keyword checks are substring matches on lower-cased text
    """

    HEX_COLOR = re.compile(r"#[0-9A-Fa-f]{6}")
    SENTENCE_SPLIT = re.compile(r"[.!?]+")
    MIN_SENTENCE_CHARS = 30
    MAX_SUMMARY_CHARS = 150
    MIN_EXTRACTED_COLORS = 3
    EXTRACTED_PALETTE_SIZE = 4
    MIN_DETECTED_MODULES = 2

    # Themed palettes, first keyword hit wins
    THEMED_PALETTES: Sequence[Tuple[Tuple[str, ...], Tuple[str, ...]]] = (
        (("dashboard",), ("#1E293B", "#3B82F6", "#10B981", "#F59E0B")),
        (("creative", "art"), ("#0F172A", "#8B5CF6", "#EC4899", "#F59E0B")),
    )

    MOTION_KEYWORDS: Dict[str, Tuple[str, ...]] = {
        "fade": ("fade-in", "fade-out", "fade-through"),
        "slide": ("slide-in", "slide-up", "slide-panel"),
        "zoom": ("zoom-in", "scale-up", "zoom-reveal"),
        "bounce": ("bounce-in", "elastic-bounce", "spring-bounce"),
        "rotate": ("rotate-in", "spin-reveal", "twist-enter"),
        "stagger": ("stagger-children", "cascade-in", "sequence-reveal"),
        "parallax": ("parallax-scroll", "depth-movement", "layered-motion"),
        "morph": ("shape-morph", "liquid-transition", "organic-flow"),
    }

    # keyword -> (module type, emphasis)
    MODULE_KEYWORDS: Dict[str, Tuple[str, str]] = {
        "header": ("navigation", "layout"),
        "hero": ("visual", "impact"),
        "navigation": ("navigation", "usability"),
        "gallery": ("media", "visual"),
        "form": ("input", "interaction"),
        "dashboard": ("data", "information"),
        "card": ("content", "modularity"),
        "search": ("functional", "utility"),
        "footer": ("navigation", "completion"),
    }

    MODULE_ANIMATIONS: Dict[str, str] = {
        "navigation": "slide-in",
        "visual": "fade-in-scale",
        "data": "stagger-reveal",
        "content": "fade-up",
        "input": "focus-highlight",
        "functional": "zoom-in",
        "media": "image-reveal",
    }
    DEFAULT_ANIMATION = "fade-in"

    # focus area -> (name, type, description, emphasis, animation)
    FOCUS_MODULES: Dict[str, Tuple[str, str, str, str, str]] = {
        "conversion": (
            "Conversion Optimizer",
            "conversion",
            "AI-optimized conversion flow component",
            "engagement",
            "attention-pulse",
        ),
        "visual-impact": (
            "Visual Impact Hero",
            "visual",
            "High-impact visual storytelling component",
            "visual",
            "dramatic-entrance",
        ),
        "data-clarity": (
            "Data Clarity Dashboard",
            "data",
            "Clear data presentation and visualization",
            "information",
            "data-reveal",
        ),
        "modularity": (
            "Modular Building Block",
            "layout",
            "Flexible, reusable component system",
            "architecture",
            "component-assembly",
        ),
    }
    DEFAULT_FOCUS_MODULE = (
        "Smart Component",
        "functional",
        "AI-generated component for enhanced user experience",
        "utility",
        "smart-reveal",
    )

    COMMON_TAGS: Tuple[str, ...] = (
        "responsive",
        "modern",
        "accessible",
        "performance",
        "mobile-first",
        "seo-friendly",
    )
    CONTEXT_TAGS: Dict[str, Tuple[str, ...]] = {
        "landing_pages": ("conversion", "marketing", "hero-focused"),
        "dashboards": ("data-driven", "functional", "workflow"),
        "portfolios": ("creative", "showcase", "visual-story"),
        "modular_systems": ("component-based", "scalable", "systematic"),
    }
    PROVENANCE_TAGS: Tuple[str, ...] = ("orion-powered", "ai-enhanced")

    CATEGORY_KEYWORDS: Tuple[str, ...] = ("dashboard", "landing", "portfolio", "ecommerce")
    STYLE_KEYWORDS: Tuple[str, ...] = ("minimal", "bold", "elegant", "playful")
    FEATURE_KEYWORDS: Tuple[str, ...] = (
        "responsive",
        "animated",
        "interactive",
        "accessible",
        "performance",
        "seo",
    )

    def __init__(
        self,
        catalog: Optional[PatternCatalog] = None,
        name_strategies: Optional[Sequence[NameStrategy]] = None,
    ):
        """
        Initialize feature extractor.

        Args:
            catalog: Pattern catalog supplying the default pattern
            name_strategies: Ordered name strategies (defaults to built-ins)
        """
        self.catalog = catalog or get_pattern_catalog()
        self.name_strategies = tuple(name_strategies or DEFAULT_NAME_STRATEGIES)
        self.logger = logging.getLogger(__name__)

    def extract(self, text: str, pattern: Optional[Pattern] = None) -> ExtractedFeatures:
        """
        Extract all features from one snippet.

        Args:
            text: Retrieved text (may be empty)
            pattern: Active pattern (catalog default if None)

        Returns:
            Extracted features with defaults for anything not found
        """
        text = text or ""
        pattern = pattern or self.catalog.default_pattern

        return ExtractedFeatures(
            name=self.extract_name(text),
            summary=self.extract_summary(text),
            palette=self.extract_palette(text),
            motion_presets=self.extract_motion_presets(text),
            modules=self.generate_modules(text, pattern),
            tags=self.extract_tags(pattern),
            category=self.infer_category(text),
            visual_style=self.infer_visual_style(text),
            features=self.extract_features(text),
        )

    def extract_name(self, text: str) -> str:
        return first_match(self.name_strategies, text or "") or PLACEHOLDER_NAME

    def extract_summary(self, text: str) -> str:
        """First sentence longer than 30 characters, truncated to 150."""
        for fragment in self.SENTENCE_SPLIT.split(text or ""):
            sentence = fragment.strip()
            if len(sentence) > self.MIN_SENTENCE_CHARS:
                return sentence[: self.MAX_SUMMARY_CHARS] + "..."
        return PLACEHOLDER_SUMMARY

    def extract_palette(self, text: str) -> List[str]:
        """
        Hex colors from the text, or a themed palette.

        Fewer than three literal colors never mix with defaults; the
        themed palette replaces them entirely.
        """
        text = text or ""
        colors = self.HEX_COLOR.findall(text)
        if len(colors) >= self.MIN_EXTRACTED_COLORS:
            return colors[: self.EXTRACTED_PALETTE_SIZE]

        lowered = text.lower()
        for keywords, palette in self.THEMED_PALETTES:
            if any(keyword in lowered for keyword in keywords):
                return list(palette)
        return list(DEFAULT_PALETTE)

    def extract_motion_presets(self, text: str) -> List[str]:
        lowered = (text or "").lower()
        detected = [
            presets[0]
            for keyword, presets in self.MOTION_KEYWORDS.items()
            if keyword in lowered
        ]
        if not detected:
            return list(DEFAULT_MOTION_PRESETS)
        return detected[:MAX_MOTION_PRESETS]

    def generate_modules(self, text: str, pattern: Pattern) -> List[TemplateModule]:
        """
        Detect structural modules, padding from the pattern's focus areas.

        Args:
            text: Source text
            pattern: Active pattern

        Returns:
            Up to four modules
        """
        lowered = (text or "").lower()
        modules: List[TemplateModule] = []

        for keyword, (module_type, emphasis) in self.MODULE_KEYWORDS.items():
            if keyword in lowered:
                modules.append(
                    TemplateModule(
                        name=f"{keyword.capitalize()} Component",
                        type=module_type,
                        description=(
                            f"AI-extracted {keyword} component optimized for {emphasis}"
                        ),
                        emphasis=emphasis,
                        animation=self.select_animation(module_type),
                        customizable=True,
                        ai_generated=True,
                        orion_extracted=True,
                    )
                )

        if len(modules) < self.MIN_DETECTED_MODULES:
            for area in pattern.characteristics.focus_areas:
                modules.append(self.module_for_focus_area(area))

        return modules[:MAX_MODULES]

    def select_animation(self, module_type: str) -> str:
        return self.MODULE_ANIMATIONS.get(module_type, self.DEFAULT_ANIMATION)

    def module_for_focus_area(self, focus_area: str) -> TemplateModule:
        name, module_type, description, emphasis, animation = self.FOCUS_MODULES.get(
            focus_area, self.DEFAULT_FOCUS_MODULE
        )
        return TemplateModule(
            name=name,
            type=module_type,
            description=description,
            emphasis=emphasis,
            animation=animation,
            customizable=True,
            ai_generated=True,
        )

    def extract_tags(self, pattern: Pattern) -> List[str]:
        """Common, context and provenance tags, deduplicated, at most eight."""
        candidates = list(self.COMMON_TAGS[:3])
        candidates.extend(self.CONTEXT_TAGS.get(pattern.context_key, ()))
        candidates.extend(self.PROVENANCE_TAGS)
        return list(dict.fromkeys(candidates))[:MAX_TAGS]

    def infer_category(self, text: str) -> str:
        lowered = (text or "").lower()
        for keyword in self.CATEGORY_KEYWORDS:
            if keyword in lowered:
                return keyword
        return "general"

    def infer_visual_style(self, text: str) -> str:
        lowered = (text or "").lower()
        for keyword in self.STYLE_KEYWORDS:
            if keyword in lowered:
                return keyword
        return "modern"

    def extract_features(self, text: str) -> List[str]:
        lowered = (text or "").lower()
        return [keyword for keyword in self.FEATURE_KEYWORDS if keyword in lowered]
