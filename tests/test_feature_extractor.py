"""Unit tests for heuristic feature extraction."""

from typing import Optional

import pytest

from orion_templates.catalog.pattern_catalog import PatternCatalog
from orion_templates.extraction import (
    DEFAULT_NAME_STRATEGIES,
    PLACEHOLDER_NAME,
    PLACEHOLDER_SUMMARY,
    FeatureExtractor,
    NameStrategy,
    RegexNameStrategy,
    first_match,
)
from orion_templates.models.template_models import (
    DEFAULT_MOTION_PRESETS,
    DEFAULT_PALETTE,
    Complexity,
    Pattern,
    PatternCharacteristics,
)

HERO_TEXT = (
    "Built a responsive Hero Section component with fade and slide animations "
    "using #1E293B and #3B82F6 gradients"
)


@pytest.fixture
def catalog():
    """Create catalog with built-in patterns."""
    return PatternCatalog()


@pytest.fixture
def extractor(catalog):
    """Create feature extractor."""
    return FeatureExtractor(catalog=catalog)


class FixedName(NameStrategy):
    """Strategy that always returns the same name."""

    name = "fixed"

    def __init__(self, value: Optional[str]):
        self.value = value

    def __call__(self, text: str) -> Optional[str]:
        return self.value


class TestExtract:
    """Test the full extraction pass."""

    def test_hero_snippet(self, extractor):
        """Test extraction from a typical component note."""
        features = extractor.extract(HERO_TEXT)

        assert "Hero Section" in features.name
        assert features.name == "a responsive Hero Section component"
        # Only two literal colors: themed/default palette wins wholesale
        assert features.palette == list(DEFAULT_PALETTE)
        assert "#1E293B" in features.palette
        assert "#3B82F6" in features.palette
        assert features.motion_presets == ["fade-in", "slide-in"]
        assert features.modules[0].name == "Hero Component"
        assert features.modules[0].type == "visual"
        assert features.modules[0].orion_extracted is True
        assert len(features.modules) == 4
        assert features.features == ["responsive"]

    def test_empty_text(self, extractor):
        """Test empty input yields every default."""
        features = extractor.extract("")

        assert features.name == PLACEHOLDER_NAME
        assert features.summary == PLACEHOLDER_SUMMARY
        assert features.palette == list(DEFAULT_PALETTE)
        assert features.motion_presets == list(DEFAULT_MOTION_PRESETS)
        assert len(features.modules) >= 2
        assert features.tags == [
            "responsive",
            "modern",
            "accessible",
            "component-based",
            "scalable",
            "systematic",
            "orion-powered",
            "ai-enhanced",
        ]
        assert features.category == "general"
        assert features.visual_style == "modern"
        assert features.features == []

    def test_emoji_only_text(self, extractor):
        """Test text without any signal behaves like empty input."""
        features = extractor.extract("\U0001F642\U0001F642\U0001F642 no keywords here")

        assert features.name == PLACEHOLDER_NAME
        assert features.summary == PLACEHOLDER_SUMMARY
        assert features.palette == list(DEFAULT_PALETTE)
        assert features.motion_presets == list(DEFAULT_MOTION_PRESETS)

    def test_extraction_is_deterministic(self, extractor):
        """Test identical input gives identical features."""
        assert extractor.extract(HERO_TEXT) == extractor.extract(HERO_TEXT)

    def test_pattern_drives_tags_and_padding(self, extractor, catalog):
        """Test the supplied pattern is used instead of the default."""
        features = extractor.extract("", catalog.lookup("landing_pages"))

        assert "hero-focused" in features.tags
        assert [m.name for m in features.modules] == [
            "Conversion Optimizer",
            "Visual Impact Hero",
            "Smart Component",
        ]


class TestSummary:
    """Test summary extraction."""

    def test_first_long_sentence(self, extractor):
        """Test short fragments are skipped."""
        text = (
            "Short one. This sentence is definitely longer than thirty "
            "characters for sure! tail"
        )
        assert extractor.extract_summary(text) == (
            "This sentence is definitely longer than thirty characters for sure..."
        )

    def test_truncated_to_150(self, extractor):
        """Test long sentences are cut to 150 characters."""
        assert extractor.extract_summary("a" * 200) == "a" * 150 + "..."

    def test_exactly_thirty_chars_is_too_short(self, extractor):
        """Test the length threshold is strict."""
        assert extractor.extract_summary("b" * 30) == PLACEHOLDER_SUMMARY


class TestPalette:
    """Test palette extraction."""

    def test_literal_colors_first_four(self, extractor):
        """Test three or more hex colors are used directly."""
        text = "Colors #111111, #222222, #333333, #444444 and #555555"
        assert extractor.extract_palette(text) == [
            "#111111",
            "#222222",
            "#333333",
            "#444444",
        ]

    def test_creative_theme(self, extractor):
        """Test creative keyword selects the creative palette."""
        assert extractor.extract_palette("A creative studio") == [
            "#0F172A",
            "#8B5CF6",
            "#EC4899",
            "#F59E0B",
        ]

    def test_dashboard_theme(self, extractor):
        """Test dashboard keyword selects the dashboard palette."""
        assert extractor.extract_palette("Sales DASHBOARD") == [
            "#1E293B",
            "#3B82F6",
            "#10B981",
            "#F59E0B",
        ]


class TestMotion:
    """Test motion preset extraction."""

    def test_truncated_to_three(self, extractor):
        """Test at most three presets are returned."""
        assert extractor.extract_motion_presets("fade slide zoom bounce") == [
            "fade-in",
            "slide-in",
            "zoom-in",
        ]

    def test_defaults(self, extractor):
        """Test no keywords yields the default presets."""
        assert extractor.extract_motion_presets("static page") == list(
            DEFAULT_MOTION_PRESETS
        )


class TestModules:
    """Test module generation."""

    def test_detected_modules_capped(self, extractor, catalog):
        """Test keyword modules are capped at four in table order."""
        modules = extractor.generate_modules(
            "header hero navigation gallery form", catalog.default_pattern
        )

        assert [m.name for m in modules] == [
            "Header Component",
            "Hero Component",
            "Navigation Component",
            "Gallery Component",
        ]
        assert [m.animation for m in modules] == [
            "slide-in",
            "fade-in-scale",
            "slide-in",
            "image-reveal",
        ]

    def test_two_detected_modules_not_padded(self, extractor, catalog):
        """Test two detected modules suffice."""
        modules = extractor.generate_modules("card and footer", catalog.default_pattern)
        assert [m.name for m in modules] == ["Card Component", "Footer Component"]

    def test_focus_area_module_has_type(self, extractor):
        """Test focus-area modules carry a module type."""
        module = extractor.module_for_focus_area("data-clarity")
        assert module.name == "Data Clarity Dashboard"
        assert module.type == "data"
        assert module.orion_extracted is None

    def test_unknown_focus_area(self, extractor):
        """Test unknown focus areas produce the generic module."""
        module = extractor.module_for_focus_area("whatever")
        assert module.name == "Smart Component"
        assert module.type == "functional"


class TestTags:
    """Test tag extraction."""

    def test_dashboard_tags(self, extractor, catalog):
        """Test tags for the dashboards pattern."""
        assert extractor.extract_tags(catalog.lookup("dashboards")) == [
            "responsive",
            "modern",
            "accessible",
            "data-driven",
            "functional",
            "workflow",
            "orion-powered",
            "ai-enhanced",
        ]

    def test_tags_deduplicated(self, catalog):
        """Test overlapping context tags are not repeated."""

        class CustomExtractor(FeatureExtractor):
            CONTEXT_TAGS = {"custom": ("modern", "responsive", "bespoke")}

        pattern = Pattern(
            context_key="custom",
            search_queries=("custom query",),
            characteristics=PatternCharacteristics(
                purpose="custom", complexity=Complexity.SIMPLE
            ),
        )

        tags = CustomExtractor(catalog=catalog).extract_tags(pattern)
        assert tags == [
            "responsive",
            "modern",
            "accessible",
            "bespoke",
            "orion-powered",
            "ai-enhanced",
        ]


class TestClassification:
    """Test category, style and feature keywords."""

    def test_category_first_match(self, extractor):
        """Test keyword order decides the category."""
        assert extractor.infer_category("An ecommerce landing page") == "landing"
        assert extractor.infer_category("Nothing special") == "general"

    def test_visual_style(self, extractor):
        """Test visual style keywords."""
        assert extractor.infer_visual_style("minimal and bold") == "minimal"
        assert extractor.infer_visual_style("plain") == "modern"

    def test_feature_keywords(self, extractor):
        """Test feature keyword detection."""
        assert extractor.extract_features("Interactive, accessible and SEO ready") == [
            "interactive",
            "accessible",
            "seo",
        ]


class TestNameStrategies:
    """Test ordered name strategies."""

    def test_action_phrase_wins(self):
        """Test the first strategy takes precedence."""
        text = "We designed a Checkout Layout. The Pricing Template is here"
        assert first_match(DEFAULT_NAME_STRATEGIES, text) == "a Checkout Layout"

    def test_design_noun(self):
        """Test capitalized phrase ending in a design noun."""
        text = "Modern Pricing Template for SaaS"
        assert first_match(DEFAULT_NAME_STRATEGIES, text) == "Modern Pricing Template"

    def test_orion_phrase(self):
        """Test ORION-prefixed phrase."""
        text = "ORION powered Sunset Theme"
        assert first_match(DEFAULT_NAME_STRATEGIES, text) == "Sunset Theme"

    def test_no_match_returns_none(self):
        """Test strategies return None without a match."""
        strategy = RegexNameStrategy("noun", r"(Widget)")
        assert strategy("nothing here") is None
        assert first_match(DEFAULT_NAME_STRATEGIES, "") is None

    def test_scan_is_bounded(self, extractor):
        """Test names beyond the scan window are ignored."""
        text = "x" * 5000 + " Landing Template"
        assert extractor.extract_name(text) == PLACEHOLDER_NAME

    def test_custom_strategies_in_order(self, catalog):
        """Test injected strategies are evaluated in order."""
        extractor = FeatureExtractor(
            catalog=catalog,
            name_strategies=[FixedName(None), FixedName("Second"), FixedName("Third")],
        )
        assert extractor.extract_name(HERO_TEXT) == "Second"
