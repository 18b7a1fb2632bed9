"""Template data models for the recommendation pipeline.

Python attributes are snake_case; the camelCase wire names used by the
frontend are declared as aliases and emitted with ``by_alias=True``.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Dict, Any, Optional, List, Tuple
from enum import Enum


DEFAULT_PALETTE: Tuple[str, ...] = ("#1E293B", "#3B82F6", "#10B981", "#F59E0B")
DEFAULT_MOTION_PRESETS: Tuple[str, ...] = ("fade-in", "slide-up", "scale-in")
DEFAULT_TAGS: Tuple[str, ...] = ("responsive", "modern", "accessible")

MAX_PALETTE_COLORS = 5
MIN_PALETTE_COLORS = 3
MAX_MOTION_PRESETS = 3
MAX_MODULES = 4
MAX_TAGS = 8


class Complexity(str, Enum):
    """Template complexity levels."""

    SIMPLE = "simple"
    MEDIUM = "medium"
    COMPLEX = "complex"


class GenerationMethod(str, Enum):
    """How a template was produced."""

    RAG_ENHANCED = "rag-enhanced"
    SYNTHETIC_ENHANCED = "synthetic-enhanced"


class SearchStatus(str, Enum):
    """Outcome tag for a single memory search call."""

    SUCCESS = "success"
    FAILED = "failed"


class _WireModel(BaseModel):
    """Base for models that accept both field names and camelCase aliases."""

    model_config = ConfigDict(populate_by_name=True)


# ---------------------------------------------------------------------------
# Template sections
# ---------------------------------------------------------------------------


class PerformanceProfile(_WireModel):
    """Expected runtime performance characteristics."""

    load_time: str = Field(default="fast", alias="loadTime")
    bundle_size: str = Field(default="optimized", alias="bundleSize")
    core_web_vitals: str = Field(default="good", alias="coreWebVitals")


class TemplateMetadata(_WireModel):
    """Descriptive template metadata."""

    name: str = Field(default="Untitled Template", description="Display name")
    category: str = Field(default="general", description="Template category")
    complexity: Complexity = Field(default=Complexity.MEDIUM)
    industry: str = Field(default="general", description="Target industry")
    purpose: str = Field(default="landing", description="Primary page purpose")
    responsive: bool = Field(default=True)
    accessibility: bool = Field(default=True)
    performance: PerformanceProfile = Field(default_factory=PerformanceProfile)


class DesignProfile(_WireModel):
    """Design rationale and scoring."""

    summary: str = Field(default="AI-generated template design")
    reason: str = Field(default="Generated using ORION-CORE intelligence")
    confidence: float = Field(default=0.8, ge=0, le=1)
    orion_score: float = Field(default=0.8, ge=0, le=1, alias="orionScore")
    visual_style: str = Field(default="modern", alias="visualStyle")
    color_scheme: str = Field(default="balanced", alias="colorScheme")


class Palette(_WireModel):
    """Color palette; ``primary`` always holds 3 to 5 hex colors."""

    primary: List[str] = Field(
        default_factory=lambda: list(DEFAULT_PALETTE),
        min_length=MIN_PALETTE_COLORS,
        max_length=MAX_PALETTE_COLORS,
    )
    semantic: Dict[str, str] = Field(
        default_factory=lambda: {
            "success": "#10B981",
            "warning": "#F59E0B",
            "error": "#EF4444",
            "info": "#3B82F6",
        }
    )
    gradients: List[str] = Field(
        default_factory=lambda: [
            "linear-gradient(135deg, #667eea 0%, #764ba2 100%)",
            "linear-gradient(135deg, #f093fb 0%, #f5576c 100%)",
        ]
    )


class Typography(_WireModel):
    font_family: str = Field(default="Inter, system-ui, sans-serif", alias="fontFamily")
    heading_scale: str = Field(default="harmonious", alias="headingScale")
    readability: str = Field(default="high")


class Spacing(_WireModel):
    scale: str = Field(default="consistent")
    rhythm: str = Field(default="balanced")


class LayoutProfile(_WireModel):
    grid: str = Field(default="responsive-12-col")
    breakpoints: str = Field(default="standard")
    container_max_width: str = Field(default="1200px", alias="containerMaxWidth")


class Styling(_WireModel):
    """Visual styling section."""

    palette: Palette = Field(default_factory=Palette)
    typography: Typography = Field(default_factory=Typography)
    spacing: Spacing = Field(default_factory=Spacing)
    layout: LayoutProfile = Field(default_factory=LayoutProfile)


class Animations(_WireModel):
    duration: str = Field(default="moderate")
    easing: str = Field(default="ease-out")
    respects_reduced_motion: bool = Field(default=True, alias="respectsReducedMotion")


class Interaction(_WireModel):
    """Motion and interaction section."""

    motion_presets: List[str] = Field(
        default_factory=lambda: list(DEFAULT_MOTION_PRESETS),
        max_length=MAX_MOTION_PRESETS,
        alias="motionPresets",
    )
    animations: Animations = Field(default_factory=Animations)
    micro_interactions: List[str] = Field(
        default_factory=lambda: ["hover-elevate", "click-feedback", "focus-highlight"],
        alias="microInteractions",
    )
    gesture_support: bool = Field(default=True, alias="gestureSupport")


class TemplateModule(_WireModel):
    """A structural building block of a template."""

    name: str = Field(description="Module display name")
    type: str = Field(description="Module type (layout, navigation, visual, ...)")
    description: str = Field(default="")
    emphasis: str = Field(default="utility")
    animation: str = Field(default="fade-in")
    customizable: bool = Field(default=True)
    ai_generated: bool = Field(default=True, alias="aiGenerated")
    orion_extracted: Optional[bool] = Field(default=None, alias="orionExtracted")


def default_modules() -> List[TemplateModule]:
    """Modules used when a template carries none of its own."""
    return [
        TemplateModule(
            name="Hero Section",
            type="layout",
            description="Compelling hero with clear value proposition",
            emphasis="visual-impact",
            animation="hero-entrance",
        ),
        TemplateModule(
            name="Feature Grid",
            type="content",
            description="Showcases key features with visual hierarchy",
            emphasis="information",
            animation="stagger-reveal",
        ),
        TemplateModule(
            name="Call to Action",
            type="conversion",
            description="Conversion-optimized action section",
            emphasis="engagement",
            animation="attention-draw",
        ),
    ]


class DependencyProfile(_WireModel):
    core: List[str] = Field(default_factory=lambda: ["react", "next"])
    styling: List[str] = Field(default_factory=lambda: ["tailwindcss", "framer-motion"])
    utils: List[str] = Field(default_factory=lambda: ["clsx", "date-fns"])
    optional: List[str] = Field(
        default_factory=lambda: ["@headlessui/react", "@heroicons/react"]
    )


class Architecture(_WireModel):
    """Component architecture section."""

    modules: List[TemplateModule] = Field(
        default_factory=default_modules, max_length=MAX_MODULES
    )
    dependencies: DependencyProfile = Field(default_factory=DependencyProfile)
    code_structure: str = Field(default="component-based", alias="codeStructure")
    state_management: str = Field(default="local", alias="stateManagement")
    data_flow: str = Field(default="unidirectional", alias="dataFlow")


class Features(_WireModel):
    """Tags and capability section."""

    tags: List[str] = Field(
        default_factory=lambda: list(DEFAULT_TAGS), max_length=MAX_TAGS
    )
    capabilities: List[str] = Field(
        default_factory=lambda: ["mobile-first", "seo-optimized"]
    )
    integrations: List[str] = Field(
        default_factory=lambda: ["analytics", "performance-monitoring"]
    )
    content_types: List[str] = Field(
        default_factory=lambda: ["text", "images", "interactive"],
        alias="contentTypes",
    )

    @field_validator("tags")
    @classmethod
    def _tags_unique(cls, value: List[str]) -> List[str]:
        if len(set(value)) != len(value):
            raise ValueError("tags must be unique")
        return value


class Provenance(_WireModel):
    """Where the template came from."""

    source_memory_id: Optional[str] = Field(default=None, alias="sourceMemoryId")
    context_type: str = Field(default="design_templates", alias="contextType")
    generation_method: GenerationMethod = Field(
        default=GenerationMethod.RAG_ENHANCED, alias="generationMethod"
    )
    learning_data: Dict[str, Any] = Field(default_factory=dict, alias="learningData")
    user_personalization: Dict[str, Any] = Field(
        default_factory=dict, alias="userPersonalization"
    )
    adaptive_features: List[str] = Field(
        default_factory=list, alias="adaptiveFeatures"
    )


class Deployment(_WireModel):
    framework: str = Field(default="React")
    build_tool: str = Field(default="Vite", alias="buildTool")
    hosting: str = Field(default="static")
    cdn: bool = Field(default=True)
    monitoring: bool = Field(default=True)


_BEST_FOR: Dict[str, List[str]] = {
    "landing": ["Product launches", "Marketing campaigns", "Lead generation"],
    "dashboard": ["Data visualization", "Admin interfaces", "Analytics"],
    "portfolio": ["Creative showcases", "Professional profiles", "Case studies"],
    "ecommerce": ["Product catalogs", "Online stores", "Marketplace"],
    "blog": ["Content publishing", "Editorial sites", "News platforms"],
}

_BEHAVIORS: Dict[Complexity, List[str]] = {
    Complexity.COMPLEX: ["Extended engagement", "Deep exploration", "Return visits"],
    Complexity.MEDIUM: ["Moderate browsing", "Task completion", "Social sharing"],
    Complexity.SIMPLE: ["Quick scanning", "Single actions", "Mobile usage"],
}


class Template(_WireModel):
    """Canonical template recommendation."""

    id: str = Field(description="Identifier, unique within one pipeline run")
    metadata: TemplateMetadata = Field(default_factory=TemplateMetadata)
    design: DesignProfile = Field(default_factory=DesignProfile)
    styling: Styling = Field(default_factory=Styling)
    interaction: Interaction = Field(default_factory=Interaction)
    architecture: Architecture = Field(default_factory=Architecture)
    features: Features = Field(default_factory=Features)
    ai: Provenance = Field(default_factory=Provenance)
    deployment: Deployment = Field(default_factory=Deployment)

    def infer_best_for(self) -> List[str]:
        return list(
            _BEST_FOR.get(self.metadata.purpose, ["General websites", "Flexible layouts"])
        )

    def infer_behaviors(self) -> List[str]:
        return list(_BEHAVIORS.get(self.metadata.complexity, ["Balanced interaction"]))

    def to_playground_format(self) -> Dict[str, Any]:
        """
        Flatten the template into the card view used by the playground UI.

        Returns:
            Dictionary keyed by camelCase wire names
        """
        return {
            "id": self.id,
            "name": self.metadata.name,
            "summary": self.design.summary,
            "reason": self.design.reason,
            "palette": list(self.styling.palette.primary),
            "motionPresets": list(self.interaction.motion_presets),
            "modules": [
                m.model_dump(by_alias=True, exclude_none=True)
                for m in self.architecture.modules
            ],
            "tags": list(self.features.tags),
            "contextType": self.ai.context_type,
            "orionScore": self.design.orion_score,
            "insights": {
                "bestFor": self.infer_best_for(),
                "behaviors": self.infer_behaviors(),
            },
        }


# ---------------------------------------------------------------------------
# Pipeline inputs and intermediates
# ---------------------------------------------------------------------------


class RetrievalResult(_WireModel):
    """A scored snippet returned by the semantic memory service."""

    id: Optional[str] = Field(default=None, description="Memory identifier")
    content: str = Field(default="", description="Retrieved text")
    similarity: Optional[float] = Field(
        default=None, ge=0, le=1, description="Similarity to the query"
    )

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Optional[str]:
        return None if value is None else str(value)

    @field_validator("content", mode="before")
    @classmethod
    def _coerce_content(cls, value: Any) -> str:
        return "" if value is None else str(value)


class SearchOutcome(BaseModel):
    """Tagged result of one memory search call."""

    query: str
    status: SearchStatus
    results: List[RetrievalResult] = Field(default_factory=list)
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status == SearchStatus.SUCCESS


class PatternCharacteristics(_WireModel):
    """Metadata that synthetic templates impersonate."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    purpose: str
    complexity: Complexity
    focus_areas: Tuple[str, ...] = Field(default=(), alias="focusAreas")


class Pattern(_WireModel):
    """Retrieval queries and characteristics for one context."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    context_key: str = Field(alias="contextKey")
    search_queries: Tuple[str, ...] = Field(alias="searchQueries")
    characteristics: PatternCharacteristics


class ExtractedFeatures(_WireModel):
    """Design features derived from one retrieved snippet."""

    name: str
    summary: str
    palette: List[str]
    motion_presets: List[str] = Field(alias="motionPresets")
    modules: List[TemplateModule]
    tags: List[str]
    category: str
    visual_style: str = Field(alias="visualStyle")
    features: List[str] = Field(default_factory=list)


class TemplateSeed(_WireModel):
    """
    Partially specified template handed to the assembler.

    Unset fields are filled with template defaults during assembly.
    """

    name: Optional[str] = None
    summary: Optional[str] = None
    reason: Optional[str] = None
    confidence: Optional[float] = None
    orion_score: Optional[float] = Field(default=None, alias="orionScore")
    context_type: Optional[str] = Field(default=None, alias="contextType")
    source_memory_id: Optional[str] = Field(default=None, alias="sourceMemoryId")
    category: Optional[str] = None
    complexity: Optional[Complexity] = None
    purpose: Optional[str] = None
    visual_style: Optional[str] = Field(default=None, alias="visualStyle")
    palette: Optional[List[str]] = None
    motion_presets: Optional[List[str]] = Field(default=None, alias="motionPresets")
    modules: Optional[List[TemplateModule]] = None
    tags: Optional[List[str]] = None
    generation_method: GenerationMethod = Field(
        default=GenerationMethod.RAG_ENHANCED, alias="generationMethod"
    )
    learning_data: Dict[str, Any] = Field(default_factory=dict, alias="learningData")


# ---------------------------------------------------------------------------
# Request / response envelope
# ---------------------------------------------------------------------------


class RecommendationRequest(_WireModel):
    """Caller input, validated before the pipeline starts."""

    context_key: Optional[str] = Field(default=None, alias="contextKey")
    limit: Optional[int] = Field(default=None, ge=1, description="Templates to return")


class RetrievalStats(_WireModel):
    queries: int = 0
    failed_queries: int = Field(default=0, alias="failedQueries")
    results_collected: int = Field(default=0, alias="resultsCollected")


class RecommendationMetadata(_WireModel):
    """Run metadata attached to a recommendation response."""

    context: str
    pattern: Optional[PatternCharacteristics] = None
    enhanced_schemas: bool = Field(default=True, alias="enhancedSchemas")
    orion_powered: bool = Field(default=False, alias="orionPowered")
    generation_time: int = Field(
        default=0, alias="generationTime", description="Epoch milliseconds"
    )
    fallback_mode: bool = Field(default=False, alias="fallbackMode")
    retrieval: Optional[RetrievalStats] = None


class RecommendationResponse(_WireModel):
    """Success envelope returned for every pipeline invocation."""

    success: bool = True
    templates: List[Template]
    metadata: RecommendationMetadata
    context_used: List[str] = Field(alias="contextUsed")
    confidence: float = Field(ge=0, le=1)
    timestamp: str = Field(description="ISO-8601 creation time")

    def to_api_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")

    def playground_templates(self) -> List[Dict[str, Any]]:
        return [template.to_playground_format() for template in self.templates]
