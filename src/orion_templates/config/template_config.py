"""Template engine configuration with environment variable loading."""

import os
from pydantic import BaseModel, Field, model_validator
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class TemplateEngineConfig(BaseModel):
    """Configuration for the template recommendation pipeline."""

    # Semantic memory service
    memory_api_url: str = Field(
        default_factory=lambda: os.getenv("ORION_API_URL", "http://localhost:8081"),
        description="Base URL of the semantic memory service",
    )
    search_threshold: float = Field(
        default_factory=lambda: float(os.getenv("ORION_SEARCH_THRESHOLD", "0.6")),
        ge=0,
        le=1,
        description="Minimum similarity requested from memory search",
    )
    search_timeout_seconds: float = Field(
        default_factory=lambda: float(os.getenv("ORION_SEARCH_TIMEOUT", "10.0")),
        gt=0,
        description="Timeout for a single memory search call (seconds)",
    )
    health_timeout_seconds: float = Field(
        default_factory=lambda: float(os.getenv("ORION_HEALTH_TIMEOUT", "5.0")),
        gt=0,
        description="Timeout for the memory service health probe (seconds)",
    )

    # Pipeline
    default_limit: int = Field(
        default_factory=lambda: int(os.getenv("TEMPLATE_DEFAULT_LIMIT", "6")),
        ge=1,
        description="Number of templates returned when the caller gives no limit",
    )
    default_context: str = Field(
        default_factory=lambda: os.getenv("TEMPLATE_DEFAULT_CONTEXT", "modular_systems"),
        description="Context key used when the caller gives none",
    )
    overfetch_factor: int = Field(
        default=2,
        ge=1,
        description="Collected results are truncated to limit * overfetch_factor",
    )

    # Synthetic scoring
    synthetic_score_min: float = Field(
        default_factory=lambda: float(os.getenv("SYNTHETIC_SCORE_MIN", "0.6")),
        ge=0,
        le=1,
        description="Lower bound (inclusive) for synthetic template scores",
    )
    synthetic_score_max: float = Field(
        default_factory=lambda: float(os.getenv("SYNTHETIC_SCORE_MAX", "0.8")),
        ge=0,
        le=1,
        description="Upper bound (exclusive) for synthetic template scores",
    )

    # Fallback
    fallback_confidence: float = Field(
        default=0.6,
        ge=0,
        le=1,
        description="Aggregate confidence reported in fallback mode",
    )
    fallback_on_total_outage: bool = Field(
        default_factory=lambda: _env_bool("FALLBACK_ON_TOTAL_OUTAGE", True),
        description="Enter fallback mode when every retrieval query failed",
    )

    @model_validator(mode="after")
    def _check_score_range(self) -> "TemplateEngineConfig":
        if self.synthetic_score_min > self.synthetic_score_max:
            raise ValueError(
                f"synthetic_score_min ({self.synthetic_score_min}) exceeds "
                f"synthetic_score_max ({self.synthetic_score_max})"
            )
        return self
