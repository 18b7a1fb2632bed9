"""Feature extraction from retrieved memory text."""

from .feature_extractor import FeatureExtractor, PLACEHOLDER_NAME, PLACEHOLDER_SUMMARY
from .strategies import (
    DEFAULT_NAME_STRATEGIES,
    NameStrategy,
    RegexNameStrategy,
    first_match,
)

__all__ = [
    "FeatureExtractor",
    "PLACEHOLDER_NAME",
    "PLACEHOLDER_SUMMARY",
    "DEFAULT_NAME_STRATEGIES",
    "NameStrategy",
    "RegexNameStrategy",
    "first_match",
]
