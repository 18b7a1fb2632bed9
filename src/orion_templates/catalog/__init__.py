"""Pattern catalog for design contexts."""

from .pattern_catalog import DEFAULT_CONTEXT, PatternCatalog, get_pattern_catalog

__all__ = [
    "DEFAULT_CONTEXT",
    "PatternCatalog",
    "get_pattern_catalog",
]
