"""Template assembly and ranking."""

from .assembler import DEFAULT_SIMILARITY, TemplateAssembler

__all__ = [
    "DEFAULT_SIMILARITY",
    "TemplateAssembler",
]
