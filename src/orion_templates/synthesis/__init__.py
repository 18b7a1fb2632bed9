"""Synthetic template generation."""

from .random_source import RandomSource
from .synthesizer import TemplateSynthesizer

__all__ = [
    "RandomSource",
    "TemplateSynthesizer",
]
