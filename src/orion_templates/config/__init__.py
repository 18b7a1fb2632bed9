"""Configuration package for the template engine."""

from .template_config import TemplateEngineConfig

__all__ = ["TemplateEngineConfig"]
