"""Services package for the template engine."""

from .template_service import TemplateRecommendationService

__all__ = [
    "TemplateRecommendationService",
]
