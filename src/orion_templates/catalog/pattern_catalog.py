"""Pattern catalog mapping context keys to retrieval queries and metadata."""

import logging
import json
from functools import lru_cache
from types import MappingProxyType
from typing import List, Dict, Mapping, Optional

from ..models.template_models import Complexity, Pattern, PatternCharacteristics

logger = logging.getLogger(__name__)

DEFAULT_CONTEXT = "modular_systems"

_CONTEXT_CATEGORIES: Mapping[str, str] = MappingProxyType(
    {
        "landing_pages": "landing",
        "dashboards": "dashboard",
        "portfolios": "portfolio",
        "modular_systems": "system",
    }
)


def _builtin_patterns() -> Dict[str, Pattern]:
    """Built-in design contexts."""
    patterns = [
        Pattern(
            context_key="landing_pages",
            search_queries=(
                "landing page design high conversion",
                "hero section layout engagement",
                "call to action optimization patterns",
            ),
            characteristics=PatternCharacteristics(
                purpose="landing",
                complexity=Complexity.MEDIUM,
                focus_areas=("conversion", "visual-impact", "clear-messaging"),
            ),
        ),
        Pattern(
            context_key="dashboards",
            search_queries=(
                "dashboard layout data visualization",
                "admin interface user experience",
                "analytics presentation patterns",
            ),
            characteristics=PatternCharacteristics(
                purpose="dashboard",
                complexity=Complexity.COMPLEX,
                focus_areas=("data-clarity", "workflow", "functionality"),
            ),
        ),
        Pattern(
            context_key="portfolios",
            search_queries=(
                "portfolio design creative showcase",
                "visual storytelling layouts",
                "artist gallery presentation",
            ),
            characteristics=PatternCharacteristics(
                purpose="portfolio",
                complexity=Complexity.MEDIUM,
                focus_areas=("visual-storytelling", "personal-branding", "creativity"),
            ),
        ),
        Pattern(
            context_key="modular_systems",
            search_queries=(
                "modular design system components",
                "reusable UI component patterns",
                "scalable design architecture",
            ),
            characteristics=PatternCharacteristics(
                purpose="system",
                complexity=Complexity.COMPLEX,
                focus_areas=("modularity", "consistency", "scalability"),
            ),
        ),
    ]
    return {pattern.context_key: pattern for pattern in patterns}


class PatternCatalog:
    """
    Read-only repository of design-context patterns.

    PATTERN: Repository pattern over an immutable mapping
    CRITICAL: lookup() never fails; unknown keys resolve to the default pattern
    GOTCHA: Handle missing or malformed pattern files by using built-ins
    """

    def __init__(
        self,
        pattern_file: Optional[str] = None,
        default_context: str = DEFAULT_CONTEXT,
    ):
        """
        Initialize pattern catalog.

        Args:
            pattern_file: Optional JSON file with a top-level "patterns" list
            default_context: Context key served for unknown lookups
        """
        self.logger = logging.getLogger(__name__)

        if pattern_file:
            patterns = self._load_patterns(pattern_file)
        else:
            patterns = _builtin_patterns()

        if default_context not in patterns:
            self.logger.warning(
                f"Default context '{default_context}' not in catalog, "
                f"using '{DEFAULT_CONTEXT}'"
            )
            default_context = DEFAULT_CONTEXT
            patterns.setdefault(DEFAULT_CONTEXT, _builtin_patterns()[DEFAULT_CONTEXT])

        self._patterns: Mapping[str, Pattern] = MappingProxyType(patterns)
        self.default_context = default_context

    def _load_patterns(self, pattern_file: str) -> Dict[str, Pattern]:
        """Load patterns from a JSON file, falling back to built-ins."""
        try:
            with open(pattern_file, "r", encoding="utf-8") as f:
                data = json.load(f)

            patterns: Dict[str, Pattern] = {}
            for pattern_data in data.get("patterns", []):
                pattern = Pattern.model_validate(pattern_data)
                patterns[pattern.context_key] = pattern

            if not patterns:
                raise ValueError("no patterns defined")

            self.logger.info(f"Loaded {len(patterns)} patterns from {pattern_file}")
            return patterns

        except FileNotFoundError:
            self.logger.warning(
                f"Pattern file not found: {pattern_file}, using built-in patterns"
            )
        except Exception as e:
            self.logger.error(
                f"Failed to load patterns from {pattern_file}: {e}, "
                "using built-in patterns"
            )
        return _builtin_patterns()

    def lookup(self, context_key: Optional[str]) -> Pattern:
        """
        Resolve a context key to its pattern.

        Args:
            context_key: Caller-supplied context identifier

        Returns:
            Matching pattern, or the default pattern for unknown keys
        """
        pattern = self._patterns.get(context_key) if context_key else None
        if pattern is None:
            self.logger.debug(
                f"Unknown context '{context_key}', using '{self.default_context}'"
            )
            return self._patterns[self.default_context]
        return pattern

    @property
    def default_pattern(self) -> Pattern:
        return self._patterns[self.default_context]

    def has_pattern(self, context_key: str) -> bool:
        return context_key in self._patterns

    def context_keys(self) -> List[str]:
        return list(self._patterns.keys())

    def get_all_patterns(self) -> List[Pattern]:
        return list(self._patterns.values())

    @staticmethod
    def category_for(context_key: Optional[str]) -> str:
        """Template category associated with a context key."""
        return _CONTEXT_CATEGORIES.get(context_key or "", "general")


@lru_cache(maxsize=1)
def get_pattern_catalog() -> PatternCatalog:
    """Process-wide built-in catalog, created on first use."""
    return PatternCatalog()
