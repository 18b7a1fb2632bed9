"""Ordered name-extraction strategies."""

import re
from abc import ABC, abstractmethod
from typing import Optional, Sequence

# Upper bound on how much text a regex strategy scans
MAX_NAME_SCAN_CHARS = 2000


class NameStrategy(ABC):
    """
    A pure text -> optional name function.

    CRITICAL: Strategies must be total; return None instead of raising
    """

    name: str = "base"

    @abstractmethod
    def __call__(self, text: str) -> Optional[str]:
        """
        Try to derive a template name.

        Args:
            text: Source text

        Returns:
            Extracted name, or None when the strategy does not apply
        """
        pass


class RegexNameStrategy(NameStrategy):
    """Returns the first capture group of a case-insensitive regex."""

    def __init__(self, name: str, pattern: str):
        self.name = name
        self.regex = re.compile(pattern, re.IGNORECASE)

    def __call__(self, text: str) -> Optional[str]:
        match = self.regex.search(text[:MAX_NAME_SCAN_CHARS])
        if not match:
            return None
        value = match.group(1).strip()
        return value or None

    def __repr__(self) -> str:
        return f"RegexNameStrategy({self.name!r})"


# Earlier strategies win.
DEFAULT_NAME_STRATEGIES: Sequence[NameStrategy] = (
    RegexNameStrategy(
        "action_phrase",
        r"(?:created|built|implemented|designed)\s+"
        r"([A-Z][^.!?]*(?:component|template|layout|design|interface|system))",
    ),
    RegexNameStrategy(
        "design_noun",
        r"([A-Z][^.!?]*(?:template|design|layout|component|interface|system))",
    ),
    RegexNameStrategy(
        "orion_phrase",
        r"ORION[^.!?]*(?:enhanced|powered|integrated)\s+([A-Z][^.!?]*)",
    ),
)


def first_match(strategies: Sequence[NameStrategy], text: str) -> Optional[str]:
    """Evaluate strategies in order and return the first non-None result."""
    for strategy in strategies:
        value = strategy(text)
        if value is not None:
            return value
    return None
