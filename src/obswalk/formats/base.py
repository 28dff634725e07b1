"""
Base tree format interface and registry.

Each format reads a UI tree description and builds a Component tree.
The registry manages format detection and selection.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..dom import Component


class TreeFormat(ABC):
    """Base class for tree description loaders."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name."""
        ...

    @property
    @abstractmethod
    def extensions(self) -> list[str]:
        """File extensions this format handles (e.g., ['.xhtml', '.xml'])."""
        ...

    def detect(self, content: str) -> bool:
        """
        Magic detection: returns True if content looks like this format.
        Default implementation returns False (rely on extension only).
        """
        return False

    @abstractmethod
    def parse(self, content: str) -> Component:
        """
        Parse content into a Component tree and return its root.
        Raises ValueError on malformed input.
        """
        ...


@dataclass
class FormatMatch:
    """Result of format detection."""
    strategy: TreeFormat
    confidence: float  # 0.0 to 1.0


class FormatRegistry:
    """Registry of tree formats with detection and selection."""

    def __init__(self):
        self._strategies: list[TreeFormat] = []
        self._by_extension: dict[str, TreeFormat] = {}
        self._by_name: dict[str, TreeFormat] = {}

    def register(self, strategy: TreeFormat) -> None:
        """Register a tree format."""
        self._strategies.append(strategy)
        self._by_name[strategy.name] = strategy
        for ext in strategy.extensions:
            # First registered wins for extension conflicts
            if ext not in self._by_extension:
                self._by_extension[ext] = strategy

    def get_by_name(self, name: str) -> TreeFormat | None:
        """Get format by name (for --type override)."""
        return self._by_name.get(name)

    def get_by_extension(self, ext: str) -> TreeFormat | None:
        if not ext.startswith('.'):
            ext = '.' + ext
        return self._by_extension.get(ext.lower())

    def detect(self, content: str, filename: str | None = None) -> FormatMatch | None:
        """
        Detect the best format for content.

        Priority:
        1. Extension match (high confidence)
        2. Magic detection (medium confidence)
        """
        if filename:
            ext = self._get_extension(filename)
            if ext and ext in self._by_extension:
                return FormatMatch(strategy=self._by_extension[ext], confidence=1.0)

        for strategy in self._strategies:
            if strategy.detect(content):
                return FormatMatch(strategy=strategy, confidence=0.8)

        return None

    def _get_extension(self, filename: str) -> str | None:
        """Extract lowercase extension from filename."""
        if '.' in filename:
            return '.' + filename.rsplit('.', 1)[-1].lower()
        return None

    @property
    def strategies(self) -> list[TreeFormat]:
        """List all registered formats."""
        return list(self._strategies)


# Global registry instance
registry = FormatRegistry()
