from __future__ import annotations

"""
Base Definitions for Property Collectors.

A collector turns one subject into an ordered list of property records plus
the named collections found among its members. Collectors hold no per-walk
state, so a single instance can serve every subject it accepts.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from objsnoop.core.scope import Scope
from objsnoop.domain.models import CollectResult


class Collector(ABC):
    """
    Abstract base class for subject-specific property extraction.
    """

    name: str = "Collector"

    @abstractmethod
    def can_handle(self, subject: Any) -> bool:
        """
        Report whether this collector accepts the subject.

        Must be a pure type check and must not raise.
        """

    @abstractmethod
    def collect(self, subject: Any, scope: Optional[Scope]) -> CollectResult:
        """
        Extract property records and collections from a subject.

        Args:
            subject: The object to inspect.
            scope: Open scope used to describe handle-valued members.

        Returns:
            CollectResult: Records in enumeration order plus named collections.
        """

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"
