from __future__ import annotations

from .failures import classify_failure, failure_message
from .formatter import ValueFormatter, find_name, materialize

__all__ = [
    "ValueFormatter",
    "classify_failure",
    "failure_message",
    "find_name",
    "materialize",
]
