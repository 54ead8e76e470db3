from __future__ import annotations

"""
Member Failure Classification.

Splits exceptions raised by member getters into benign "does not apply to
this instance" failures and genuine errors.
"""

from typing import Iterable

from objsnoop.domain.errors import NotApplicableError
from objsnoop.domain.models import FailureKind

_BENIGN_TYPES = (NotApplicableError, NotImplementedError)


def failure_message(exc: BaseException) -> str:
    """Return the exception message, falling back to the class name."""
    text = str(exc).strip()
    return text or type(exc).__name__


def classify_failure(exc: BaseException, patterns: Iterable[str]) -> FailureKind:
    """
    Decide whether a getter failure is benign or an error.

    Args:
        exc: The exception raised by the getter.
        patterns: Lower-case message fragments that mark a benign failure.

    Returns:
        FailureKind: NOT_APPLICABLE or ERROR.
    """
    if isinstance(exc, _BENIGN_TYPES):
        return FailureKind.NOT_APPLICABLE

    message = str(exc).lower()
    if message and any(p and p in message for p in patterns):
        return FailureKind.NOT_APPLICABLE

    return FailureKind.ERROR
