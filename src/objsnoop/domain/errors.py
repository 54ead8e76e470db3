from __future__ import annotations

"""
Introspection Error Taxonomy.

Defines the exception types shared between the backing stores, the collectors
and the tree model. Only scope lifecycle failures are expected to reach the
caller; everything else is contained at the member or item level.
"""


class ScopeError(Exception):
    """
    Raised when a handle cannot be resolved.

    Covers invalid, stale or foreign handles, resolution outside an open
    scope, and attempts to open a second scope on the same store.
    """


class NotApplicableError(Exception):
    """
    Raised by a subject member that does not apply to this instance.

    Collectors render it as a Not Applicable marker instead of an error.
    """


class CollectorSelectionError(RuntimeError):
    """Raised when no registered collector accepts a subject."""
