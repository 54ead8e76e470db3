from __future__ import annotations

"""
Domain Constants and Display Markers.

Provides centralized access to introspection limits, the fixed placeholder
strings rendered in place of values, and system versioning.
"""

from typing import List

APP_NAME = "objsnoop"
CURRENT_VERSION = "0.1.0"
CURRENT_CONFIG_VERSION = "1.0.0"

# -----------------------------------------------------------------------------
# INTROSPECTION LIMITS
# -----------------------------------------------------------------------------

MAX_STRING_DISPLAY_LENGTH = 500
MAX_COLLECTION_DISPLAY_COUNT = 100
MAX_EXPAND_ITEMS = 100
FLOAT_PRECISION = 4

# Lower-case fragments that mark a member failure as benign
DEFAULT_NOT_APPLICABLE_PATTERNS: List[str] = [
    "not applicable",
    "not supported",
    "not available for this",
]

# Members probed, in order, when looking for a human-readable name
NAME_LIKE_MEMBERS = ("name", "Name", "label", "title")

# -----------------------------------------------------------------------------
# DISPLAY MARKERS
# -----------------------------------------------------------------------------

NULL_MARKER = "[null]"
NOT_APPLICABLE_MARKER = "[Not Applicable]"
INDEXED_MARKER = "[Indexed Property]"
NULL_HANDLE_MARKER = "[Null Handle]"
ELLIPSIS = "..."
INDEXER_MEMBER_NAME = "[index]"
COUNT_MEMBER_NAME = "Count"
UNKNOWN_TYPE = "Unknown"
