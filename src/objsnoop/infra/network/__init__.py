from __future__ import annotations

"""
Network Communication Infrastructure.

HTTP retrieval of object documents. Exposed as a facade so callers do not
depend on the client module layout.
"""

from objsnoop.infra.network.common import DEFAULT_TIMEOUT, USER_AGENT
from objsnoop.infra.network.document_client import fetch_document

__all__ = [
    "fetch_document",
    "USER_AGENT",
    "DEFAULT_TIMEOUT",
]
