from __future__ import annotations

from objsnoop.domain.constants import CURRENT_VERSION

USER_AGENT = f"objsnoop-Client/{CURRENT_VERSION}"
DEFAULT_TIMEOUT = 10
