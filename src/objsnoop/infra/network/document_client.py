from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from objsnoop.infra.network.common import DEFAULT_TIMEOUT, USER_AGENT

logger = logging.getLogger(__name__)


def fetch_document(url: str, timeout: int = DEFAULT_TIMEOUT) -> Optional[Dict[str, Any]]:
    """Download a JSON object document, returning None on any failure."""
    headers = {"User-Agent": USER_AGENT, "Accept": "application/json"}
    logger.debug(f"Fetching object document from: {url}")

    try:
        response = requests.get(url, headers=headers, timeout=timeout)
        response.raise_for_status()

        data = response.json()

        if not isinstance(data, dict):
            logger.warning("Network: Received malformed document (Root is not a dictionary).")
            return None

        size_kb = len(response.content) / 1024
        logger.info(f"Network: Document retrieved ({size_kb:.1f} KB).")
        return data

    except requests.exceptions.Timeout:
        logger.warning(f"Network: Document fetch timed out after {timeout}s.")
    except requests.exceptions.RequestException as e:
        logger.error(f"Network: Communication error while fetching document: {e}")
    except ValueError as e:
        logger.error(f"Network: Document is not valid JSON: {e}")

    return None
