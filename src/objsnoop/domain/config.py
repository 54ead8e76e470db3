from __future__ import annotations

"""
Configuration Domain Management.

Handles persistent storage of user preferences using JSON and derives the
immutable introspection settings consumed by the formatter, the collectors
and the tree model. Supports default fallback on missing or corrupted files.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from objsnoop.domain import constants as const
from objsnoop.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_FILE_NAME = "config.json"


def get_config_path() -> str:
    """Resolve the absolute path of the persistent configuration file."""
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)


# -----------------------------------------------------------------------------
# Configuration Models
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class IntrospectionSettings:
    """
    Immutable limits and policies applied during a walk.

    Attributes:
        max_string_length: Strings longer than this are truncated.
        max_collection_count: Exact item count limit for collection summaries.
        max_expand_items: Hard cap on children created per collection node.
        float_precision: Decimal places for geometric components.
        not_applicable_patterns: Lower-case message fragments of benign failures.
    """
    max_string_length: int = const.MAX_STRING_DISPLAY_LENGTH
    max_collection_count: int = const.MAX_COLLECTION_DISPLAY_COUNT
    max_expand_items: int = const.MAX_EXPAND_ITEMS
    float_precision: int = const.FLOAT_PRECISION
    not_applicable_patterns: Tuple[str, ...] = field(
        default_factory=lambda: tuple(const.DEFAULT_NOT_APPLICABLE_PATTERNS)
    )


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Formatting limits
        "max_string_length": const.MAX_STRING_DISPLAY_LENGTH,
        "max_collection_count": const.MAX_COLLECTION_DISPLAY_COUNT,
        "float_precision": const.FLOAT_PRECISION,

        # Expansion
        "max_expand_items": const.MAX_EXPAND_ITEMS,
        "expand_depth": 1,

        # Failure classification
        "not_applicable_patterns": list(const.DEFAULT_NOT_APPLICABLE_PATTERNS),

        # Output
        "show_properties": True,

        # Diagnostics
        "log_level": "INFO",
    }


def settings_from_config(config: Dict[str, Any]) -> IntrospectionSettings:
    """
    Build introspection settings from a validated configuration dictionary.

    Args:
        config: Configuration produced by the validator.

    Returns:
        IntrospectionSettings: Frozen settings for one session.
    """
    defaults = get_default_config()
    patterns: List[str] = config.get("not_applicable_patterns", defaults["not_applicable_patterns"])
    return IntrospectionSettings(
        max_string_length=int(config.get("max_string_length", defaults["max_string_length"])),
        max_collection_count=int(config.get("max_collection_count", defaults["max_collection_count"])),
        max_expand_items=int(config.get("max_expand_items", defaults["max_expand_items"])),
        float_precision=int(config.get("float_precision", defaults["float_precision"])),
        not_applicable_patterns=tuple(p.lower() for p in patterns),
    )


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config() -> Dict[str, Any]:
    """
    Load the persisted configuration merged over the defaults.

    Returns:
        Dict[str, Any]: The merged configuration, or defaults on failure.
    """
    config = get_default_config()
    path = get_config_path()

    if not os.path.exists(path):
        logger.debug("Config file not found. Returning defaults.")
        return config

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)

        if not isinstance(data, dict):
            logger.warning("Corrupted config file. Resetting to defaults.")
            return config

        data.pop("version", None)
        config.update(data)
        return config

    except Exception as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return config


def save_config(config: Dict[str, Any]) -> bool:
    """
    Persist the configuration to disk with the current version stamp.

    Args:
        config: The configuration dictionary to save.

    Returns:
        bool: True if the file was written.
    """
    path = get_config_path()
    try:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        payload = dict(config)
        payload["version"] = const.CURRENT_CONFIG_VERSION
        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=4)
        logger.info(f"Configuration saved to {path}")
        return True
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")
        return False
