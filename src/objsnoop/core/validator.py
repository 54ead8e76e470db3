from __future__ import annotations

"""
Configuration Validation Service.

Gatekeeper between untrusted configuration sources (config file, CLI) and the
introspection engine. Coerces types, enforces numeric bounds and fills
missing keys with defaults so that settings derived from the result are
always usable.
"""

import logging
from typing import Any, Dict, List, Tuple

from objsnoop.domain.config import get_default_config

logger = logging.getLogger(__name__)

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Minimum accepted value per integer field
_INT_FIELDS: Dict[str, int] = {
    "max_string_length": 1,
    "max_collection_count": 0,
    "max_expand_items": 1,
    "float_precision": 0,
    "expand_depth": 0,
}


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a configuration dictionary.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raise on invalid values instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized configuration and warnings.

    Raises:
        TypeError: In strict mode, on a type mismatch.
        ValueError: In strict mode, on an out-of-range value.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    for field, minimum in _INT_FIELDS.items():
        merged[field] = _as_int(merged.get(field), defaults[field], minimum, field, warnings, strict)

    merged["show_properties"] = _as_bool(
        merged.get("show_properties"), defaults["show_properties"], "show_properties", warnings, strict
    )

    merged["not_applicable_patterns"] = [
        p.lower() for p in _as_list_str(
            merged.get("not_applicable_patterns"),
            defaults["not_applicable_patterns"],
            "not_applicable_patterns",
            warnings,
            strict,
        )
    ]

    merged["log_level"] = _normalize_log_level(
        _as_str(merged.get("log_level"), defaults["log_level"], "log_level", warnings, strict),
        defaults["log_level"],
        warnings,
        strict,
    )

    for w in warnings:
        logger.debug(f"Config: {w}")

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_int(
        value: Any,
        fallback: int,
        minimum: int,
        field: str,
        warnings: List[str],
        strict: bool,
) -> int:
    """Coerce to int and enforce the lower bound."""
    if value is None:
        return fallback

    result: Any = None
    if isinstance(value, int) and not isinstance(value, bool):
        result = value
    elif not strict and isinstance(value, str):
        try:
            result = int(value.strip())
            warnings.append(f"Field '{field}' converted from '{value}' to {result}.")
        except ValueError:
            result = None

    if result is None:
        msg = f"Invalid field '{field}': expected int, received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback

    if result < minimum:
        msg = f"Invalid field '{field}': {result} is below the minimum of {minimum}."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback

    return result


def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce common boolean spellings into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_list_str(value: Any, fallback: List[str], field: str, warnings: List[str], strict: bool) -> List[str]:
    """Ensure input is a list of non-empty strings, accepting CSV text."""
    if value is None:
        return list(fallback)

    if isinstance(value, str) and not strict:
        items = [x.strip() for x in value.split(",") if x.strip()]
        if items:
            warnings.append(f"Field '{field}' converted from CSV string to list.")
            return items
        return list(fallback)

    if isinstance(value, (list, tuple)):
        out: List[str] = []
        for i, item in enumerate(value):
            if isinstance(item, str):
                s = item.strip()
                if s:
                    out.append(s)
            else:
                msg = f"Invalid item in '{field}[{i}]': expected str."
                if strict:
                    raise TypeError(msg)
                warnings.append(f"{msg} Item discarded.")
        return out if out else list(fallback)

    msg = f"Invalid field '{field}': expected list[str], received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return list(fallback)


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: DOMAIN NORMALIZATION
# -----------------------------------------------------------------------------

def _normalize_log_level(level: str, fallback: str, warnings: List[str], strict: bool) -> str:
    """Upper-case the level name and reject unknown ones."""
    upper = level.upper()
    if upper == "WARN":
        upper = "WARNING"
    if upper in _VALID_LOG_LEVELS:
        return upper

    msg = f"Invalid log level '{level}'."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using {fallback}.")
    return fallback
