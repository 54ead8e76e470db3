from __future__ import annotations

from .config import LoggingConfig, logging_config_from
from .context import StoreContextFilter, store_context
from .core import configure_logging, get_logger, shutdown_logging

__all__ = [
    "LoggingConfig",
    "StoreContextFilter",
    "configure_logging",
    "get_logger",
    "logging_config_from",
    "shutdown_logging",
    "store_context",
]
