from __future__ import annotations

"""
Logging Configuration Models.

Maps the validated application configuration onto the settings used to
bootstrap logging. Every record carries the id of the store being inspected
(`%(store)s`), so formats can show which document a diagnostic belongs to.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

CONSOLE_FMT = "%(levelname)s | %(message)s"
DEBUG_CONSOLE_FMT = "%(levelname)s | %(store)s | %(name)s | %(message)s"
FILE_FMT = "%(asctime)s | %(levelname)s | %(store)s | %(name)s | %(message)s"
DATE_FMT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class LoggingConfig:
    """
    Immutable settings for the logging bootstrap.

    Attributes:
        level: Minimum severity name ("DEBUG" ... "CRITICAL").
        log_file: Optional path of a rotating diagnostics file.
        max_bytes: Size at which the diagnostics file rolls over.
        backup_count: Rolled-over files to keep.
    """
    level: str = "INFO"
    log_file: Optional[str] = None
    max_bytes: int = 1024 * 1024
    backup_count: int = 3

    @property
    def level_int(self) -> int:
        value = logging.getLevelName(str(self.level).strip().upper())
        return value if isinstance(value, int) else logging.INFO

    @property
    def console_fmt(self) -> str:
        # Store and logger names only add noise outside debug runs
        return DEBUG_CONSOLE_FMT if self.level_int <= logging.DEBUG else CONSOLE_FMT


def logging_config_from(conf: Dict[str, Any], log_file: Optional[str] = None) -> LoggingConfig:
    """
    Build logging settings from a validated application configuration.

    Args:
        conf: Configuration dictionary (only `log_level` is read).
        log_file: Optional diagnostics file requested on the command line.

    Returns:
        LoggingConfig: Settings for `configure_logging`.
    """
    return LoggingConfig(level=str(conf.get("log_level") or "INFO"), log_file=log_file or None)
