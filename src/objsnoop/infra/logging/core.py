from __future__ import annotations

"""
Logging Bootstrap.

Installs a single QueueHandler on the root logger. A background
QueueListener writes the records to stderr and, when requested, to a
rotating diagnostics file, so slow file I/O never stalls a property walk.
Calling `configure_logging` again replaces the previous installation.
"""

import atexit
import logging
import os
import queue
import sys
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from typing import List, NamedTuple, Optional

from objsnoop.infra.logging.config import DATE_FMT, FILE_FMT, LoggingConfig
from objsnoop.infra.logging.context import StoreContextFilter


class _Installation(NamedTuple):
    handler: QueueHandler
    listener: QueueListener


_active: Optional[_Installation] = None


# ==============================================================================
# PUBLIC API
# ==============================================================================

def configure_logging(cfg: LoggingConfig) -> logging.Logger:
    """
    Route root logger records through a queue to the configured sinks.

    Args:
        cfg: Logging settings.

    Returns:
        logging.Logger: The root logger.
    """
    global _active

    shutdown_logging()

    root = logging.getLogger()
    root.setLevel(cfg.level_int)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(logging.Formatter(cfg.console_fmt))
    sinks: List[logging.Handler] = [console]

    if cfg.log_file:
        file_handler = _open_log_file(cfg)
        if file_handler is not None:
            sinks.append(file_handler)

    log_queue: queue.Queue[logging.LogRecord] = queue.Queue(-1)
    handler = QueueHandler(log_queue)
    # Filters run on the caller's side, where the store context is visible
    handler.addFilter(StoreContextFilter())

    listener = QueueListener(log_queue, *sinks)
    listener.start()
    root.addHandler(handler)

    _active = _Installation(handler, listener)
    return root


def shutdown_logging() -> None:
    """Flush and remove the installation made by `configure_logging`, if any."""
    global _active

    if _active is None:
        return
    installation, _active = _active, None

    logging.getLogger().removeHandler(installation.handler)
    installation.listener.stop()
    for sink in installation.listener.handlers:
        sink.close()


def get_logger(name: str) -> logging.Logger:
    """Return the named logger (usually called with __name__)."""
    return logging.getLogger(name)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _open_log_file(cfg: LoggingConfig) -> Optional[RotatingFileHandler]:
    """Open the rotating diagnostics file, or warn on stderr and skip it."""
    path = os.path.abspath(cfg.log_file or "")
    try:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        handler = RotatingFileHandler(
            path,
            maxBytes=int(cfg.max_bytes),
            backupCount=int(cfg.backup_count),
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"WARNING: Cannot open log file '{path}': {e}\n")
        return None
    handler.setFormatter(logging.Formatter(FILE_FMT, datefmt=DATE_FMT))
    return handler


atexit.register(shutdown_logging)
