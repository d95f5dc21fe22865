"""Logging helpers used by the trellis-cassandra CLI and bootstrap.

Console output goes through Rich. The flight recorder keeps recent records
in memory at DEBUG granularity and writes them to a file once something goes
wrong, which for this package mostly means the cluster being unreachable.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import MemoryHandler
from typing import TYPE_CHECKING

import cassandra
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from logging import Logger
    from pathlib import Path

# pylint: disable=too-few-public-methods

PROJECT_PREFIX = "trellis_cassandra"
FLIGHT_RECORDER_CAPACITY = 2000


class ThirdPartyPrefixFilter(logging.Filter):
    """Set `record.prefix` to "[cassandra]"-style tokens for foreign loggers.

    Project records get an empty prefix. Never drops a record.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith(PROJECT_PREFIX):
            record.prefix = ""
        else:
            record.prefix = f"[{record.name.split('.')[0]}]"
        return True


def config_console_handler(
    level: int = logging.INFO, debug_mode: bool = False, color: bool = True
) -> RichHandler:
    """Build the stderr console handler.

    Args:
        level: Minimum console level; debug mode forces DEBUG.
        debug_mode: Show timestamps, logger names and source paths instead of
            the third-party prefix.
        color: Let Rich pick a color system; False disables color.

    Returns:
        RichHandler: Handler ready to attach to the root logger.
    """
    console = Console(color_system="auto" if color else None, stderr=True)
    handler = RichHandler(
        level=logging.DEBUG if debug_mode else level,
        console=console,
        rich_tracebacks=True,
        show_time=False,
        show_path=debug_mode,
        enable_link_path=debug_mode,
    )
    if debug_mode:
        handler.setFormatter(logging.Formatter("%(asctime)s %(name)s: %(message)s"))
    else:
        handler.setFormatter(logging.Formatter("%(prefix)s %(message)s"))
        handler.addFilter(ThirdPartyPrefixFilter())
    return handler


def config_flight_recorder(
    path: Path,
    *,
    flush_on_close: bool = False,
    capacity: int = FLIGHT_RECORDER_CAPACITY,
) -> MemoryHandler:
    """Build a memory handler that dumps to *path* on WARNING or above.

    Connection retries log at WARNING, so a stalled startup leaves its DEBUG
    history on disk.

    Args:
        path: File the buffer is written to; truncated on first write.
        flush_on_close: Also write the buffer when the handler is closed.
        capacity: Records kept in memory before a forced flush.
    """
    file_handler = logging.FileHandler(path, mode="w", encoding="utf-8", delay=True)
    file_handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(threadName)s] %(levelname)s %(name)s:%(lineno)d: %(message)s"
        )
    )
    return MemoryHandler(
        capacity=capacity,
        flushLevel=logging.WARNING,
        target=file_handler,
        flushOnClose=flush_on_close,
    )


def log_startup(
    logger: Logger,
    *,
    app_version: str,
    level: int,
    recorder: MemoryHandler | None,
    logger_levels: dict[str, int],
) -> None:
    """Log a one-line INFO summary, then DEBUG diagnostics.

    The DEBUG lines name the Python and cassandra-driver versions, the flight
    recorder settings and the per-logger overrides.
    """
    logger.info(
        "trellis-cassandra %s - console=%s, flight-recorder=%s",
        app_version,
        logging.getLevelName(level),
        "OFF" if recorder is None else "ON",
    )
    logger.debug("Python: %s", sys.version.split()[0])
    logger.debug("cassandra-driver: %s", cassandra.__version__)
    if recorder is not None:
        logger.debug(
            "Flight recorder: path=%s, capacity=%s, flush_on_close=%s",
            getattr(recorder.target, "baseFilename", "<none>"),
            recorder.capacity,
            recorder.flushOnClose,
        )
    logger.debug(
        "Per-logger overrides: %s",
        {name: logging.getLevelName(lvl) for name, lvl in logger_levels.items()}
        or "<none>",
    )
