"""trellis-cassandra CLI entry point.

Defines the top-level ``trellis-cassandra`` command (via Click-Extra), which
configures console logging and the flight recorder, and registers the
subcommands.

Commands
- ``trellis-cassandra connect``: establish the session, creating the schema if missing.
- ``trellis-cassandra ddl``: print the statements the schema bootstrap issues.

Examples
    $ trellis-cassandra --version
    $ TRELLIS_CASSANDRA_ADDRESS=127.0.0.1 TRELLIS_CASSANDRA_PORT=9042 \\
      TRELLIS_CASSANDRA_BINARY_SERVICE=true trellis-cassandra -v connect
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import click
import click_extra as clickx
from platformdirs import user_log_dir

from trellis_cassandra import __version__
from trellis_cassandra.logging import (
    config_console_handler,
    config_flight_recorder,
    log_startup,
)

from .commands import connect, ddl
from .helpers import parse_log_level

if TYPE_CHECKING:
    from logging import Handler

logger = logging.getLogger(__name__)


HELP = """trellis-cassandra command-line interface.

    Connects a Trellis repository to its Cassandra cluster: waits for the
    cluster to become reachable, creates the Trellis keyspace and tables when
    they are missing, and reports what it found.
    """


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    help="Show one more level below WARNING per repetition (-v INFO, -vv DEBUG).",
    default=0,
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    help="Hide one more level above WARNING per repetition.",
    default=0,
)
@click.option(
    "--debug/--no-debug",
    is_flag=True,
    help="DEBUG console output with logger names and source locations.",
    default=False,
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="File the flight recorder writes to.",
    default=Path(user_log_dir("trellis-cassandra", appauthor=False, ensure_exists=True))
    / "latest.log",
    envvar="TRELLIS_CASSANDRA_LOG_PATH",
    show_default=True,
    show_envvar=True,
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    is_flag=True,
    help=(
        "Buffer recent DEBUG records and write them to --log-path once a "
        "WARNING is logged, e.g. while the cluster is unreachable."
    ),
    default=True,
    envvar="TRELLIS_CASSANDRA_FLIGHT_RECORDER",
    show_envvar=True,
)
@click.option(
    "--force-flush/--no-force-flush",
    "force_flush_flight_recorder",
    is_flag=True,
    help="Also write the flight recorder buffer to --log-path on exit.",
    default=False,
    envvar="TRELLIS_CASSANDRA_FORCE_FLUSH_FLIGHT_RECORDER",
    show_default=True,
    show_envvar=True,
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    help=(
        "Set MINIMUM LEVEL for specific LOGGERS (NAME=LEVEL). Applies to both "
        "console and flight recorder. Repeatable (e.g. -L cassandra=INFO) or "
        "via TRELLIS_CASSANDRA_LOGGER_LEVELS (comma/space list)."
    ),
    envvar="TRELLIS_CASSANDRA_LOGGER_LEVELS",
    default=("cassandra=ERROR",),
    show_default=True,
    show_envvar=True,
)
@clickx.pass_context
def trellis_cassandra(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path,
    flight_recorder: bool,
    force_flush_flight_recorder: bool,
    logger_levels: dict[str, int],
) -> None:
    """trellis-cassandra command-line interface."""

    # WARNING by default, one level per -v/-q
    level = logging.WARNING - (10 * verbose_count) + (10 * quiet_count)
    level = max(logging.DEBUG, min(logging.CRITICAL, level))

    handlers: list[Handler] = [
        config_console_handler(
            level=level, debug_mode=debug, color=ctx.color is not False
        )
    ]
    recorder = None
    if flight_recorder:
        recorder = config_flight_recorder(
            log_path, flush_on_close=force_flush_flight_recorder
        )
        handlers.append(recorder)

    # root captures everything; the handlers and per-logger levels filter
    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)
    for name, lvl in logger_levels.items():
        logging.getLogger(name).setLevel(lvl)

    log_startup(
        logger,
        app_version=__version__,
        level=level,
        recorder=recorder,
        logger_levels=logger_levels,
    )
    ctx.call_on_close(logging.shutdown)


trellis_cassandra.add_command(connect)
trellis_cassandra.add_command(ddl)
