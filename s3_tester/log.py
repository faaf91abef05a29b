"""Process-wide leveled logger with console output.

Log records are written to stdout through a Rich console, one line per
record::

    2026-10-19T08:15:02.431Z INF Logger initialized on level 'info'

The level is global to the process and set once by ``init_logger`` when a
subcommand starts.
"""

import logging
import time
from datetime import datetime, timezone
from typing import NoReturn, Optional

from rich.console import Console

from s3_tester.models import Verbosity

LOGGER_NAME = "s3_tester"

TRACE = 5
FATAL = logging.CRITICAL

logging.addLevelName(TRACE, "TRACE")

# Accepted level names, anything else falls back to info
LEVELS = {
    "trace": TRACE,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "err": logging.ERROR,
    "error": logging.ERROR,
}

LEVEL_NAMES = {
    TRACE: "trace",
    logging.DEBUG: "debug",
    logging.INFO: "info",
    logging.WARNING: "warn",
    logging.ERROR: "error",
    FATAL: "fatal",
}

LEVEL_LABELS = {
    TRACE: "TRC",
    logging.DEBUG: "DBG",
    logging.INFO: "INF",
    logging.WARNING: "WRN",
    logging.ERROR: "ERR",
    FATAL: "FTL",
}

LEVEL_STYLES = {
    TRACE: "magenta",
    logging.DEBUG: "dim",
    logging.INFO: "",
    logging.WARNING: "yellow",
    logging.ERROR: "red",
    FATAL: "bold red",
}

# Third-party loggers routed to the console at trace level
LIBRARY_LOGGERS = ("boto3", "botocore", "s3transfer")

logger = logging.getLogger(LOGGER_NAME)


def rfc3339_nano(timestamp_ns: int) -> str:
    """Format a UNIX timestamp in nanoseconds as RFC3339 (UTC)."""
    seconds, nanos = divmod(timestamp_ns, 1_000_000_000)
    moment = datetime.fromtimestamp(seconds, tz=timezone.utc)
    return f"{moment.strftime('%Y-%m-%dT%H:%M:%S')}.{nanos:09d}Z"


def console_time(timestamp_ns: int) -> str:
    """Format a UNIX timestamp in nanoseconds as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    seconds, nanos = divmod(timestamp_ns, 1_000_000_000)
    moment = datetime.fromtimestamp(seconds, tz=timezone.utc)
    return f"{moment.strftime('%Y-%m-%dT%H:%M:%S')}.{nanos // 1_000_000:03d}Z"


class TimestampFilter(logging.Filter):
    """Stamp records with a nanosecond timestamp.

    Sets ``record.time_ns`` and its RFC3339 rendering ``record.rfc3339``.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "time_ns"):
            record.time_ns = time.time_ns()
            record.rfc3339 = rfc3339_nano(record.time_ns)
        return True


class ConsoleFormatter(logging.Formatter):
    """Render a record as ``<time> <LVL> <message> [error="<cause>"]``."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp_ns = getattr(record, "time_ns", None)
        if timestamp_ns is None:
            timestamp_ns = int(record.created * 1_000_000_000)
        label = LEVEL_LABELS.get(record.levelno, record.levelname[:3].upper())

        line = f"{console_time(timestamp_ns)} {label} {record.getMessage()}"

        error = getattr(record, "error", None)
        if error is not None:
            line += f' error="{error}"'
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class ConsoleHandler(logging.Handler):
    """Logging handler writing formatted records to a Rich console."""

    def __init__(self, console: Optional[Console] = None):
        super().__init__()
        # No explicit file: the console resolves sys.stdout on every write
        self.console = console or Console(highlight=False, emoji=False)
        self.setFormatter(ConsoleFormatter())
        self.addFilter(TimestampFilter())

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            self.console.print(
                message,
                style=LEVEL_STYLES.get(record.levelno, ""),
                markup=False,
                highlight=False,
                soft_wrap=True,
            )
        except Exception:
            self.handleError(record)


_handler: Optional[ConsoleHandler] = None


def setup_output(console: Optional[Console] = None) -> ConsoleHandler:
    """Install the console handler on the tool's logger.

    Calling this again replaces the previous handler, so tests can swap
    the console.

    Args:
        console: Console to write to (defaults to a stdout console)

    Returns:
        The installed handler
    """
    global _handler

    if _handler is not None:
        logger.removeHandler(_handler)
        for name in LIBRARY_LOGGERS:
            library_logger = logging.getLogger(name)
            if _handler in library_logger.handlers:
                library_logger.removeHandler(_handler)
                library_logger.setLevel(logging.NOTSET)

    _handler = ConsoleHandler(console)
    logger.addHandler(_handler)
    logger.propagate = False
    return _handler


def parse_level(name: str) -> int:
    """Map a level name to a logging level, defaulting to info."""
    return LEVELS.get(name.strip().lower(), logging.INFO)


def apply_level(name: str) -> int:
    """Set the process-wide log level from its name.

    At trace level the boto3/botocore loggers are routed to the console
    as well, which shows the signed requests on the wire.

    Returns:
        The numeric level now in effect
    """
    level = parse_level(name)
    logger.setLevel(level)

    for library in LIBRARY_LOGGERS:
        library_logger = logging.getLogger(library)
        if _handler is None:
            continue
        if level <= TRACE:
            library_logger.setLevel(logging.DEBUG)
            if _handler not in library_logger.handlers:
                library_logger.addHandler(_handler)
        elif _handler in library_logger.handlers:
            library_logger.removeHandler(_handler)
            library_logger.setLevel(logging.NOTSET)

    return level


def level_name() -> str:
    """Name of the active level, e.g. ``"info"``."""
    return LEVEL_NAMES.get(logger.getEffectiveLevel(), "info")


def init_logger(verbosity: Verbosity = Verbosity.INFO) -> None:
    """Configure output and level, then report the active level."""
    setup_output()
    apply_level(verbosity.value)
    info("Logger initialized on level '%s'", level_name())


def _log(level: int, msg: str, args: tuple, error: Optional[BaseException]) -> None:
    extra = {"error": error} if error is not None else None
    logger.log(level, msg, *args, extra=extra)


def trace(msg: str, *args, error: Optional[BaseException] = None) -> None:
    _log(TRACE, msg, args, error)


def debug(msg: str, *args, error: Optional[BaseException] = None) -> None:
    _log(logging.DEBUG, msg, args, error)


def info(msg: str, *args, error: Optional[BaseException] = None) -> None:
    _log(logging.INFO, msg, args, error)


def warning(msg: str, *args, error: Optional[BaseException] = None) -> None:
    _log(logging.WARNING, msg, args, error)


def error(msg: str, *args, error: Optional[BaseException] = None) -> None:
    _log(logging.ERROR, msg, args, error)


def fatal(
    msg: str,
    *args,
    error: Optional[BaseException] = None,
    exit_code: int = 1,
) -> NoReturn:
    """Log a fatal record and terminate the process.

    Raises:
        SystemExit: Always, with ``exit_code``.
    """
    _log(FATAL, msg, args, error)
    raise SystemExit(exit_code)
