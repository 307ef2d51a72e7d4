import sys
from typing import Any
from typing import Final

from loguru import logger

from beacon.messages.primitives import LogLevel

CONSOLE_FORMAT: Final[str] = "<level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"


def _dynamic_stderr_sink(message: Any) -> None:
    """Loguru sink that resolves sys.stderr at write time.

    A stream passed to logger.add() is captured once; if it is later swapped out
    (pytest capture, CliRunner) the handler would keep writing to the stale object.
    """
    sys.stderr.write(str(message))
    sys.stderr.flush()


def setup_logging(level: LogLevel) -> None:
    """Replace all loguru handlers with a single console handler at the given level.

    LogLevel.NONE leaves no handlers installed.
    """
    logger.remove()
    if level == LogLevel.NONE:
        return
    logger.add(
        _dynamic_stderr_sink,
        level=level.value,
        format=CONSOLE_FORMAT,
        colorize=False,
        diagnose=False,
    )


def console_level_from_verbose_and_quiet(verbose: int, quiet: bool, default: LogLevel = LogLevel.INFO) -> LogLevel:
    """Map -v/-vv/-q command line flags to a console log level."""
    if quiet:
        return LogLevel.NONE
    if verbose >= 2:
        return LogLevel.TRACE
    if verbose == 1:
        return LogLevel.DEBUG
    return default
