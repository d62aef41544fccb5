"""
Logging configuration for the ``testgen`` command.

The CLI group configures the root logger once per invocation; library
modules only do ``logger = logging.getLogger(__name__)``. Diagnostics
from a round are mirrored here by the Messager, so ``-v`` shows the
NOTE lines and the default level shows warnings and errors.

Console level: ``--debug`` / ``-v`` / ``-q``, else TESTGEN_LOG_LEVEL,
else WARNING. TESTGEN_LOG_FILE adds a file handler whose level is
TESTGEN_LOG_FILE_LEVEL (default: the console level).
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping

ENV_LOG_LEVEL = "TESTGEN_LOG_LEVEL"
ENV_LOG_FILE = "TESTGEN_LOG_FILE"
ENV_LOG_FILE_LEVEL = "TESTGEN_LOG_FILE_LEVEL"

# (max level, format, datefmt): first row whose level is >= the console level wins
_CONSOLE_FORMATS = (
    (logging.DEBUG, "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s", "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
)
_CONSOLE_DEFAULT_FORMAT = "%(message)s"

_FILE_FORMAT = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _console_formatter(level: int) -> logging.Formatter:
    for threshold, fmt, datefmt in _CONSOLE_FORMATS:
        if level <= threshold:
            return logging.Formatter(fmt, datefmt=datefmt)
    return logging.Formatter(_CONSOLE_DEFAULT_FORMAT)


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Replace the root logger's handlers with a stderr handler and, optionally, a file.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path of a log file.
        log_file_level: Level name for the file; defaults to ``level``.
    """
    console_level = _parse_level(level)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(_console_formatter(console_level))

    handlers: list[logging.Handler] = [console]
    root_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
        handlers.append(fh)
        root_level = min(root_level, file_level)

    root = logging.getLogger()
    root.handlers.clear()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(root_level)

    # A stream closed under us (CliRunner) must not break a run
    logging.raiseExceptions = False


def level_from_flags(
    *,
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    env: Mapping[str, str] | None = None,
) -> str:
    """Pick the console level name from CLI flags, then the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    env = os.environ if env is None else env
    return env.get(ENV_LOG_LEVEL, "WARNING")


def setup_from_env(level: str, env: Mapping[str, str] | None = None) -> None:
    """``setup_logging`` with file output taken from the environment."""
    env = os.environ if env is None else env
    setup_logging(
        level=level,
        log_file=env.get(ENV_LOG_FILE),
        log_file_level=env.get(ENV_LOG_FILE_LEVEL),
    )


def _parse_level(level: str | None) -> int:
    """Level name → numeric level; unknown names fall back to WARNING."""
    numeric = getattr(logging, (level or "").upper(), None)
    return numeric if isinstance(numeric, int) else logging.WARNING
