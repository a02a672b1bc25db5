"""Console output for resolve-local-dependencies.

``log`` is the single sink for user-facing progress lines. Informational
lines go to stdout, warnings and errors to stderr, and nothing at all is
written when the caller passes ``suppressed=True`` (``--silent``), error
lines included.
"""

from __future__ import annotations

import logging
import os
from enum import Enum
from typing import Callable

from rich.console import Console
from rich.logging import RichHandler

DEBUG_ENV_VAR = "RESOLVE_LOCAL_DEPS_DEBUG"

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


class LogLevel(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


_STYLES: dict[LogLevel, str | None] = {
    LogLevel.INFO: None,
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "red",
}

LogSink = Callable[[str, LogLevel, bool], None]


def log(message: str, level: LogLevel = LogLevel.INFO, suppressed: bool = False) -> None:
    """Print *message* unless *suppressed*.

    Markup is disabled so tags such as ``[SKIP]`` are printed verbatim.
    """
    if suppressed:
        return
    level = LogLevel(level)
    target = console if level is LogLevel.INFO else err_console
    target.print(message, style=_STYLES[level], markup=False, soft_wrap=True)


def configure_debug_logging() -> None:
    """Route library diagnostics to stderr when RESOLVE_LOCAL_DEPS_DEBUG is set."""
    if os.environ.get(DEBUG_ENV_VAR, "").strip() in ("", "0"):
        return
    package_logger = logging.getLogger("resolve_local_deps")
    package_logger.setLevel(logging.DEBUG)
    if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
        package_logger.addHandler(RichHandler(console=err_console, show_path=False))
