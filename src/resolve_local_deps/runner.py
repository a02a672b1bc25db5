"""Command-runner port for the external package installer."""

from __future__ import annotations

import logging
import subprocess
import sys
from enum import Enum
from pathlib import Path
from typing import Protocol, Sequence

logger = logging.getLogger(__name__)

# Exit status reported when the program cannot be found, as a shell would.
COMMAND_NOT_FOUND = 127


class OutputMode(Enum):
    INHERIT = "inherit"
    SUPPRESS = "suppress"


class CommandRunner(Protocol):
    """Runs an external program to completion and returns its exit status."""

    def run(self, program: str, args: Sequence[str], cwd: Path, output: OutputMode) -> int:
        ...


class SubprocessRunner:
    """``CommandRunner`` that blocks on ``subprocess.run``.

    There is no timeout: the installer runs until it exits. On Windows the
    command goes through the shell so that ``npm.cmd`` shims resolve.
    """

    def run(self, program: str, args: Sequence[str], cwd: Path, output: OutputMode) -> int:
        cmd = [program, *args]
        stream = subprocess.DEVNULL if output is OutputMode.SUPPRESS else None
        logger.debug("running %s in %s", " ".join(cmd), cwd)
        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                stdout=stream,
                stderr=stream,
                shell=sys.platform == "win32",
                check=False,
            )
        except FileNotFoundError:
            logger.debug("%s not found on PATH", program)
            return COMMAND_NOT_FOUND
        return result.returncode
