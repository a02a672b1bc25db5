"""Scoped install of a materialized dependency's own dependencies."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from resolve_local_deps.cli.ui import LogLevel, LogSink, log as default_log
from resolve_local_deps.config import Settings
from resolve_local_deps.fs import FileSystem, LocalFileSystem
from resolve_local_deps.runner import CommandRunner, OutputMode, SubprocessRunner

BASE_INSTALL_ARGS: tuple[str, ...] = ("install", "--no-audit", "--no-fund")
PRODUCTION_FLAG = "--production"


class InstallOutcome(Enum):
    SKIPPED_NO_MANIFEST = "skipped_no_manifest"
    SKIPPED_ALREADY_INSTALLED = "skipped_already_installed"
    INSTALLED = "installed"
    FAILED = "failed"


def build_install_args(include_dev: bool) -> list[str]:
    """Return installer arguments; production-only unless *include_dev*."""
    args = list(BASE_INSTALL_ARGS)
    if not include_dev:
        args.append(PRODUCTION_FLAG)
    return args


def install_into(
    destination: Path,
    *,
    include_dev: bool = False,
    suppress_output: bool = False,
    settings: Settings | None = None,
    fs: FileSystem | None = None,
    runner: CommandRunner | None = None,
    log: LogSink | None = None,
) -> InstallOutcome:
    """Run the package installer inside *destination* when it is needed.

    Skips when the copy has no manifest, or when it already has its own
    dependency store (a previous run installed it). A non-zero exit
    status is logged as an error and reported as ``FAILED``; it is never
    raised, so one package's install cannot block its siblings.
    """
    settings = settings or Settings()
    fs = fs or LocalFileSystem()
    runner = runner or SubprocessRunner()
    log = log or default_log
    label = destination.name

    if not fs.exists(destination / settings.manifest_name):
        log(f"[SKIP] No {settings.manifest_name} in {destination}", LogLevel.INFO, suppress_output)
        return InstallOutcome.SKIPPED_NO_MANIFEST

    if fs.exists(destination / settings.store_dir_name):
        log(f"[SKIP] Dependencies already present for {label}", LogLevel.INFO, suppress_output)
        return InstallOutcome.SKIPPED_ALREADY_INSTALLED

    args = build_install_args(include_dev)
    log(
        f"[INSTALL] Running {settings.installer} {' '.join(args)} in {label}",
        LogLevel.INFO,
        suppress_output,
    )
    output = OutputMode.SUPPRESS if suppress_output else OutputMode.INHERIT
    status = runner.run(settings.installer, args, destination, output)

    if status != 0:
        log(
            f"[ERROR] Failed to install dependencies for {label} (exit status {status})",
            LogLevel.ERROR,
            suppress_output,
        )
        return InstallOutcome.FAILED
    return InstallOutcome.INSTALLED
