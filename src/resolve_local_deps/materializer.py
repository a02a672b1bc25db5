"""Replace symlinked file-path dependencies in the store with real copies.

For every ``file:`` dependency declared in the project manifest:

1. Skip it unless its store entry exists and is a symbolic link.
2. Remove the link and copy the referenced source tree in its place.
3. Unless installs are disabled, install the copy's own dependencies.

Dependencies are processed one at a time in manifest order. Re-running is
a no-op for anything already materialized, because a real directory in the
store is never touched again.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from resolve_local_deps.cli.ui import LogLevel, LogSink, log as default_log
from resolve_local_deps.config import Settings, load_settings
from resolve_local_deps.copier import copy_tree
from resolve_local_deps.errors import CopyError, MaterializeError
from resolve_local_deps.fs import FileSystem, LocalFileSystem
from resolve_local_deps.installer import InstallOutcome, install_into
from resolve_local_deps.manifest import DependencySpec, load_manifest
from resolve_local_deps.runner import CommandRunner, SubprocessRunner

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MaterializeOptions:
    """Run configuration produced by the command line."""

    suppress_output: bool = False
    skip_install: bool = False
    include_dev: bool = False


class DependencyStatus(Enum):
    MISSING = "missing"
    NOT_SYMLINK = "not_symlink"
    REPLACED = "replaced"
    COPY_FAILED = "copy_failed"


@dataclass
class DependencyResult:
    name: str
    status: DependencyStatus
    source: Path
    destination: Path
    install: InstallOutcome | None = None
    error: CopyError | None = None


@dataclass
class MaterializeReport:
    """What happened to each file-path dependency during one run."""

    project_root: Path
    results: list[DependencyResult] = field(default_factory=list)

    @property
    def replaced(self) -> list[DependencyResult]:
        return [r for r in self.results if r.status is DependencyStatus.REPLACED]

    @property
    def failed(self) -> list[DependencyResult]:
        return [r for r in self.results if r.status is DependencyStatus.COPY_FAILED]


def _materialize_one(
    spec: DependencySpec,
    project_root: Path,
    options: MaterializeOptions,
    settings: Settings,
    fs: FileSystem,
    runner: CommandRunner,
    log: LogSink,
) -> DependencyResult:
    quiet = options.suppress_output
    relative_path = spec.relative_path
    # Relative to the project root, not to the store; normalized lexically.
    source = Path(os.path.abspath(project_root / relative_path))
    destination = project_root / settings.store_dir_name / spec.name

    if not fs.exists(destination):
        log(f"[WARN] {spec.name} not found in {settings.store_dir_name}", LogLevel.WARNING, quiet)
        return DependencyResult(spec.name, DependencyStatus.MISSING, source, destination)

    if not fs.is_symlink(destination):
        log(f"[SKIP] {spec.name} is not a symlink", LogLevel.INFO, quiet)
        return DependencyResult(spec.name, DependencyStatus.NOT_SYMLINK, source, destination)

    log(
        f"[REPLACE] {spec.name}: replacing symlink with copy from {relative_path}",
        LogLevel.INFO,
        quiet,
    )
    try:
        fs.remove_tree(destination)
        copy_tree(source, destination, fs)
    except OSError as exc:
        error = CopyError(spec.name, source, destination, exc)
        logger.debug("copy of %s failed", spec.name, exc_info=True)
        log(f"[ERROR] {error}", LogLevel.ERROR, quiet)
        return DependencyResult(
            spec.name, DependencyStatus.COPY_FAILED, source, destination, error=error
        )

    result = DependencyResult(spec.name, DependencyStatus.REPLACED, source, destination)
    if not options.skip_install:
        result.install = install_into(
            destination,
            include_dev=options.include_dev,
            suppress_output=quiet,
            settings=settings,
            fs=fs,
            runner=runner,
            log=log,
        )
    return result


def materialize(
    options: MaterializeOptions | None = None,
    *,
    project_root: Path | None = None,
    settings: Settings | None = None,
    fs: FileSystem | None = None,
    runner: CommandRunner | None = None,
    log: LogSink | None = None,
) -> MaterializeReport:
    """Materialize every symlinked file-path dependency of a project.

    Args:
        options: Flags from the command line; defaults to all-off.
        project_root: Directory holding the manifest; defaults to the
            current working directory.
        settings: Manifest/store/installer names; loaded from the project
            when omitted.
        fs: Filesystem port; defaults to the real disk.
        runner: Command runner for the installer step.
        log: Output sink taking ``(message, level, suppressed)``.

    Returns:
        A report with one entry per file-path dependency.

    Raises:
        ManifestError: If the manifest is missing or malformed. Nothing
            is touched in that case.
        ConfigError: If ``.local-deps.yaml`` is malformed.
        MaterializeError: If any dependency failed to copy. Raised after
            all other dependencies have been processed.
    """
    options = options or MaterializeOptions()
    project_root = project_root or Path.cwd()
    settings = settings or load_settings(project_root)
    fs = fs or LocalFileSystem()
    runner = runner or SubprocessRunner()
    log = log or default_log

    manifest = load_manifest(project_root / settings.manifest_name, fs)
    report = MaterializeReport(project_root)

    for spec in manifest.local_dependencies():
        report.results.append(
            _materialize_one(spec, project_root, options, settings, fs, runner, log)
        )

    logger.debug(
        "processed %d local dependencies, replaced %d",
        len(report.results),
        len(report.replaced),
    )
    if report.failed:
        raise MaterializeError(report)
    return report
