"""Exception hierarchy for local dependency materialization."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .materializer import MaterializeReport


class LocalDepsError(Exception):
    """Base exception for resolve-local-dependencies errors."""
    pass


class ConfigError(LocalDepsError):
    """The project configuration file could not be used."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid configuration in {path}: {reason}")


class ManifestError(LocalDepsError):
    """The project manifest is missing, unreadable or malformed.

    Always fatal for the run: nothing can be materialized without knowing
    which dependencies are declared.
    """

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read manifest {path}: {reason}")


class CopyError(LocalDepsError):
    """Copying one dependency's source tree into the store failed."""

    def __init__(self, name: str, source: Path, destination: Path, cause: OSError):
        self.name = name
        self.source = source
        self.destination = destination
        self.cause = cause
        super().__init__(f"Failed to copy {name} from {source} to {destination}: {cause}")


class MaterializeError(LocalDepsError):
    """One or more dependencies could not be materialized.

    Raised only after every declared dependency has been processed, so a
    failure for one package never prevents work on its siblings.
    """

    def __init__(self, report: "MaterializeReport"):
        self.report = report
        failed = ", ".join(result.name for result in report.failed)
        super().__init__(f"Failed to materialize {len(report.failed)} dependency(ies): {failed}")
