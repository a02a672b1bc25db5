"""resolve-local-dependencies: turn symlinked ``file:`` packages into real copies.

Usage:
    resolve-local-dependencies
    resolve-local-dependencies --no-install
    resolve-local-dependencies --dev --silent
"""

from resolve_local_deps.errors import (
    ConfigError,
    CopyError,
    LocalDepsError,
    ManifestError,
    MaterializeError,
)
from resolve_local_deps.materializer import (
    DependencyResult,
    DependencyStatus,
    MaterializeOptions,
    MaterializeReport,
    materialize,
)

__version__ = "1.0.0"

__all__ = [
    "ConfigError",
    "CopyError",
    "DependencyResult",
    "DependencyStatus",
    "LocalDepsError",
    "ManifestError",
    "MaterializeError",
    "MaterializeOptions",
    "MaterializeReport",
    "__version__",
    "materialize",
]
