"""Package manifest loading and dependency-group merging."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from resolve_local_deps.config import FILE_PREFIX
from resolve_local_deps.errors import ManifestError
from resolve_local_deps.fs import FileSystem, LocalFileSystem

# Merge order matters: a later group overrides an earlier one on a name clash.
DEPENDENCY_GROUPS: tuple[str, ...] = (
    "dependencies",
    "devDependencies",
    "peerDependencies",
    "optionalDependencies",
)


@dataclass(frozen=True)
class DependencySpec:
    """A single ``name -> specifier`` pair from the merged groups."""

    name: str
    specifier: Any

    @property
    def is_local(self) -> bool:
        return isinstance(self.specifier, str) and self.specifier.startswith(FILE_PREFIX)

    @property
    def relative_path(self) -> str:
        """The referenced path with the ``file:`` prefix stripped."""
        if not self.is_local:
            raise ValueError(f"{self.name} is not a file-path dependency: {self.specifier!r}")
        return self.specifier[len(FILE_PREFIX):]


@dataclass
class Manifest:
    """Parsed package manifest; only the dependency groups are kept."""

    path: Path
    dependencies: dict[str, Any] = field(default_factory=dict)
    dev_dependencies: dict[str, Any] = field(default_factory=dict)
    peer_dependencies: dict[str, Any] = field(default_factory=dict)
    optional_dependencies: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, path: Path, data: dict[str, Any]) -> "Manifest":
        groups = [_group(data, key) for key in DEPENDENCY_GROUPS]
        return cls(path, *groups)

    def merged_dependencies(self) -> dict[str, Any]:
        """Merge runtime, development, peer and optional groups, later wins."""
        merged: dict[str, Any] = {}
        for group in (
            self.dependencies,
            self.dev_dependencies,
            self.peer_dependencies,
            self.optional_dependencies,
        ):
            merged.update(group)
        return merged

    def local_dependencies(self) -> list[DependencySpec]:
        """Return the file-path dependencies in merged iteration order."""
        specs = (DependencySpec(name, spec) for name, spec in self.merged_dependencies().items())
        return [spec for spec in specs if spec.is_local]


def _group(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key)
    return dict(value) if isinstance(value, dict) else {}


def load_manifest(path: Path, fs: FileSystem | None = None) -> Manifest:
    """Read and parse the manifest at *path*.

    Raises:
        ManifestError: If the file is missing, unreadable, not JSON, or
            not a JSON object.
    """
    fs = fs or LocalFileSystem()
    if not fs.exists(path):
        raise ManifestError(path, "file not found")
    try:
        raw = fs.read_text(path)
    except OSError as exc:
        raise ManifestError(path, str(exc)) from exc
    except UnicodeDecodeError as exc:
        raise ManifestError(path, f"not valid UTF-8 ({exc})") from exc
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ManifestError(path, f"invalid JSON ({exc})") from exc
    if not isinstance(data, dict):
        raise ManifestError(path, "top-level value must be an object")
    return Manifest.from_dict(path, data)
