"""Shared fixtures: an in-memory filesystem, a recording runner and log sink."""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

import pytest

from resolve_local_deps.cli.ui import LogLevel
from resolve_local_deps.runner import OutputMode

PROJECT_ROOT = Path("/fake/project")


class FakeFileSystem:
    """In-memory ``FileSystem`` that records every mutation in order."""

    def __init__(self) -> None:
        self.files: dict[Path, bytes] = {}
        self.dirs: set[Path] = {Path("/")}
        self.links: dict[Path, Path] = {}
        self.operations: list[tuple[str, Path]] = []
        self.fail_copy_for: set[Path] = set()

    # -- setup helpers -----------------------------------------------------

    def add_dir(self, path: Path) -> None:
        for part in (path, *path.parents):
            self.dirs.add(part)

    def add_file(self, path: Path, content: bytes | str = b"") -> None:
        self.add_dir(path.parent)
        self.files[path] = content.encode() if isinstance(content, str) else content

    def add_symlink(self, path: Path, target: Path) -> None:
        self.add_dir(path.parent)
        self.links[path] = target

    def tree(self, root: Path) -> set[str]:
        """Relative paths of every file and directory below *root*."""
        entries = {p for p in (*self.files, *self.dirs) if root in p.parents}
        return {p.relative_to(root).as_posix() for p in entries}

    def ops(self, kind: str) -> list[Path]:
        return [path for op, path in self.operations if op == kind]

    # -- FileSystem protocol -----------------------------------------------

    def _follow(self, path: Path) -> Path:
        while path in self.links:
            path = self.links[path]
        return path

    def exists(self, path: Path) -> bool:
        target = self._follow(path)
        return target in self.files or target in self.dirs

    def is_symlink(self, path: Path) -> bool:
        return path in self.links

    def is_dir(self, path: Path) -> bool:
        return self._follow(path) in self.dirs

    def is_file(self, path: Path) -> bool:
        return self._follow(path) in self.files

    def list_entries(self, path: Path) -> List[str]:
        path = self._follow(path)
        if path not in self.dirs:
            raise FileNotFoundError(str(path))
        children = {p.name for p in (*self.files, *self.dirs, *self.links) if p.parent == path and p != path}
        return sorted(children)

    def make_dirs(self, path: Path) -> None:
        for part in reversed((path, *path.parents)):
            if part not in self.dirs:
                self.dirs.add(part)
                self.operations.append(("mkdir", part))

    def copy_file(self, source: Path, destination: Path) -> None:
        if source in self.fail_copy_for:
            raise PermissionError(13, "Permission denied", str(source))
        if destination.parent not in self.dirs:
            raise FileNotFoundError(str(destination.parent))
        self.files[destination] = self.files[self._follow(source)]
        self.operations.append(("copy", destination))

    def remove_tree(self, path: Path) -> None:
        self.operations.append(("remove", path))
        if path in self.links:
            del self.links[path]
            return
        for store in (self.files, self.links):
            for p in [p for p in store if p == path or path in p.parents]:
                del store[p]
        self.dirs = {p for p in self.dirs if not (p == path or path in p.parents)}

    def read_text(self, path: Path) -> str:
        target = self._follow(path)
        if target not in self.files:
            raise FileNotFoundError(str(path))
        return self.files[target].decode("utf-8")


class RecordingRunner:
    """``CommandRunner`` that records invocations instead of spawning them."""

    def __init__(self, status: int = 0) -> None:
        self.status = status
        self.statuses: dict[str, int] = {}
        self.calls: list[tuple[str, list[str], Path, OutputMode]] = []

    def run(self, program: str, args: Sequence[str], cwd: Path, output: OutputMode) -> int:
        self.calls.append((program, list(args), cwd, output))
        return self.statuses.get(cwd.name, self.status)


class LogRecorder:
    """Log sink capturing ``(message, level, suppressed)`` triples."""

    def __init__(self) -> None:
        self.records: list[tuple[str, LogLevel, bool]] = []

    def __call__(self, message: str, level: LogLevel = LogLevel.INFO, suppressed: bool = False) -> None:
        self.records.append((message, level, suppressed))

    def messages(self, level: LogLevel | None = None) -> list[str]:
        return [m for m, lvl, _ in self.records if level is None or lvl == level]


@pytest.fixture()
def fake_fs() -> FakeFileSystem:
    fs = FakeFileSystem()
    fs.add_dir(PROJECT_ROOT)
    return fs


@pytest.fixture()
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture()
def log_sink() -> LogRecorder:
    return LogRecorder()


@pytest.fixture()
def project_root() -> Path:
    return PROJECT_ROOT
