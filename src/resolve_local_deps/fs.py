"""Filesystem port used by the copier, installer and materializer.

Every decision the materializer makes is re-derived from the current
on-disk state, so the queries it needs are gathered behind a narrow
``FileSystem`` protocol. ``LocalFileSystem`` is the real implementation;
tests substitute an in-memory fake.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import List, Protocol

logger = logging.getLogger(__name__)


class FileSystem(Protocol):
    """Filesystem operations needed to materialize dependencies."""

    def exists(self, path: Path) -> bool:
        """Return True if *path* exists, following symbolic links."""
        ...

    def is_symlink(self, path: Path) -> bool:
        ...

    def is_dir(self, path: Path) -> bool:
        """Return True if *path* is a directory, following symbolic links."""
        ...

    def is_file(self, path: Path) -> bool:
        """Return True if *path* is a regular file, following symbolic links."""
        ...

    def list_entries(self, path: Path) -> List[str]:
        """Return the names of the entries directly inside *path*."""
        ...

    def make_dirs(self, path: Path) -> None:
        """Create *path* and any missing parents; no-op if it exists."""
        ...

    def copy_file(self, source: Path, destination: Path) -> None:
        """Copy the bytes of *source* to *destination*, overwriting it."""
        ...

    def remove_tree(self, path: Path) -> None:
        """Remove *path* whatever it is. A missing path is not an error."""
        ...

    def read_text(self, path: Path) -> str:
        ...


class LocalFileSystem:
    """``FileSystem`` backed by the real disk via pathlib and shutil."""

    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_symlink(self, path: Path) -> bool:
        return path.is_symlink()

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def is_file(self, path: Path) -> bool:
        return path.is_file()

    def list_entries(self, path: Path) -> List[str]:
        return sorted(entry.name for entry in path.iterdir())

    def make_dirs(self, path: Path) -> None:
        path.mkdir(parents=True, exist_ok=True)

    def copy_file(self, source: Path, destination: Path) -> None:
        logger.debug("copy %s -> %s", source, destination)
        shutil.copyfile(source, destination)

    def remove_tree(self, path: Path) -> None:
        # rmtree refuses symlinks, and only the link itself must go.
        if path.is_symlink() or path.is_file():
            path.unlink(missing_ok=True)
            return
        try:
            shutil.rmtree(path)
        except FileNotFoundError:
            logger.debug("%s vanished before removal", path)

    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")
