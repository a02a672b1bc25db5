"""Recursive tree copy from a dependency's source into the store."""

from __future__ import annotations

import logging
from pathlib import Path

from resolve_local_deps.fs import FileSystem, LocalFileSystem

logger = logging.getLogger(__name__)


def copy_tree(source: Path, destination: Path, fs: FileSystem | None = None) -> None:
    """Mirror the directory tree at *source* into *destination*.

    The destination (and any missing parents) is created first, then each
    entry of *source* is either recursed into or copied byte for byte,
    overwriting existing files. Symbolic links inside the source are
    followed. Sockets, FIFOs and device nodes are skipped.

    Any ``OSError`` propagates to the caller and aborts the copy.

    Args:
        source: Existing, readable directory to copy from. Never modified.
        destination: Directory to populate.
        fs: Filesystem port; defaults to the real disk.
    """
    fs = fs or LocalFileSystem()
    fs.make_dirs(destination)

    for name in fs.list_entries(source):
        src_path = source / name
        dest_path = destination / name
        if fs.is_dir(src_path):
            copy_tree(src_path, dest_path, fs)
        elif fs.is_file(src_path):
            fs.copy_file(src_path, dest_path)
        elif fs.is_symlink(src_path):
            raise FileNotFoundError(
                f"Unresolvable symbolic link (broken or looping) in source tree: {src_path}"
            )
        else:
            logger.warning("Skipping special file %s", src_path)
