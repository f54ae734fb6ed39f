"""Vault scanning: recursive discovery of note files."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from .config import NOTE_EXTENSION
from .errors import NotFoundError
from .storage import FileSystem, LocalFileSystem

SkipPredicate = Callable[[str], bool]


def is_hidden(name: str) -> bool:
    """Default skip rule: dot-files and dot-directories (``.obsidian``, ``.git``, ...)."""
    return name.startswith(".")


def is_note_file(name: str) -> bool:
    return name.endswith(NOTE_EXTENSION)


def list_notes(
    root: Path,
    fs: FileSystem | None = None,
    skip: SkipPredicate = is_hidden,
) -> list[Path]:
    """List every note under ``root``, at any depth.

    Within a directory, subdirectories are walked before files, each in name
    order, so the result is deterministic for a given tree.

    Args:
        root: Vault root directory.
        fs: File system to walk (defaults to the local disk).
        skip: Entries whose name satisfies this predicate are ignored at every
            depth, directories included.

    Returns:
        Absolute paths of note files in walk order.

    Raises:
        NotFoundError: If root does not exist or is not a directory.
        VaultIOError: If any directory cannot be listed. The scan is not
            best-effort: a partial listing must not look complete.
    """
    fs = fs or LocalFileSystem()
    if not fs.is_dir(root):
        raise NotFoundError(f"Vault root not found: {root}", str(root))

    notes: list[Path] = []

    def walk(directory: Path) -> None:
        entries = sorted(fs.list_dir(directory), key=lambda e: e.name)
        for entry in entries:
            if entry.is_dir and not skip(entry.name):
                walk(directory / entry.name)
        for entry in entries:
            if entry.is_file and not skip(entry.name) and is_note_file(entry.name):
                notes.append(directory / entry.name)

    walk(root)
    return notes
