"""File system access for the vault.

Every component reaches the disk through the ``FileSystem`` protocol so the
walk, read and write rules can be tested against an in-memory fake. The local
implementation maps OS failures onto the vault error taxonomy: a missing path
is ``NotFoundError``, anything else that goes wrong is ``VaultIOError``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Protocol

from strif import atomic_output_file

from .errors import NotFoundError, VaultIOError


@dataclass(frozen=True)
class DirEntry:
    """One entry of a directory listing."""

    name: str
    is_dir: bool
    is_file: bool


@dataclass(frozen=True)
class FileStat:
    """Timestamps (UTC) and size of a file."""

    modified: datetime
    created: datetime
    size: int


class FileSystem(Protocol):
    """The file operations the vault engine needs."""

    def exists(self, path: Path) -> bool: ...

    def is_dir(self, path: Path) -> bool: ...

    def is_file(self, path: Path) -> bool: ...

    def read_text(self, path: Path) -> str: ...

    def write_text(self, path: Path, contents: str) -> None: ...

    def list_dir(self, path: Path) -> list[DirEntry]: ...

    def stat(self, path: Path) -> FileStat: ...

    def make_dirs(self, path: Path) -> None: ...


def _timestamp(seconds: float) -> datetime:
    return datetime.fromtimestamp(seconds, tz=UTC)


class LocalFileSystem:
    """``FileSystem`` backed by the real disk.

    Writes go to a temporary file that is renamed into place, so a concurrent
    reader (the user's editor, another scan) sees either the old or the new
    content, never a partial file.
    """

    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def is_file(self, path: Path) -> bool:
        return path.is_file()

    def read_text(self, path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise NotFoundError(f"File not found: {path}", str(path)) from e
        except (OSError, UnicodeDecodeError) as e:
            raise VaultIOError(f"Could not read {path}: {e}", str(path)) from e

    def write_text(self, path: Path, contents: str) -> None:
        try:
            with atomic_output_file(path, make_parents=True) as temp_path:
                Path(temp_path).write_text(contents, encoding="utf-8")
        except OSError as e:
            raise VaultIOError(f"Could not write {path}: {e}", str(path)) from e

    def list_dir(self, path: Path) -> list[DirEntry]:
        try:
            children = list(path.iterdir())
        except FileNotFoundError as e:
            raise NotFoundError(f"Directory not found: {path}", str(path)) from e
        except OSError as e:
            raise VaultIOError(f"Could not list {path}: {e}", str(path)) from e

        entries = []
        for child in children:
            try:
                # Walks never follow symlinked folders
                is_dir = child.is_dir() and not child.is_symlink()
                entries.append(DirEntry(child.name, is_dir, child.is_file()))
            except OSError as e:
                raise VaultIOError(f"Could not inspect {child}: {e}", str(child)) from e
        return entries

    def stat(self, path: Path) -> FileStat:
        try:
            st = path.stat()
        except FileNotFoundError as e:
            raise NotFoundError(f"File not found: {path}", str(path)) from e
        except OSError as e:
            raise VaultIOError(f"Could not stat {path}: {e}", str(path)) from e

        # st_birthtime only exists on some platforms; ctime is the usual stand-in
        created = getattr(st, "st_birthtime", st.st_ctime)
        return FileStat(
            modified=_timestamp(st.st_mtime),
            created=_timestamp(created),
            size=st.st_size,
        )

    def make_dirs(self, path: Path) -> None:
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise VaultIOError(f"Could not create directory {path}: {e}", str(path)) from e
