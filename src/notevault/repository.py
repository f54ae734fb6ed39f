"""Note repository: resolves identifiers and materializes Note values."""

from __future__ import annotations

import logging
import posixpath
from collections.abc import Iterator
from pathlib import Path, PurePosixPath

from .config import NOTE_EXTENSION
from .errors import InvalidPathError, NotFoundError, VaultIOError
from .models import Note
from .parser import parse_note
from .scanner import SkipPredicate, is_hidden, list_notes
from .storage import FileSystem, LocalFileSystem

log = logging.getLogger(__name__)


def with_extension(path: str) -> str:
    """Append the note extension unless the path already carries it."""
    return path if path.endswith(NOTE_EXTENSION) else f"{path}{NOTE_EXTENSION}"


class NoteRepository:
    """Reads notes from one vault root.

    Every path handed out is relative to the root in POSIX form, with the
    note extension (``projects/alpha.md``).
    """

    def __init__(
        self,
        root: Path,
        fs: FileSystem | None = None,
        skip: SkipPredicate = is_hidden,
    ) -> None:
        self.root = Path(root)
        self.fs = fs or LocalFileSystem()
        self.skip = skip

    # ------------------------------------------------------------------
    # Path handling
    # ------------------------------------------------------------------

    def normalize(self, identifier: str) -> str:
        """Normalize a user-supplied path to a vault-relative POSIX path.

        Accepts relative paths and absolute paths inside the vault. Does not
        add the note extension, so folders can be normalized too; an empty
        string or ``.`` means the vault root.

        Raises:
            InvalidPathError: If the path escapes the vault root.
        """
        cleaned = identifier.strip().replace("\\", "/")

        if cleaned.startswith("/") or Path(cleaned).is_absolute():
            root = posixpath.normpath(self.root.absolute().as_posix())
            target = posixpath.normpath(Path(cleaned).as_posix())
            try:
                cleaned = PurePosixPath(target).relative_to(root).as_posix()
            except ValueError:
                raise InvalidPathError(
                    f"Path escapes the vault: {identifier}", identifier
                ) from None

        normalized = posixpath.normpath(cleaned) if cleaned else "."
        if normalized == ".." or normalized.startswith("../"):
            raise InvalidPathError(f"Path escapes the vault: {identifier}", identifier)
        return "" if normalized == "." else normalized

    def resolve(self, identifier: str) -> str:
        """Resolve a bare name or path (with or without extension) to a note path.

        Raises:
            InvalidPathError: If the identifier is empty or escapes the vault.
        """
        relative = self.normalize(identifier)
        if not relative:
            raise InvalidPathError(f"Not a note path: {identifier!r}", identifier)
        return with_extension(relative)

    def absolute(self, relative: str) -> Path:
        return self.root / relative if relative else self.root

    def relative(self, path: Path) -> str:
        return path.relative_to(self.root).as_posix()

    def exists(self, identifier: str) -> bool:
        return self.fs.is_file(self.absolute(self.resolve(identifier)))

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get(self, identifier: str) -> Note:
        """Read and parse one note.

        Raises:
            InvalidPathError: If the identifier escapes the vault.
            NotFoundError: If no such note exists.
            VaultIOError: If the note exists but cannot be read.
        """
        relative = self.resolve(identifier)
        path = self.absolute(relative)
        if not self.fs.is_file(path):
            raise NotFoundError(f"Note not found: {relative}", relative)
        return self._build(relative, self.fs.read_text(path))

    def read_raw(self, relative: str) -> str:
        return self.fs.read_text(self.absolute(relative))

    def list_paths(self) -> list[str]:
        """Vault-relative paths of all notes, in scan order."""
        return [self.relative(p) for p in list_notes(self.root, self.fs, self.skip)]

    def iter_notes(self, paths: list[str] | None = None) -> Iterator[Note]:
        """Yield notes in scan order, parsing lazily.

        A note that cannot be read (removed mid-scan, permissions, encoding)
        is logged and skipped so one bad file does not sink a vault-wide query.
        """
        for relative in self.list_paths() if paths is None else paths:
            try:
                raw = self.read_raw(relative)
            except (NotFoundError, VaultIOError) as e:
                log.warning("Skipping unreadable note %s: %s", relative, e.message)
                continue
            yield self._build(relative, raw)

    def _build(self, relative: str, raw: str) -> Note:
        parsed = parse_note(raw)
        return Note(
            path=relative,
            name=PurePosixPath(relative).stem,
            **parsed.model_dump(),
        )
