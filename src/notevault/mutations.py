"""Note mutations: create, update and append.

No state is kept between calls; each operation re-reads the file it changes.
Every write replaces the whole file atomically, and failures are raised to the
caller as-is (a write is not safe to retry blindly).
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import Any

from .config import UPDATED_KEY
from .errors import AlreadyExistsError, NotFoundError
from .frontmatter import build_frontmatter, parse_frontmatter
from .models import MutationResult
from .repository import NoteRepository

log = logging.getLogger(__name__)


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


class MutationEngine:
    """Writes notes through the same frontmatter codec used for reads."""

    def __init__(
        self,
        repository: NoteRepository,
        on_write: Callable[[str], None] | None = None,
        clock: Callable[[], str] = _now_iso,
    ) -> None:
        self.repository = repository
        self.on_write = on_write
        self.clock = clock

    def _write(self, relative: str, contents: str) -> None:
        fs = self.repository.fs
        path = self.repository.absolute(relative)
        fs.make_dirs(path.parent)
        fs.write_text(path, contents)
        if self.on_write is not None:
            self.on_write(relative)

    def create(
        self,
        path: str,
        body: str,
        frontmatter: Mapping[str, Any] | None = None,
        overwrite: bool = False,
    ) -> MutationResult:
        """Create a note, with a frontmatter block when metadata is given.

        Raises:
            AlreadyExistsError: If the note exists and overwrite is False.
            InvalidPathError: If the path escapes the vault.
        """
        relative = self.repository.resolve(path)
        existed = self.repository.fs.exists(self.repository.absolute(relative))
        if existed and not overwrite:
            raise AlreadyExistsError(
                f"Note already exists: {relative}. Use overwrite=True to replace.", relative
            )

        self._write(relative, build_frontmatter(frontmatter or {}) + body)
        action = "overwritten" if existed else "created"
        log.info("Note %s: %s", action, relative)
        return MutationResult(path=relative, action=action)

    def update(
        self,
        path: str,
        body: str,
        frontmatter: Mapping[str, Any] | None = None,
    ) -> MutationResult:
        """Replace a note's body, merging frontmatter over the existing block.

        Keys supplied by the caller win; existing keys not mentioned survive.
        The ``updated`` key is always stamped with the current UTC time.

        Raises:
            NotFoundError: If the note does not exist.
        """
        relative = self.repository.resolve(path)
        if not self.repository.fs.is_file(self.repository.absolute(relative)):
            raise NotFoundError(f"Note not found: {relative}", relative)

        existing, _ = parse_frontmatter(self.repository.read_raw(relative))
        merged: dict[str, Any] = {**existing, **(frontmatter or {})}
        merged[UPDATED_KEY] = self.clock()

        self._write(relative, build_frontmatter(merged) + body)
        log.info("Note updated: %s", relative)
        return MutationResult(path=relative, action="updated")

    def append(self, path: str, content: str, create_if_missing: bool = False) -> MutationResult:
        """Append a paragraph to a note.

        Works on the raw file text, so frontmatter is left exactly as it was.
        The existing text is right-trimmed and one blank line separates it
        from the new content. A missing note is created with ``content`` as
        its entire text when ``create_if_missing`` is set.

        Raises:
            NotFoundError: If the note is missing and create_if_missing is False.
        """
        relative = self.repository.resolve(path)
        if not self.repository.fs.is_file(self.repository.absolute(relative)):
            if not create_if_missing:
                raise NotFoundError(
                    f"Note not found: {relative}. Use create_if_missing=True to create it.",
                    relative,
                )
            self._write(relative, content)
            log.info("Note created by append: %s", relative)
            return MutationResult(path=relative, action="created")

        existing = self.repository.read_raw(relative)
        self._write(relative, existing.rstrip() + "\n\n" + content)
        log.info("Note appended: %s", relative)
        return MutationResult(path=relative, action="appended")
