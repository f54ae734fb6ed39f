"""Link graph: outgoing links and derived backlinks.

Backlinks are never stored on disk. Each query inverts the outgoing links of
every note as they are right now. ``LinkGraph`` may reuse the link map from
the previous pass, but only while the vault signature (every note's path,
modification time and size) is unchanged, so an edit made by another program
is always observed.
"""

from __future__ import annotations

import logging

from .errors import NotFoundError, VaultIOError
from .models import NoteLinks
from .parser import link_name, links_to
from .repository import NoteRepository

log = logging.getLogger(__name__)

# (path, mtime, ctime or birth time, size) per note. An outside edit that keeps
# the size, lands in the same timestamp tick and leaves the change time alone
# goes unnoticed until the next write through the vault or invalidate().
VaultSignature = tuple[tuple[str, float, float, int], ...]


class LinkGraph:
    """Answers "what does X link to" and "who links to X" for one vault."""

    def __init__(self, repository: NoteRepository, use_cache: bool = True) -> None:
        self.repository = repository
        self.use_cache = use_cache
        self._signature: VaultSignature | None = None
        self._forward: dict[str, list[str]] = {}

    def invalidate(self) -> None:
        """Drop the cached link map (called after every write through the vault)."""
        self._signature = None
        self._forward = {}

    def signature(self, paths: list[str]) -> VaultSignature:
        """Cheap change detector: stat every note without reading it."""
        entries = []
        for relative in paths:
            try:
                st = self.repository.fs.stat(self.repository.absolute(relative))
            except (NotFoundError, VaultIOError) as e:
                log.debug("Could not stat %s: %s", relative, e.message)
                continue
            entries.append((relative, st.modified.timestamp(), st.created.timestamp(), st.size))
        return tuple(entries)

    def forward_links(self) -> dict[str, list[str]]:
        """Outgoing links of every readable note, keyed by path in scan order."""
        paths = self.repository.list_paths()

        if not self.use_cache:
            return self._read_links(paths)

        current = self.signature(paths)
        if current != self._signature:
            log.debug("Rebuilding link map for %d notes", len(paths))
            self._forward = self._read_links(paths)
            self._signature = current
        return self._forward

    def _read_links(self, paths: list[str]) -> dict[str, list[str]]:
        return {note.path: note.links for note in self.repository.iter_notes(paths)}

    def backlinks_of(self, target: str) -> list[str]:
        """Paths of notes linking to ``target``.

        ``target`` may be a bare name or a path; only its base name without
        extension is compared. A link counts when it equals that name or is a
        nested path ending in it. Order is scan order.
        """
        name = link_name(target)
        if not name:
            return []
        return [
            path
            for path, links in self.forward_links().items()
            if any(links_to(link, name) for link in links)
        ]

    def links_of(self, identifier: str) -> NoteLinks:
        """Outgoing links and backlinks of one note.

        Raises:
            NotFoundError: If the note does not exist.
        """
        note = self.repository.get(identifier)
        return NoteLinks(
            path=note.path,
            outgoing=list(note.links),
            backlinks=self.backlinks_of(note.name),
        )
