"""Read-only queries over the vault: search, tags, recency and folder trees.

All queries are stateless and read the disk on every call. Queries that take
a limit stop reading notes as soon as they have enough results.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .config import (
    DEFAULT_RECENT_LIMIT,
    DEFAULT_SEARCH_LIMIT,
    DEFAULT_TAG_LIMIT,
    DEFAULT_TREE_DEPTH,
    MATCH_CONTEXT_LINES,
    MAX_MATCHES_PER_NOTE,
)
from .errors import NotFoundError, VaultIOError
from .models import Note, RecentNote, SearchMatch, SearchResult, TagCount, TreeNode
from .parser import normalize_tag_query
from .repository import NoteRepository
from .scanner import is_note_file
from .storage import FileStat

log = logging.getLogger(__name__)


def find_line_matches(
    body: str,
    query: str,
    max_matches: int = MAX_MATCHES_PER_NOTE,
    context: int = MATCH_CONTEXT_LINES,
) -> list[SearchMatch]:
    """Find body lines containing ``query`` (already lowercased).

    Args:
        body: Note body to scan.
        query: Lowercased search text.
        max_matches: Stop after this many matching lines.
        context: Lines of context kept on each side of a match.

    Returns:
        Matches with 1-based line numbers within the body.
    """
    lines = body.split("\n")
    matches: list[SearchMatch] = []
    for i, line in enumerate(lines):
        if query not in line.lower():
            continue
        window = lines[max(0, i - context) : i + context + 1]
        matches.append(SearchMatch(line=i + 1, context="\n".join(window)))
        if len(matches) >= max_matches:
            break
    return matches


def render_tree(nodes: list[TreeNode], indent: str = "") -> str:
    """Render folder tree nodes as indented text, one entry per line."""
    lines: list[str] = []
    for node in nodes:
        if node.kind == "directory":
            lines.append(f"{indent}📁 {node.name}/")
            if node.children:
                lines.append(render_tree(node.children, indent + "  "))
        else:
            lines.append(f"{indent}📄 {node.name}")
    return "\n".join(lines)


class QueryEngine:
    """Structural read queries for one vault."""

    def __init__(self, repository: NoteRepository) -> None:
        self.repository = repository

    def search(self, query: str, limit: int = DEFAULT_SEARCH_LIMIT) -> list[SearchResult]:
        """Case-insensitive substring search over note names and body lines.

        Returns an empty list (never an error) when nothing matches or the
        query is blank.
        """
        if not query.strip() or limit <= 0:
            return []
        needle = query.lower()

        results: list[SearchResult] = []
        for note in self.repository.iter_notes():
            title_match = needle in note.name.lower()
            matches = find_line_matches(note.body, needle)
            if title_match or matches:
                results.append(
                    SearchResult(
                        path=note.path,
                        name=note.name,
                        title_match=title_match,
                        matches=matches,
                    )
                )
                if len(results) >= limit:
                    break
        return results

    def notes_by_tag(self, tag: str, limit: int = DEFAULT_TAG_LIMIT) -> list[Note]:
        """Notes carrying ``tag``. Case-insensitive; a leading ``#`` is ignored."""
        wanted = normalize_tag_query(tag)
        if not wanted or limit <= 0:
            return []

        results: list[Note] = []
        for note in self.repository.iter_notes():
            if any(t.lower() == wanted for t in note.tags):
                results.append(note)
                if len(results) >= limit:
                    break
        return results

    def all_tags(self) -> list[TagCount]:
        """Every tag with the number of notes carrying it, most used first.

        Ties keep the order in which the tags were first seen during the scan.
        """
        counts: dict[str, int] = {}
        for note in self.repository.iter_notes():
            for tag in note.tags:
                counts[tag] = counts.get(tag, 0) + 1

        ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
        return [TagCount(tag=tag, count=count) for tag, count in ranked]

    def recent_notes(self, limit: int = DEFAULT_RECENT_LIMIT) -> list[RecentNote]:
        """Notes ordered by file modification time, newest first.

        Equal timestamps keep scan order. Only the notes that make the cut are
        read and parsed.
        """
        if limit <= 0:
            return []

        stats: list[tuple[str, FileStat]] = []
        for relative in self.repository.list_paths():
            try:
                stats.append((relative, self.repository.fs.stat(self.repository.absolute(relative))))
            except (NotFoundError, VaultIOError) as e:
                log.warning("Skipping note without stat %s: %s", relative, e.message)

        stats.sort(key=lambda item: item[1].modified, reverse=True)

        results: list[RecentNote] = []
        for relative, st in stats:
            for note in self.repository.iter_notes([relative]):
                results.append(
                    RecentNote(note=note, modified=st.modified, created=st.created, size=st.size)
                )
            if len(results) >= limit:
                break
        return results

    def folder_tree(self, subpath: str = "", depth: int = DEFAULT_TREE_DEPTH) -> list[TreeNode]:
        """Folder structure below ``subpath``.

        The entries of ``subpath`` itself are level 1; a directory's children
        are listed while its level is below ``depth``. ``depth`` of 1 or less
        (0 and negatives included) lists ``subpath`` without descending.
        Directories come first, then notes, each sorted by name. Hidden entries
        and non-note files are left out.

        Raises:
            InvalidPathError: If subpath escapes the vault.
            NotFoundError: If subpath is not an existing folder.
        """
        repo = self.repository
        relative = repo.normalize(subpath)
        start = repo.absolute(relative)
        if not repo.fs.is_dir(start):
            raise NotFoundError(f"Folder not found: {relative or '(root)'}", relative)

        def build(directory: Path, rel_dir: str, level: int) -> list[TreeNode]:
            entries = sorted(repo.fs.list_dir(directory), key=lambda e: e.name)
            nodes: list[TreeNode] = []
            for entry in entries:
                if not entry.is_dir or repo.skip(entry.name):
                    continue
                rel = f"{rel_dir}/{entry.name}" if rel_dir else entry.name
                children = build(directory / entry.name, rel, level + 1) if level < depth else []
                nodes.append(TreeNode(name=entry.name, path=rel, kind="directory", children=children))
            for entry in entries:
                if not entry.is_file or repo.skip(entry.name) or not is_note_file(entry.name):
                    continue
                rel = f"{rel_dir}/{entry.name}" if rel_dir else entry.name
                nodes.append(TreeNode(name=entry.name, path=rel, kind="file"))
            return nodes

        return build(start, relative, 1)
