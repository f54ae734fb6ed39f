"""Vault: wires scanner, repository, link graph, queries and mutations for one root."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .config import (
    DEFAULT_RECENT_LIMIT,
    DEFAULT_SEARCH_LIMIT,
    DEFAULT_TAG_LIMIT,
    DEFAULT_TREE_DEPTH,
)
from .graph import LinkGraph
from .models import (
    MutationResult,
    Note,
    NoteLinks,
    RecentNote,
    SearchResult,
    TagCount,
    TreeNode,
)
from .mutations import MutationEngine
from .query import QueryEngine
from .repository import NoteRepository
from .scanner import SkipPredicate, is_hidden
from .storage import FileSystem


class Vault:
    """All vault operations for one root directory.

    The root is the only shared resource; it is passed in explicitly rather
    than read from the environment here. Writes invalidate the link graph
    cache so later backlink queries re-read the notes.
    """

    def __init__(
        self,
        root: Path,
        fs: FileSystem | None = None,
        skip: SkipPredicate = is_hidden,
        cache_links: bool = True,
    ) -> None:
        self.repository = NoteRepository(Path(root), fs=fs, skip=skip)
        self.graph = LinkGraph(self.repository, use_cache=cache_links)
        self.queries = QueryEngine(self.repository)
        self.mutations = MutationEngine(
            self.repository, on_write=lambda _path: self.graph.invalidate()
        )

    @property
    def root(self) -> Path:
        return self.repository.root

    # Reads

    def list_notes(self) -> list[str]:
        return self.repository.list_paths()

    def read_note(self, path: str) -> Note:
        return self.repository.get(path)

    def links_of(self, path: str) -> NoteLinks:
        return self.graph.links_of(path)

    def backlinks(self, path: str) -> list[str]:
        return self.graph.backlinks_of(path)

    def search(self, query: str, limit: int = DEFAULT_SEARCH_LIMIT) -> list[SearchResult]:
        return self.queries.search(query, limit)

    def notes_by_tag(self, tag: str, limit: int = DEFAULT_TAG_LIMIT) -> list[Note]:
        return self.queries.notes_by_tag(tag, limit)

    def all_tags(self) -> list[TagCount]:
        return self.queries.all_tags()

    def recent_notes(self, limit: int = DEFAULT_RECENT_LIMIT) -> list[RecentNote]:
        return self.queries.recent_notes(limit)

    def folder_tree(self, subpath: str = "", depth: int = DEFAULT_TREE_DEPTH) -> list[TreeNode]:
        return self.queries.folder_tree(subpath, depth)

    # Writes

    def create_note(
        self,
        path: str,
        body: str,
        frontmatter: Mapping[str, Any] | None = None,
        overwrite: bool = False,
    ) -> MutationResult:
        return self.mutations.create(path, body, frontmatter, overwrite)

    def update_note(
        self, path: str, body: str, frontmatter: Mapping[str, Any] | None = None
    ) -> MutationResult:
        return self.mutations.update(path, body, frontmatter)

    def append_note(
        self, path: str, content: str, create_if_missing: bool = False
    ) -> MutationResult:
        return self.mutations.append(path, content, create_if_missing)
