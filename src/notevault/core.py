"""Core operations for notevault.

This module is the entry point used by the CLI and the MCP server.

Design principles:
- All functions are async for consistency
- The vault root is resolved from configuration at call time, then passed
  explicitly to the components; nothing below this module reads the environment
- One Vault per root is kept so the link graph cache survives between calls
"""

import logging
from pathlib import Path
from typing import Any

from . import config as _config
from .config import (
    DEFAULT_RECENT_LIMIT,
    DEFAULT_SEARCH_LIMIT,
    DEFAULT_TAG_LIMIT,
    DEFAULT_TREE_DEPTH,
)
from .models import (
    MutationResult,
    Note,
    NoteLinks,
    RecentNote,
    SearchResult,
    TagCount,
    TreeNode,
)
from .vault import Vault

log = logging.getLogger(__name__)

_vaults: dict[Path, Vault] = {}


def get_vault_root() -> Path:
    # Resolved through the module so tests can patch notevault.config.get_vault_root
    return _config.get_vault_root()


def get_vault() -> Vault:
    """Return the Vault for the configured root, creating it on first use."""
    root = get_vault_root()
    vault = _vaults.get(root)
    if vault is None:
        log.debug("Opening vault at %s", root)
        vault = Vault(root)
        _vaults[root] = vault
    return vault


def reset_vaults() -> None:
    """Forget every opened Vault (and with it any cached link map)."""
    _vaults.clear()


async def list_notes() -> list[str]:
    """List all note paths relative to the vault root, in scan order."""
    return get_vault().list_notes()


async def read_note(path: str) -> Note:
    """Read a note by path or bare name.

    Args:
        path: Relative path (with or without ``.md``), bare name, or an
            absolute path inside the vault.

    Raises:
        NotFoundError: If the note does not exist.
        InvalidPathError: If the path escapes the vault.
    """
    return get_vault().read_note(path)


async def links_of(path: str) -> NoteLinks:
    """Outgoing links of a note plus the notes that link back to it."""
    return get_vault().links_of(path)


async def backlinks(path: str) -> list[str]:
    """Paths of notes linking to the named note (which need not exist)."""
    return get_vault().backlinks(path)


async def search(query: str, limit: int = DEFAULT_SEARCH_LIMIT) -> list[SearchResult]:
    """Search note titles and content."""
    return get_vault().search(query, limit=limit)


async def notes_by_tag(tag: str, limit: int = DEFAULT_TAG_LIMIT) -> list[Note]:
    """Find notes with a tag (case-insensitive, ``#`` optional)."""
    return get_vault().notes_by_tag(tag, limit=limit)


async def all_tags() -> list[TagCount]:
    """List all tags with note counts, most used first."""
    return get_vault().all_tags()


async def recent_notes(limit: int = DEFAULT_RECENT_LIMIT) -> list[RecentNote]:
    """List notes by modification time, newest first."""
    return get_vault().recent_notes(limit=limit)


async def folder_tree(path: str = "", depth: int = DEFAULT_TREE_DEPTH) -> list[TreeNode]:
    """Folder structure below ``path`` (vault root when empty)."""
    return get_vault().folder_tree(path, depth)


async def create_note(
    path: str,
    content: str,
    frontmatter: dict[str, Any] | None = None,
    overwrite: bool = False,
) -> MutationResult:
    """Create a note, creating parent folders as needed.

    Raises:
        AlreadyExistsError: If the note exists and overwrite is False.
    """
    return get_vault().create_note(path, content, frontmatter, overwrite)


async def update_note(
    path: str,
    content: str,
    frontmatter: dict[str, Any] | None = None,
) -> MutationResult:
    """Replace a note's content, merging frontmatter and stamping ``updated``.

    Raises:
        NotFoundError: If the note does not exist.
    """
    return get_vault().update_note(path, content, frontmatter)


async def append_note(
    path: str,
    content: str,
    create_if_missing: bool = False,
) -> MutationResult:
    """Append content to the end of a note.

    Raises:
        NotFoundError: If the note is missing and create_if_missing is False.
    """
    return get_vault().append_note(path, content, create_if_missing)
