"""FastMCP server for notevault.

This module provides MCP protocol wrappers around the core operations.
All actual logic lives in core.py - this file just handles MCP registration.
Vault errors propagate to FastMCP, which reports them as tool errors.
"""

from typing import Any

from fastmcp import FastMCP

from . import core
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

mcp = FastMCP(
    name="notevault",
    instructions=(
        "Local note vault. Read notes, follow [[links]] and backlinks, "
        "look up #tags, and create, update or append to notes."
    ),
)


# ─────────────────────────────────────────────────────────────────────────────
# Read tools
# ─────────────────────────────────────────────────────────────────────────────


@mcp.tool(
    name="list_notes",
    description="List every note in the vault as paths relative to the vault root.",
)
async def list_notes_tool() -> list[str]:
    """List all notes."""
    return await core.list_notes()


@mcp.tool(
    name="search_notes",
    description="Search notes by title and content. Returns matching notes with line context.",
)
async def search_notes_tool(query: str, limit: int = DEFAULT_SEARCH_LIMIT) -> list[SearchResult]:
    """Search the vault."""
    return await core.search(query=query, limit=limit)


@mcp.tool(
    name="read_note",
    description="Read a note by its path (relative to the vault root) or its name.",
)
async def read_note_tool(note_path: str) -> Note:
    """Read a note."""
    return await core.read_note(note_path)


@mcp.tool(
    name="get_linked_notes",
    description="Get the notes a note links to (outgoing) and the notes linking to it (backlinks).",
)
async def get_linked_notes_tool(note_path: str) -> NoteLinks:
    """Outgoing links and backlinks of a note."""
    return await core.links_of(note_path)


@mcp.tool(
    name="get_notes_by_tag",
    description="Find notes with a specific tag (with or without the # symbol).",
)
async def get_notes_by_tag_tool(tag: str, limit: int = DEFAULT_TAG_LIMIT) -> list[Note]:
    """Notes carrying a tag."""
    return await core.notes_by_tag(tag=tag, limit=limit)


@mcp.tool(
    name="list_all_tags",
    description="List all tags used in the vault with their note counts.",
)
async def list_all_tags_tool() -> list[TagCount]:
    """Tag census."""
    return await core.all_tags()


@mcp.tool(
    name="list_recent_notes",
    description="List recently modified notes in the vault.",
)
async def list_recent_notes_tool(limit: int = DEFAULT_RECENT_LIMIT) -> list[RecentNote]:
    """Recently modified notes."""
    return await core.recent_notes(limit=limit)


@mcp.tool(
    name="get_folder_structure",
    description="Get the folder structure of the vault or one of its folders.",
)
async def get_folder_structure_tool(
    path: str = "", depth: int = DEFAULT_TREE_DEPTH
) -> list[TreeNode]:
    """Folder tree."""
    return await core.folder_tree(path=path, depth=depth)


# ─────────────────────────────────────────────────────────────────────────────
# Write tools
# ─────────────────────────────────────────────────────────────────────────────


@mcp.tool(
    name="create_note",
    description="Create a new note. Creates parent folders if needed. Fails if it exists unless overwrite=True.",
)
async def create_note_tool(
    note_path: str,
    content: str,
    frontmatter: dict[str, Any] | None = None,
    overwrite: bool = False,
) -> MutationResult:
    """Create a note."""
    return await core.create_note(note_path, content, frontmatter, overwrite)


@mcp.tool(
    name="update_note",
    description="Replace the content of an existing note. Frontmatter is merged and 'updated' is stamped.",
)
async def update_note_tool(
    note_path: str,
    content: str,
    frontmatter: dict[str, Any] | None = None,
) -> MutationResult:
    """Update a note."""
    return await core.update_note(note_path, content, frontmatter)


@mcp.tool(
    name="append_to_note",
    description="Append content to the end of a note, optionally creating it.",
)
async def append_to_note_tool(
    note_path: str,
    content: str,
    create_if_missing: bool = False,
) -> MutationResult:
    """Append to a note."""
    return await core.append_note(note_path, content, create_if_missing)


def main():
    """Run the MCP server."""
    import logging

    from ._logging import configure_logging

    configure_logging()
    logging.getLogger(__name__).info("Serving vault at %s", core.get_vault_root())
    mcp.run()


if __name__ == "__main__":
    main()
