"""Pydantic models for vault notes and query results."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

FrontmatterValue = str | list[str]


class ParsedNote(BaseModel):
    """Structured note content, before it is bound to a path."""

    model_config = ConfigDict(frozen=True)

    frontmatter: dict[str, FrontmatterValue] = Field(default_factory=dict)
    body: str = ""
    tags: list[str] = Field(default_factory=list)  # Set semantics, insertion order kept
    links: list[str] = Field(default_factory=list)  # Encounter order, duplicates kept


class Note(ParsedNote):
    """A note as read from the vault. Never mutated; re-read after a write."""

    path: str  # Relative to the vault root, with extension
    name: str  # File base name without extension


class NoteLinks(BaseModel):
    """Outgoing links of a note and the notes linking back to it."""

    path: str
    outgoing: list[str] = Field(default_factory=list)
    backlinks: list[str] = Field(default_factory=list)


class SearchMatch(BaseModel):
    """A matching body line with its surrounding context."""

    line: int  # 1-based line number within the body
    context: str


class SearchResult(BaseModel):
    """A note matched by a text search."""

    path: str
    name: str
    title_match: bool = False
    matches: list[SearchMatch] = Field(default_factory=list)


class TagCount(BaseModel):
    """A tag and the number of notes carrying it."""

    tag: str
    count: int


class RecentNote(BaseModel):
    """A note with its file timestamps, for recency listings."""

    note: Note
    modified: datetime
    created: datetime
    size: int


class TreeNode(BaseModel):
    """A folder or note in a folder tree listing."""

    name: str
    path: str
    kind: Literal["directory", "file"]
    children: list["TreeNode"] = Field(default_factory=list)


class MutationResult(BaseModel):
    """Outcome of a create, update or append."""

    path: str
    action: Literal["created", "overwritten", "updated", "appended"]
