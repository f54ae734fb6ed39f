"""Parsing of vault notes into frontmatter, tags and links."""

from .links import LINK_PATTERN, extract_links, link_name, links_to
from .markdown import parse_note
from .tags import TAG_PATTERN, extract_tags, merge_tags, normalize_tag_query

__all__ = [
    "LINK_PATTERN",
    "TAG_PATTERN",
    "extract_links",
    "extract_tags",
    "link_name",
    "links_to",
    "merge_tags",
    "normalize_tag_query",
    "parse_note",
]
