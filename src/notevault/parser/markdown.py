"""Note parsing: frontmatter, inline tags and links from raw text."""

from ..frontmatter import parse_frontmatter
from ..models import ParsedNote
from .links import extract_links
from .tags import extract_tags, merge_tags


def parse_note(raw: str) -> ParsedNote:
    """Parse raw note text into its structured parts.

    Never raises: text that does not fit the frontmatter grammar is treated as
    plain body. Tags and links are only scanned in the body; the frontmatter
    ``tags`` list contributes its literal strings (no ``#`` needed) ahead of
    the inline tags.
    """
    frontmatter, body = parse_frontmatter(raw)

    fm_tags = frontmatter.get("tags")
    if not isinstance(fm_tags, list):
        fm_tags = []

    return ParsedNote(
        frontmatter=frontmatter,
        body=body,
        tags=merge_tags((t for t in fm_tags if t), extract_tags(body)),
        links=extract_links(body),
    )
