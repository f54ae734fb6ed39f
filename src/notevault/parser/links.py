"""Wiki-style link extraction.

Grammar: ``[[target]]`` or ``[[target|alias]]``. The target is everything
before the first ``|`` or the closing brackets; the alias is display text
only and is discarded.
"""

import re

# [[Target]] or [[Target|Alias]]
LINK_PATTERN = re.compile(r"\[\[([^\]|]+)(?:\|[^\]]+)?\]\]")


def extract_links(content: str) -> list[str]:
    """Extract link targets from note content.

    Args:
        content: Body text to scan.

    Returns:
        Link targets in encounter order. Duplicates are preserved: a note may
        reference the same target more than once on purpose.
    """
    return LINK_PATTERN.findall(content)


def link_name(target: str) -> str:
    """Return the note name a link target points at (last path part, no extension)."""
    name = target.replace("\\", "/").rstrip("/").rsplit("/", 1)[-1]
    if name.endswith(".md"):
        name = name[:-3]
    return name


def links_to(target: str, name: str) -> bool:
    """Whether a link target refers to the note called ``name``.

    A link matches when it is exactly the name, or a nested path ending in it
    (``[[projects/alpha]]`` refers to ``alpha``).
    """
    return target == name or target.endswith(f"/{name}")
