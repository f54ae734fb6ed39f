"""Inline tag extraction.

Grammar: ``#`` immediately followed by an ASCII letter, then any run of ASCII
letters, digits, ``_``, ``-`` and ``/``. Markdown headings (``# Title``) never
match because a space follows the hash.
"""

import re
from collections.abc import Iterable

TAG_PATTERN = re.compile(r"#([A-Za-z][A-Za-z0-9_/-]*)")


def extract_tags(content: str) -> list[str]:
    """Return inline ``#tag`` values found in content (deduplicated, ordered, case kept)."""
    return merge_tags(TAG_PATTERN.findall(content))


def merge_tags(*groups: Iterable[str]) -> list[str]:
    """Union tag groups, keeping first-seen order."""
    return list(dict.fromkeys(tag for group in groups for tag in group))


def normalize_tag_query(tag: str) -> str:
    """Normalize a user-supplied tag for comparison: trim, drop leading ``#``, lowercase."""
    return tag.strip().removeprefix("#").lower()
