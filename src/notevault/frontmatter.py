"""Frontmatter reading and writing for vault notes.

Only the subset of YAML that notes actually use is understood: one
``key: value`` pair per line, where a value is a bare scalar, a quoted
string, or a flat ``[a, b, c]`` list. Everything is kept as strings; no
numeric or boolean coercion happens on read.

Parsing is total. Anything that does not fit the grammar is left in the body
or skipped, never raised, because notes are hand-written free text.
"""

import re
from collections.abc import Mapping
from typing import Any

from .config import FRONTMATTER_DELIMITER
from .models import FrontmatterValue

# Opening delimiter at offset 0, closing delimiter on its own line, then a line
# break and the (possibly empty) body. One blank separator line after the
# closing delimiter belongs to the block.
_FRONTMATTER_RE = re.compile(
    rf"\A{FRONTMATTER_DELIMITER}\r?\n(.*?)\r?\n{FRONTMATTER_DELIMITER}\r?\n(?:\r?\n)?(.*)\Z",
    re.DOTALL,
)

_QUOTES = ("'", '"')


def split_frontmatter(text: str) -> tuple[str | None, str]:
    """Split raw note text into (frontmatter block, body).

    Returns:
        Tuple of (block text between the delimiters or None, body text).
        The body is the full text when no frontmatter block is present.
    """
    match = _FRONTMATTER_RE.match(text)
    if not match:
        return None, text
    return match.group(1), match.group(2)


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] in _QUOTES and value[-1] == value[0]:
        return value[1:-1]
    return value


def parse_value(raw: str) -> FrontmatterValue | None:
    """Parse the text after a key's colon.

    Returns:
        None for an empty value (the key is dropped), a list for a bracketed
        value, otherwise the string with matching surrounding quotes removed.
    """
    value = raw.strip()
    if not value:
        return None

    if value.startswith("[") and value.endswith("]"):
        inner = value[1:-1].strip()
        if not inner:
            return []
        return [_strip_quotes(item.strip()) for item in inner.split(",")]

    return _strip_quotes(value)


def parse_frontmatter_block(block: str) -> dict[str, FrontmatterValue]:
    """Parse the lines of a frontmatter block into an ordered mapping."""
    result: dict[str, FrontmatterValue] = {}
    for line in block.splitlines():
        key, sep, raw_value = line.partition(":")
        key = key.strip()
        if not sep or not key:
            continue
        value = parse_value(raw_value)
        if value is None:
            continue
        result[key] = value
    return result


def parse_frontmatter(text: str) -> tuple[dict[str, FrontmatterValue], str]:
    """Split frontmatter from body text.

    Returns ``(metadata, body)``; ``metadata`` is empty when there is no
    frontmatter block.
    """
    block, body = split_frontmatter(text)
    if block is None:
        return {}, body
    return parse_frontmatter_block(block), body


def _format_value(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(f'"{item}"' for item in value) + "]"
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_frontmatter(metadata: Mapping[str, Any]) -> str:
    """Build a frontmatter block from a mapping.

    Lists render as a bracketed list of double-quoted items, strings are
    double-quoted, booleans render as ``true``/``false`` and everything else
    uses ``str()``. Keys whose value is None are omitted.

    Returns:
        The delimited block followed by a blank line, or an empty string when
        there is nothing to write.
    """
    lines = [
        f"{key}: {_format_value(value)}"
        for key, value in metadata.items()
        if value is not None
    ]
    if not lines:
        return ""
    return "\n".join([FRONTMATTER_DELIMITER, *lines, FRONTMATTER_DELIMITER, "", ""])
