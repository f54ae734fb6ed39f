#!/usr/bin/env python3
"""
nv: CLI for notevault

Usage:
    nv list                        # List every note
    nv search "query"              # Search titles and content
    nv get path/to/note            # Read a note
    nv links path/to/note          # Outgoing links and backlinks
    nv tree                        # Browse folder structure
    nv create path --content=".."  # Create a note
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Any, NoReturn

import click

from . import __version__ as NOTEVAULT_VERSION
from .config import (
    DEFAULT_RECENT_LIMIT,
    DEFAULT_SEARCH_LIMIT,
    DEFAULT_TAG_LIMIT,
    DEFAULT_TREE_DEPTH,
    ConfigurationError,
)
from .errors import VaultError
from .frontmatter import parse_value


def run_async(coro):
    """Run async function synchronously."""
    return asyncio.run(coro)


def _to_data(data: Any) -> Any:
    if isinstance(data, list):
        return [_to_data(item) for item in data]
    if hasattr(data, "model_dump"):
        return data.model_dump(mode="json")
    return data


def output(data, as_json: bool = False):
    """Output data as JSON or formatted text."""
    if as_json:
        click.echo(json.dumps(_to_data(data), indent=2, default=str))
    else:
        click.echo(data)


def format_table(rows: list[dict], columns: list[str], max_widths: dict | None = None) -> str:
    """Format rows as a simple table."""
    if not rows:
        return ""

    max_widths = max_widths or {}

    def cell(row: dict, col: str) -> str:
        val = str(row.get(col, ""))
        limit = max_widths.get(col, 50)
        if len(val) > limit:
            val = val[: limit - 3] + "..."
        return val

    widths = {col: len(col) for col in columns}
    for row in rows:
        for col in columns:
            widths[col] = max(widths[col], len(cell(row, col)))

    lines = [
        "  ".join(col.upper().ljust(widths[col]) for col in columns),
        "  ".join("-" * widths[col] for col in columns),
    ]
    for row in rows:
        lines.append("  ".join(cell(row, col).ljust(widths[col]) for col in columns))
    return "\n".join(lines)


def _handle_error(error: Exception) -> NoReturn:
    """Print a vault or configuration error and exit with status 1."""
    message = error.message if isinstance(error, VaultError) else str(error)
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _run(coro):
    """Run a core coroutine, turning vault errors into a clean CLI failure."""
    try:
        return run_async(coro)
    except (VaultError, ConfigurationError) as e:
        _handle_error(e)


def _read_content(content: str | None, file_path: str | None, stdin: bool) -> str:
    sources = sum([content is not None, bool(file_path), stdin])
    if sources > 1:
        click.echo("Error: Only one of --content, --file, or --stdin can be used", err=True)
        sys.exit(1)
    if sources == 0:
        click.echo("Error: Must provide --content, --file, or --stdin", err=True)
        sys.exit(1)

    if stdin:
        return sys.stdin.read()
    if file_path:
        return Path(file_path).read_text(encoding="utf-8")
    assert content is not None
    return content


def _parse_frontmatter_options(raw_json: str | None, pairs: tuple[str, ...]) -> dict[str, Any] | None:
    """Combine --frontmatter (a JSON object) and repeated --meta key=value pairs.

    Meta values use the frontmatter value syntax, so ``tags=[a, b]`` is a
    list and an empty value drops the key.
    """
    if raw_json is None and not pairs:
        return None

    metadata: dict[str, Any] = {}
    if raw_json is not None:
        try:
            loaded = json.loads(raw_json)
        except json.JSONDecodeError as e:
            raise click.BadParameter(f"not valid JSON: {e}", param_hint="--frontmatter") from e
        if not isinstance(loaded, dict):
            raise click.BadParameter("must be a JSON object", param_hint="--frontmatter")
        metadata.update(loaded)

    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise click.BadParameter(f"expected key=value, got {pair!r}", param_hint="--meta")
        metadata[key.strip()] = parse_value(value)
    return metadata


content_options = [
    click.option("--content", help="Note content (or use --file/--stdin)"),
    click.option(
        "--file",
        "-f",
        "file_path",
        type=click.Path(exists=True, dir_okay=False),
        help="Read content from file",
    ),
    click.option("--stdin", is_flag=True, help="Read content from stdin"),
]

frontmatter_options = [
    click.option("--frontmatter", "frontmatter_json", help="Frontmatter as a JSON object"),
    click.option("--meta", "meta", multiple=True, help="Frontmatter key=value (repeatable)"),
]


def _apply(options):
    def decorator(f):
        for option in reversed(options):
            f = option(f)
        return f

    return decorator


# ─────────────────────────────────────────────────────────────────────────────
# Main CLI Group
# ─────────────────────────────────────────────────────────────────────────────


@click.group()
@click.version_option(version=NOTEVAULT_VERSION, prog_name="nv")
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    envvar="NOTEVAULT_QUIET",
    help="Suppress warnings, show only errors and essential output",
)
def cli(quiet: bool):
    """nv: CLI for a local markdown note vault.

    The vault root comes from OBSIDIAN_VAULT_PATH, a .vaultconfig file in
    the current directory or a parent, or ~/documents/mobile vault.

    \b
    Read:
      nv list                          # Every note path
      nv search "deployment"           # Title and content search
      nv get projects/alpha            # Read a note (.md optional)
      nv links alpha                   # Outgoing links and backlinks
      nv tagged project                # Notes with a tag
      nv tags                          # Tag counts
      nv recent                        # Recently modified notes
      nv tree --depth=3                # Folder structure

    \b
    Write:
      nv create ideas/new --content="..." --meta status=draft
      nv update ideas/new --content="..."
      nv append journal --content="..." --create
    """
    from ._logging import set_quiet_mode

    set_quiet_mode(quiet)


# ─────────────────────────────────────────────────────────────────────────────
# Read Commands
# ─────────────────────────────────────────────────────────────────────────────


@cli.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def list_cmd(as_json: bool):
    """List every note, relative to the vault root."""
    from .core import list_notes

    paths = _run(list_notes())
    if as_json:
        output(paths, as_json=True)
        return
    for path in paths:
        click.echo(path)


@cli.command()
@click.argument("query")
@click.option("--limit", "-n", default=DEFAULT_SEARCH_LIMIT, show_default=True, help="Max results")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def search(query: str, limit: int, as_json: bool):
    """Search note titles and content (case-insensitive).

    \b
    Examples:
      nv search "kubernetes"
      nv search "todo" --limit=5 --json
    """
    from .core import search as core_search

    results = _run(core_search(query=query, limit=limit))
    if as_json:
        output(results, as_json=True)
        return
    if not results:
        click.echo("No results found.")
        return

    for result in results:
        suffix = " (title match)" if result.title_match else ""
        click.echo(f"{result.path}{suffix}")
        for match in result.matches:
            click.echo(f"  Line {match.line}:")
            for line in match.context.split("\n"):
                click.echo(f"    {line}")


@cli.command()
@click.argument("path")
@click.option("--metadata", "-m", is_flag=True, help="Show only frontmatter, tags and links")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def get(path: str, metadata: bool, as_json: bool):
    """Read a note by path or name.

    \b
    Examples:
      nv get projects/alpha.md
      nv get alpha --metadata
    """
    from .core import read_note

    note = _run(read_note(path))
    if as_json:
        output(note, as_json=True)
        return

    click.echo(f"Path: {note.path}")
    if note.tags:
        click.echo(f"Tags: {', '.join(note.tags)}")
    if note.links:
        click.echo(f"Links: {', '.join(note.links)}")
    for key, value in note.frontmatter.items():
        shown = ", ".join(value) if isinstance(value, list) else value
        click.echo(f"{key}: {shown}")
    if not metadata:
        click.echo("")
        click.echo(note.body)


@cli.command()
@click.argument("path")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def links(path: str, as_json: bool):
    """Show a note's outgoing links and the notes linking back to it."""
    from .core import links_of

    result = _run(links_of(path))
    if as_json:
        output(result, as_json=True)
        return

    click.echo(f"Outgoing links ({len(result.outgoing)}):")
    for target in result.outgoing:
        click.echo(f"  [[{target}]]")
    click.echo(f"Backlinks ({len(result.backlinks)}):")
    for source in result.backlinks:
        click.echo(f"  {source}")


@cli.command()
@click.argument("tag")
@click.option("--limit", "-n", default=DEFAULT_TAG_LIMIT, show_default=True, help="Max results")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def tagged(tag: str, limit: int, as_json: bool):
    """List notes carrying TAG (case-insensitive, # optional)."""
    from .core import notes_by_tag

    notes = _run(notes_by_tag(tag=tag, limit=limit))
    if as_json:
        output(notes, as_json=True)
        return
    if not notes:
        click.echo(f"No notes tagged #{tag.lstrip('#')}.")
        return

    rows = [{"path": n.path, "tags": ", ".join(n.tags)} for n in notes]
    click.echo(format_table(rows, ["path", "tags"], {"path": 60}))


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def tags(as_json: bool):
    """List all tags with note counts, most used first."""
    from .core import all_tags

    counts = _run(all_tags())
    if as_json:
        output(counts, as_json=True)
        return
    if not counts:
        click.echo("No tags found.")
        return

    for item in counts:
        click.echo(f"  #{item.tag}: {item.count}")


@cli.command()
@click.option("--limit", "-n", default=DEFAULT_RECENT_LIMIT, show_default=True, help="Max results")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def recent(limit: int, as_json: bool):
    """List recently modified notes, newest first."""
    from .core import recent_notes

    notes = _run(recent_notes(limit=limit))
    if as_json:
        output(notes, as_json=True)
        return
    if not notes:
        click.echo("No notes found.")
        return

    rows = [
        {
            "path": r.note.path,
            "modified": r.modified.strftime("%Y-%m-%d %H:%M"),
            "size": r.size,
        }
        for r in notes
    ]
    click.echo(format_table(rows, ["path", "modified", "size"], {"path": 60}))


@cli.command()
@click.argument("path", default="")
@click.option("--depth", "-d", default=DEFAULT_TREE_DEPTH, show_default=True, help="Max depth")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def tree(path: str, depth: int, as_json: bool):
    """Display the vault folder structure.

    \b
    Examples:
      nv tree
      nv tree projects --depth=3
    """
    from .core import folder_tree
    from .query import render_tree

    nodes = _run(folder_tree(path=path, depth=depth))
    if as_json:
        output(nodes, as_json=True)
        return

    rendered = render_tree(nodes)
    click.echo(rendered if rendered else "(empty)")


# ─────────────────────────────────────────────────────────────────────────────
# Write Commands
# ─────────────────────────────────────────────────────────────────────────────


@cli.command()
@click.argument("path")
@_apply(content_options)
@_apply(frontmatter_options)
@click.option("--overwrite", is_flag=True, help="Replace the note if it already exists")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def create(
    path: str,
    content: str | None,
    file_path: str | None,
    stdin: bool,
    frontmatter_json: str | None,
    meta: tuple[str, ...],
    overwrite: bool,
    as_json: bool,
):
    """Create a note, creating parent folders as needed.

    \b
    Examples:
      nv create ideas/new --content="# New idea"
      nv create ideas/new --file=draft.md --meta status=draft --meta tags=[idea]
      nv create ideas/new --content="..." --frontmatter='{"tags": ["a", "b"]}'
    """
    from .core import create_note

    body = _read_content(content, file_path, stdin)
    frontmatter = _parse_frontmatter_options(frontmatter_json, meta)
    result = _run(create_note(path, body, frontmatter, overwrite))
    if as_json:
        output(result, as_json=True)
    else:
        click.echo(f"{result.action.capitalize()}: {result.path}")


@cli.command()
@click.argument("path")
@_apply(content_options)
@_apply(frontmatter_options)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def update(
    path: str,
    content: str | None,
    file_path: str | None,
    stdin: bool,
    frontmatter_json: str | None,
    meta: tuple[str, ...],
    as_json: bool,
):
    """Replace a note's content, merging frontmatter and stamping 'updated'.

    \b
    Examples:
      nv update ideas/new --content="Rewritten"
      nv update ideas/new --file=new.md --meta status=done
    """
    from .core import update_note

    body = _read_content(content, file_path, stdin)
    frontmatter = _parse_frontmatter_options(frontmatter_json, meta)
    result = _run(update_note(path, body, frontmatter))
    if as_json:
        output(result, as_json=True)
    else:
        click.echo(f"Updated: {result.path}")


@cli.command()
@click.argument("path")
@_apply(content_options)
@click.option("--create", "create_if_missing", is_flag=True, help="Create the note if missing")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def append(
    path: str,
    content: str | None,
    file_path: str | None,
    stdin: bool,
    create_if_missing: bool,
    as_json: bool,
):
    """Append content to the end of a note, after one blank line.

    \b
    Examples:
      nv append journal --content="Shipped the release."
      cat notes.md | nv append inbox --stdin --create
    """
    from .core import append_note

    text = _read_content(content, file_path, stdin)
    result = _run(append_note(path, text, create_if_missing))
    if as_json:
        output(result, as_json=True)
    else:
        click.echo(f"{result.action.capitalize()}: {result.path}")


# ─────────────────────────────────────────────────────────────────────────────
# Entry Point
# ─────────────────────────────────────────────────────────────────────────────


def main():
    """Entry point for nv CLI."""
    from ._logging import configure_logging

    configure_logging()
    cli()


if __name__ == "__main__":
    main()
