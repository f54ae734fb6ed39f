"""Shared test fixtures for the notevault test suite.

Design:
- tmp_vault: isolated vault in a temp directory, wired through OBSIDIAN_VAULT_PATH
- write_note: helper for seeding notes on disk
- fs / vault: in-memory file system and a Vault over it, for disk-free tests
- runner: CliRunner with proper isolation
"""

from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from notevault import core
from notevault.vault import Vault

from tests.fakes import InMemoryFileSystem


# ─────────────────────────────────────────────────────────────────────────────
# Core Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def runner() -> CliRunner:
    """CLI runner with isolated environment."""
    return CliRunner()


@pytest.fixture
def tmp_vault(tmp_path: Path, monkeypatch) -> Generator[Path, None, None]:
    """Create an empty vault directory and point the configuration at it.

    Opened Vault objects are forgotten before and after the test so no link
    cache leaks between tests.

    Usage:
        def test_something(tmp_vault):
            (tmp_vault / "note.md").write_text("# Test")
    """
    root = tmp_path / "vault"
    root.mkdir()
    monkeypatch.setenv("OBSIDIAN_VAULT_PATH", str(root))
    core.reset_vaults()

    yield root

    core.reset_vaults()


@pytest.fixture
def write_note(tmp_vault: Path) -> Callable[[str, str], Path]:
    """Write a note (creating folders) below the temp vault and return its path."""

    def _write(relative: str, text: str = "") -> Path:
        path = tmp_vault / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def fs() -> InMemoryFileSystem:
    """Empty in-memory file system rooted at /vault."""
    return InMemoryFileSystem()


@pytest.fixture
def vault(fs: InMemoryFileSystem) -> Vault:
    """Vault over the in-memory file system."""
    return Vault(fs.root, fs=fs)
