"""Tests for the async core operations against a real temp directory.

Covers configuration wiring (OBSIDIAN_VAULT_PATH) and the end-to-end
behavior of each operation on disk; query and mutation details are tested
against the in-memory file system elsewhere.
"""

from pathlib import Path

import pytest

from notevault import core
from notevault.errors import AlreadyExistsError, InvalidPathError, NotFoundError


# ─────────────────────────────────────────────────────────────────────────────
# Vault wiring
# ─────────────────────────────────────────────────────────────────────────────


class TestGetVault:
    """Tests for get_vault and reset_vaults."""

    def test_vault_follows_environment(self, tmp_vault):
        assert core.get_vault().root == tmp_vault

    def test_same_root_reuses_vault(self, tmp_vault):
        assert core.get_vault() is core.get_vault()

    def test_root_change_opens_new_vault(self, tmp_vault, tmp_path, monkeypatch):
        first = core.get_vault()
        other = tmp_path / "other"
        other.mkdir()
        monkeypatch.setenv("OBSIDIAN_VAULT_PATH", str(other))

        assert core.get_vault() is not first
        assert core.get_vault().root == other

    @pytest.mark.asyncio
    async def test_missing_root(self, tmp_path, monkeypatch):
        monkeypatch.setenv("OBSIDIAN_VAULT_PATH", str(tmp_path / "absent"))
        core.reset_vaults()

        with pytest.raises(NotFoundError):
            await core.list_notes()

        core.reset_vaults()


# ─────────────────────────────────────────────────────────────────────────────
# Read operations
# ─────────────────────────────────────────────────────────────────────────────


class TestReadOperations:
    """End-to-end reads on disk."""

    @pytest.mark.asyncio
    async def test_scenario_tags_links_backlinks(self, write_note):
        write_note("a.md", "Hello #project [[b]]")
        write_note("b.md", "")

        note = await core.read_note("a")
        assert note.tags == ["project"]
        assert note.links == ["b"]
        assert "a.md" in await core.backlinks("b")

        links = await core.links_of("b")
        assert links.outgoing == []
        assert links.backlinks == ["a.md"]

    @pytest.mark.asyncio
    async def test_list_notes(self, write_note):
        write_note("z.md")
        write_note("dir/a.md")
        write_note(".obsidian/app.md")

        assert await core.list_notes() == ["dir/a.md", "z.md"]

    @pytest.mark.asyncio
    async def test_read_by_absolute_path(self, tmp_vault, write_note):
        write_note("folder/note.md", "text")

        note = await core.read_note(str(tmp_vault / "folder" / "note.md"))

        assert note.path == "folder/note.md"

    @pytest.mark.asyncio
    async def test_read_outside_vault(self, tmp_vault):
        with pytest.raises(InvalidPathError):
            await core.read_note("../secret")

    @pytest.mark.asyncio
    async def test_read_missing(self, tmp_vault):
        with pytest.raises(NotFoundError):
            await core.read_note("missing")

    @pytest.mark.asyncio
    async def test_read_is_idempotent(self, write_note):
        write_note("a.md", "---\ntags: [x]\n---\nBody [[y]]")

        assert await core.read_note("a") == await core.read_note("a")

    @pytest.mark.asyncio
    async def test_search_and_tags(self, write_note):
        write_note("python.md", "---\ntags: [lang]\n---\nSnakes #code")
        write_note("rust.md", "Crabs #code\nnot python")

        results = await core.search("python")
        assert [r.path for r in results] == ["python.md", "rust.md"]
        assert results[0].title_match

        tagged = await core.notes_by_tag("#CODE")
        assert [n.path for n in tagged] == ["python.md", "rust.md"]

        counts = {t.tag: t.count for t in await core.all_tags()}
        assert counts == {"lang": 1, "code": 2}

    @pytest.mark.asyncio
    async def test_recent_notes(self, write_note):
        import os

        old = write_note("old.md", "o")
        new = write_note("new.md", "n")
        os.utime(old, (1_000_000, 1_000_000))
        os.utime(new, (2_000_000, 2_000_000))

        recent = await core.recent_notes(limit=1)

        assert [r.note.path for r in recent] == ["new.md"]
        assert recent[0].modified.timestamp() == 2_000_000

    @pytest.mark.asyncio
    async def test_folder_tree(self, write_note):
        write_note("projects/plan.md")
        write_note("top.md")

        tree = await core.folder_tree()

        assert [n.name for n in tree] == ["projects", "top.md"]
        assert [c.name for c in tree[0].children] == ["plan.md"]


# ─────────────────────────────────────────────────────────────────────────────
# Write operations
# ─────────────────────────────────────────────────────────────────────────────


class TestWriteOperations:
    """End-to-end writes on disk."""

    @pytest.mark.asyncio
    async def test_create_and_read_back(self, tmp_vault):
        result = await core.create_note("ideas/new", "Body #idea", {"status": "draft"})

        assert result.path == "ideas/new.md"
        assert (tmp_vault / "ideas" / "new.md").is_file()
        note = await core.read_note("ideas/new")
        assert note.frontmatter == {"status": "draft"}
        assert note.tags == ["idea"]

    @pytest.mark.asyncio
    async def test_create_collision(self, tmp_vault, write_note):
        write_note("a.md", "original")

        with pytest.raises(AlreadyExistsError):
            await core.create_note("a", "new")

        assert (tmp_vault / "a.md").read_text() == "original"

    @pytest.mark.asyncio
    async def test_update_missing(self, tmp_vault):
        with pytest.raises(NotFoundError):
            await core.update_note("missing.md", "x")

    @pytest.mark.asyncio
    async def test_update_stamps_updated(self, write_note):
        write_note("a.md", "---\ntitle: A\n---\nold")

        await core.update_note("a", "new")

        note = await core.read_note("a")
        assert note.frontmatter["title"] == "A"
        assert "updated" in note.frontmatter
        assert note.body == "new"

    @pytest.mark.asyncio
    async def test_append_create_then_append(self, tmp_vault):
        await core.append_note("log", "one", create_if_missing=True)
        assert (tmp_vault / "log.md").read_text() == "one"

        await core.append_note("log", "two")

        assert (tmp_vault / "log.md").read_text() == "one\n\ntwo"

    @pytest.mark.asyncio
    async def test_backlinks_see_new_links(self, write_note):
        write_note("target.md", "")
        assert await core.backlinks("target") == []

        await core.create_note("source", "[[target]]")

        assert await core.backlinks("target") == ["source.md"]

    @pytest.mark.asyncio
    async def test_written_file_has_no_temp_leftovers(self, tmp_vault):
        await core.create_note("a", "x")

        assert sorted(p.name for p in Path(tmp_vault).iterdir()) == ["a.md"]
