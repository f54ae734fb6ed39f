"""Tests for the link graph: outgoing links, backlinks and cache validity."""

import pytest

from notevault.errors import NotFoundError
from notevault.graph import LinkGraph
from notevault.repository import NoteRepository


@pytest.fixture
def graph(fs) -> LinkGraph:
    return LinkGraph(NoteRepository(fs.root, fs=fs))


class TestBacklinks:
    """Tests for backlinks_of."""

    def test_basic_backlink(self, fs, graph):
        fs.add("a.md", "Hello #project [[b]]")
        fs.add("b.md", "")

        assert graph.backlinks_of("b") == ["a.md"]
        assert graph.backlinks_of("a") == []

    def test_nested_link_matches_by_suffix(self, fs, graph):
        fs.add("index.md", "[[projects/alpha]]")
        fs.add("projects/alpha.md", "")

        assert graph.backlinks_of("projects/alpha.md") == ["index.md"]

    def test_alias_link(self, fs, graph):
        fs.add("a.md", "[[target|Shown]]")

        assert graph.backlinks_of("target") == ["a.md"]

    def test_similar_names_do_not_match(self, fs, graph):
        fs.add("a.md", "[[alphabet]] [[other/xalpha]]")

        assert graph.backlinks_of("alpha") == []

    def test_target_need_not_exist(self, fs, graph):
        fs.add("a.md", "[[ghost]]")

        assert graph.backlinks_of("ghost") == ["a.md"]

    def test_note_listed_once_for_repeated_links(self, fs, graph):
        fs.add("a.md", "[[b]] and again [[b]]")

        assert graph.backlinks_of("b") == ["a.md"]

    def test_self_link(self, fs, graph):
        fs.add("a.md", "I am [[a]]")

        assert graph.backlinks_of("a") == ["a.md"]

    def test_exactly_the_linking_notes(self, fs, graph):
        """Backlinks are exactly the notes whose links name the target."""
        fs.add("one.md", "[[hub]]")
        fs.add("two.md", "[[misc]]")
        fs.add("three.md", "[[x/hub]] [[misc]]")
        fs.add("hub.md", "")

        expected = [
            note.path
            for note in graph.repository.iter_notes()
            if any(link == "hub" or link.endswith("/hub") for link in note.links)
        ]

        assert graph.backlinks_of("hub") == expected
        assert sorted(expected) == ["one.md", "three.md"]


class TestLinksOf:
    """Tests for links_of."""

    def test_outgoing_and_backlinks(self, fs, graph):
        fs.add("a.md", "[[b]] [[c]] [[b]]")
        fs.add("b.md", "[[a]]")

        result = graph.links_of("a")

        assert result.path == "a.md"
        assert result.outgoing == ["b", "c", "b"]
        assert result.backlinks == ["b.md"]

    def test_missing_note(self, graph):
        with pytest.raises(NotFoundError):
            graph.links_of("missing")


class TestCache:
    """The cached link map is reused only while the vault is unchanged."""

    def test_unchanged_vault_reuses_map(self, fs, graph):
        fs.add("a.md", "[[b]]")
        graph.backlinks_of("b")
        reads = fs.reads

        graph.backlinks_of("b")

        assert fs.reads == reads

    def test_external_edit_is_observed(self, fs, graph):
        fs.add("a.md", "[[b]]")
        assert graph.backlinks_of("b") == ["a.md"]

        fs.add("a.md", "no more links")

        assert graph.backlinks_of("b") == []

    def test_same_size_edit_with_restored_mtime_is_observed(self, fs, graph):
        fs.add("a.md", "[[b]]")
        fs.touch("a.md", 100)
        assert graph.backlinks_of("b") == ["a.md"]

        fs.add("a.md", "[[c]]")
        fs.touch("a.md", 100)

        assert graph.backlinks_of("b") == []
        assert graph.backlinks_of("c") == ["a.md"]

    def test_new_note_is_observed(self, fs, graph):
        fs.add("a.md", "")
        assert graph.backlinks_of("a") == []

        fs.add("c.md", "[[a]]")

        assert graph.backlinks_of("a") == ["c.md"]

    def test_invalidate_forces_reread(self, fs, graph):
        fs.add("a.md", "[[b]]")
        graph.backlinks_of("b")
        reads = fs.reads

        graph.invalidate()
        graph.backlinks_of("b")

        assert fs.reads > reads

    def test_cache_disabled_always_reads(self, fs):
        graph = LinkGraph(NoteRepository(fs.root, fs=fs), use_cache=False)
        fs.add("a.md", "[[b]]")
        graph.backlinks_of("b")
        reads = fs.reads

        graph.backlinks_of("b")

        assert fs.reads > reads

    def test_write_through_vault_invalidates(self, fs, vault):
        vault.create_note("a", "[[b]]")
        assert vault.backlinks("b") == ["a.md"]

        vault.update_note("a", "nothing")

        assert vault.backlinks("b") == []
