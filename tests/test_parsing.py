"""Tests for the note parser: links, tags and parse_note."""

import pytest

from notevault.parser import (
    extract_links,
    extract_tags,
    link_name,
    links_to,
    merge_tags,
    normalize_tag_query,
    parse_note,
)


# ─────────────────────────────────────────────────────────────────────────────
# Links
# ─────────────────────────────────────────────────────────────────────────────


class TestExtractLinks:
    """Tests for extract_links function."""

    def test_simple_link(self):
        assert extract_links("See [[other note]] for more.") == ["other note"]

    def test_alias_is_dropped(self):
        assert extract_links("[[target|shown text]]") == ["target"]

    def test_path_link(self):
        assert extract_links("[[folder/sub/note]]") == ["folder/sub/note"]

    def test_order_and_duplicates_kept(self):
        assert extract_links("[[b]] then [[a]] then [[b]]") == ["b", "a", "b"]

    def test_no_links(self):
        assert extract_links("No links [here] or [[]] there") == []

    def test_unclosed_link(self):
        assert extract_links("[[never closed") == []


class TestLinkName:
    """Tests for link_name and links_to."""

    @pytest.mark.parametrize(
        "target,expected",
        [
            ("note", "note"),
            ("note.md", "note"),
            ("folder/note", "note"),
            ("folder\\note.md", "note"),
        ],
    )
    def test_link_name(self, target, expected):
        assert link_name(target) == expected

    def test_exact_match(self):
        assert links_to("alpha", "alpha")

    def test_path_suffix_match(self):
        assert links_to("projects/alpha", "alpha")

    def test_partial_name_does_not_match(self):
        assert not links_to("projects/xalpha", "alpha")
        assert not links_to("alpha-two", "alpha")


# ─────────────────────────────────────────────────────────────────────────────
# Tags
# ─────────────────────────────────────────────────────────────────────────────


class TestExtractTags:
    """Tests for extract_tags function."""

    def test_inline_tags(self):
        assert extract_tags("Working on #project and #ideas/later") == ["project", "ideas/later"]

    def test_tag_must_start_with_letter(self):
        assert extract_tags("Issue #123 and #a1") == ["a1"]

    def test_heading_is_not_a_tag(self):
        assert extract_tags("# Heading\n## Sub") == []

    def test_duplicates_collapse(self):
        assert extract_tags("#x #y #x") == ["x", "y"]

    def test_tag_stops_at_punctuation(self):
        assert extract_tags("Done (#todo).") == ["todo"]


class TestTagHelpers:
    """Tests for merge_tags and normalize_tag_query."""

    def test_merge_keeps_first_seen_order(self):
        assert merge_tags(["a", "b"], ["c", "a"]) == ["a", "b", "c"]

    @pytest.mark.parametrize(
        "query,expected",
        [("Project", "project"), ("#project", "project"), ("  #Ideas/Later ", "ideas/later")],
    )
    def test_normalize_tag_query(self, query, expected):
        assert normalize_tag_query(query) == expected


# ─────────────────────────────────────────────────────────────────────────────
# parse_note
# ─────────────────────────────────────────────────────────────────────────────


class TestParseNote:
    """Tests for parse_note function."""

    def test_inline_tag_and_link(self):
        parsed = parse_note("Hello #project [[b]]")

        assert parsed.tags == ["project"]
        assert parsed.links == ["b"]
        assert parsed.frontmatter == {}
        assert parsed.body == "Hello #project [[b]]"

    def test_frontmatter_tags_before_inline_tags(self):
        parsed = parse_note("---\ntags: [a, b]\n---\nbody #c")

        assert parsed.tags == ["a", "b", "c"]
        assert parsed.body == "body #c"

    def test_tag_in_both_places_listed_once(self):
        parsed = parse_note("---\ntags: [a]\n---\n#a #b")

        assert parsed.tags == ["a", "b"]

    def test_scalar_tags_value_is_ignored(self):
        parsed = parse_note("---\ntags: single\n---\nbody")

        assert parsed.tags == []
        assert parsed.frontmatter == {"tags": "single"}

    def test_links_in_frontmatter_are_ignored(self):
        parsed = parse_note("---\nsource: \"[[elsewhere]]\"\n---\n[[here]]")

        assert parsed.links == ["here"]

    def test_empty_note(self):
        parsed = parse_note("")

        assert parsed.body == ""
        assert parsed.tags == []
        assert parsed.links == []

    def test_parsing_is_deterministic(self):
        raw = "---\ntags: [x]\n---\nText #y [[z]]"

        assert parse_note(raw) == parse_note(raw)
