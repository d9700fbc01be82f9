"""Tests for merging entries from many files."""

import copy
import logging

import pytest

from stringscsv.merge import CommentConflict, Merger
from stringscsv.models import Entry


def entry(key, comment="", path="en.lproj/Localizable.strings", **translations):
    return Entry(source_path=path, key=key, comment=comment, translations=translations)


class TestMerger:
    """Tests for Merger."""

    @pytest.fixture
    def merger(self):
        """Create merger instance."""
        return Merger()

    def test_insert_new_key(self, merger):
        """A new key is inserted as-is."""
        table = {}
        incoming = entry("k", "c", en="hi")
        merger.merge(table, [incoming])
        assert table == {"k": incoming}
        assert table["k"] is incoming

    def test_union_of_languages(self, merger):
        """Translations from different files are combined."""
        table = {}
        merger.merge(table, [entry("k", en="hi")])
        merger.merge(table, [entry("k", path="ja.lproj/Localizable.strings", ja="こんにちは")])
        assert table["k"].translations == {"en": "hi", "ja": "こんにちは"}
        assert table["k"].source_path == "en.lproj/Localizable.strings"

    def test_translations_mutated_in_place(self, merger):
        """The first entry's translations container stays canonical."""
        table = {}
        first = entry("k", en="hi")
        translations = first.translations
        merger.merge(table, [first, entry("k", fr="salut")])
        assert translations == {"en": "hi", "fr": "salut"}

    def test_last_writer_wins_per_language(self, merger):
        """A later entry overwrites only the languages it carries."""
        table = {}
        merger.merge(table, [entry("k", en="one", ja="いち")])
        merger.merge(table, [entry("k", en="two")])
        assert table["k"].translations == {"en": "two", "ja": "いち"}

    def test_order_decides_conflicting_values(self, merger):
        """Merging the same entries in another order can change the result."""
        a, b = entry("k", en="A"), entry("k", en="B")
        forward, backward = {}, {}
        merger.merge(forward, copy.deepcopy([a, b]))
        merger.merge(backward, copy.deepcopy([b, a]))
        assert forward["k"].translations["en"] == "B"
        assert backward["k"].translations["en"] == "A"

    def test_comment_conflict(self, merger, caplog):
        """Different comments warn once and keep the first comment."""
        table = {}
        with caplog.at_level(logging.WARNING):
            merger.merge(table, [entry("k", "c1", en="hi")])
            conflicts = merger.merge(
                table, [entry("k", "c2", path="ja.lproj/Localizable.strings", ja="やあ")]
            )

        assert table["k"].comment == "c1"
        assert conflicts == [CommentConflict(
            key="k", kept="c1", ignored="c2", source_path="ja.lproj/Localizable.strings"
        )]
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert 'key = k, "c1" - "c2"' in warnings[0].getMessage()

    def test_same_comment_is_not_a_conflict(self, merger, caplog):
        """Identical comments merge silently."""
        table = {}
        with caplog.at_level(logging.WARNING):
            conflicts = merger.merge(table, [entry("k", "c", en="hi"), entry("k", "c", ja="やあ")])
        assert conflicts == []
        assert caplog.records == []

    def test_adopts_comment_when_missing(self, merger):
        """An empty comment is filled from a later entry."""
        table = {}
        merger.merge(table, [entry("k", en="hi"), entry("k", "late", ja="やあ")])
        assert table["k"].comment == "late"

    def test_empty_incoming_comment_keeps_existing(self, merger):
        """An entry without comment leaves the existing one alone."""
        table = {}
        merger.merge(table, [entry("k", "kept", en="hi"), entry("k", ja="やあ")])
        assert table["k"].comment == "kept"

    def test_idempotent(self, merger):
        """Merging the same entries twice equals merging them once."""
        entries = [entry("a", "first", en="A"), entry("b", fr="B")]
        once, twice = {}, {}
        merger.merge(once, copy.deepcopy(entries))
        merger.merge(twice, copy.deepcopy(entries))
        merger.merge(twice, copy.deepcopy(entries))
        assert once == twice

    def test_keys_kept_in_first_seen_order(self, merger):
        """The table keeps the order keys were first seen."""
        table = {}
        merger.merge(table, [entry("b"), entry("a")])
        merger.merge(table, [entry("c"), entry("a")])
        assert list(table) == ["b", "a", "c"]
