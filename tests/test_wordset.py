"""
Tests for WordSet
=================
Sorted storage, case-insensitive lookup, and word-list file I/O.
"""

from unittest.mock import patch

import pytest

from spellcheck.wordset import WordSet, fold


class TestFold:
    """Tests for ASCII case folding."""

    def test_lowercases_ascii(self):
        assert fold("HeLLo") == "hello"

    def test_leaves_non_ascii(self):
        assert fold("ÉCOLE") == "École"


class TestMembership:
    """Tests for contains() and insert()."""

    def test_empty_set_contains_nothing(self):
        assert not WordSet().contains("anything")

    def test_contains_is_case_insensitive(self):
        words = WordSet(words=["Hello", "world"])
        assert words.contains("hello")
        assert words.contains("WORLD")
        assert "HeLLo" in words
        assert not words.contains("help")

    def test_constructor_sorts(self):
        words = WordSet(words=["pear", "Apple", "banana"])
        assert words.words == ("Apple", "banana", "pear")

    def test_insert_keeps_sorted_order(self):
        words = WordSet()
        for word in ["delta", "Alpha", "charlie", "Bravo"]:
            assert words.insert(word)
        assert words.words == ("Alpha", "Bravo", "charlie", "delta")

    def test_insert_existing_is_noop(self):
        words = WordSet(words=["Hello"])
        assert not words.insert("hello")
        assert not words.insert("HELLO")
        assert len(words) == 1
        assert words.words == ("Hello",)

    def test_inserted_words_stay_found(self):
        """Every inserted word remains findable after further inserts."""
        words = WordSet()
        inserted = []
        for word in ["zeta", "Eta", "theta", "Iota", "kappa", "Lambda", "mu"]:
            words.insert(word)
            inserted.append(word)
            for seen in inserted:
                assert words.contains(seen.upper())
                assert words.contains(seen.lower())

    def test_insert_out_of_memory_leaves_set_intact(self):
        words = WordSet(words=["alpha", "gamma"])
        with patch.object(words, '_words', new=_FailingList(["alpha", "gamma"])):
            assert not words.insert("beta")
            assert list(words._words) == ["alpha", "gamma"]
        assert words.contains("gamma")
        assert not words.contains("beta")

    def test_clear(self):
        words = WordSet(words=["a", "b"])
        words.clear()
        assert len(words) == 0
        assert not words.contains("a")
        assert words.insert("a")


class _FailingList(list):
    def insert(self, index, value):
        raise MemoryError


class _AppendLimitList(list):
    def __init__(self, items, room):
        super().__init__(items)
        self.room = room

    def append(self, value):
        if self.room <= 0:
            raise MemoryError
        self.room -= 1
        super().append(value)


class TestLoad:
    """Tests for loading word-list files."""

    def test_load_trims_and_skips_blank(self, write_words):
        path = write_words('w.txt', ['gamma  ', '', '   ', 'Alpha\t', 'beta'])
        words = WordSet()
        assert words.load(path)
        assert words.words == ("Alpha", "beta", "gamma")

    def test_load_skips_comments_when_asked(self, write_words):
        path = write_words('w.txt', ['#comment', 'word'])
        words = WordSet()
        assert words.load(path, skip_comments=True)
        assert words.words == ("word",)

    def test_load_keeps_comment_lines_otherwise(self, write_words):
        path = write_words('w.txt', ['#hashtag', 'word'])
        words = WordSet()
        assert words.load(path, skip_comments=False, required=False)
        assert words.contains("#hashtag")
        assert len(words) == 2

    def test_required_missing_file_fails(self, tmp_path):
        words = WordSet()
        assert not words.load(tmp_path / 'missing.txt', required=True)
        assert len(words) == 0

    def test_optional_missing_file_succeeds_empty(self, tmp_path):
        words = WordSet()
        assert words.load(tmp_path / 'missing.txt', required=False)
        assert len(words) == 0

    def test_required_empty_file_fails(self, write_words):
        path = write_words('empty.txt', ['# only a comment', ''])
        assert not WordSet().load(path, skip_comments=True, required=True)

    def test_none_path_fails(self):
        assert not WordSet().load(None)

    def test_load_appends_to_existing(self, write_words):
        words = WordSet(words=["zulu"])
        assert words.load(write_words('w.txt', ['alpha']))
        assert words.words == ("alpha", "zulu")

    def test_latin1_dictionary_loads(self, tmp_path):
        """Bytes that are not valid UTF-8 do not stop the load."""
        path = tmp_path / 'latin1.txt'
        path.write_bytes(b"apple\ncaf\xe9\nzebra\n")
        words = WordSet()
        assert words.load(path, skip_comments=True, required=True)
        assert len(words) == 3
        assert words.contains("APPLE")
        assert words.contains("zebra")

    def test_carriage_return_inside_word_kept(self, tmp_path):
        words = WordSet()
        words.insert("ab\rcd")
        path = tmp_path / 'user.txt'
        words.save(path)

        loaded = WordSet()
        assert loaded.load(path, required=False)
        assert loaded.words == ("ab\rcd",)
        assert loaded.contains("AB\rCD")

    def test_out_of_memory_keeps_loaded_entries_sorted(self, write_words):
        path = write_words('w.txt', ['pear', 'apple', 'fig'])
        words = WordSet(words=["zulu"])
        with patch.object(words, '_words', new=_AppendLimitList(["zulu"], room=2)):
            assert not words.load(path)
            assert words.words == ("apple", "pear", "zulu")
            assert words.contains("APPLE")
            assert not words.contains("fig")


class TestSave:
    """Tests for saving word lists."""

    def test_save_writes_sorted_lines(self, tmp_path):
        words = WordSet(words=["pear", "Apple"])
        path = tmp_path / 'out.txt'
        words.save(path)
        assert path.read_text(encoding='utf-8') == "Apple\npear\n"

    def test_save_round_trip(self, tmp_path):
        words = WordSet()
        words.insert("Zebra")
        words.insert("aardvark")
        path = tmp_path / 'out.txt'
        words.save(path)

        loaded = WordSet()
        assert loaded.load(path, required=False)
        assert loaded.words == words.words

    def test_save_failure_is_silent(self, tmp_path):
        words = WordSet(words=["word"])
        # A directory cannot be opened for writing
        assert words.save(tmp_path) is None
        assert words.contains("word")

    def test_unencodable_word_keeps_previous_file(self, tmp_path):
        path = tmp_path / 'user.txt'
        path.write_text("keepme\n", encoding='ascii')
        words = WordSet(words=["keepme", "café"], encoding='ascii')
        assert words.save(path) is None
        assert path.read_text(encoding='ascii') == "keepme\n"
        assert list(tmp_path.iterdir()) == [path]

    def test_undecodable_bytes_round_trip(self, tmp_path):
        path = tmp_path / 'user.txt'
        path.write_bytes(b"caf\xe9\n")
        words = WordSet()
        assert words.load(path, required=False)
        words.insert("keepme")
        words.save(path)
        assert path.read_bytes() == b"caf\xe9\nkeepme\n"
