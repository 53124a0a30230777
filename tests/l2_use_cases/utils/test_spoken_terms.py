"""Tests for spoken-symbol lookup."""

from __future__ import annotations

from scriba.l2_use_cases.utils.spoken_terms import MAX_SYMBOL_WORDS, SPOKEN_SYMBOLS, Symbol, match_symbol


class TestMatchSymbol:
    def test_single_word(self):
        assert match_symbol(['semicolon'], 0) == (Symbol(';', glue_left=True), 1)

    def test_two_words(self):
        assert match_symbol(['x', 'open', 'paren'], 1) == (Symbol('(', glue_right=True), 2)

    def test_prefers_longest(self):
        symbol, size = match_symbol(['equals', 'equals'], 0)
        assert symbol.text == '=='
        assert size == 2

    def test_partial_phrase_is_no_match(self):
        assert match_symbol(['open'], 0) is None

    def test_past_end(self):
        assert match_symbol(['comma'], 1) is None

    def test_table_keys_are_lowercase(self):
        assert all(word == word.lower() for phrase in SPOKEN_SYMBOLS for word in phrase)

    def test_max_words(self):
        assert MAX_SYMBOL_WORDS == 2
