"""Phrase tables for spoken symbols and English number words."""

from __future__ import annotations

from typing import NamedTuple


class Symbol(NamedTuple):
    text: str
    glue_left: bool = False  # no space before
    glue_right: bool = False  # no space after


_OPEN = dict(glue_right=True)
_CLOSE = dict(glue_left=True)
_JOIN = dict(glue_left=True, glue_right=True)

SPOKEN_SYMBOLS: dict[tuple[str, ...], Symbol] = {
    # grouping
    ('open', 'paren'): Symbol('(', **_OPEN),
    ('open', 'parenthesis'): Symbol('(', **_OPEN),
    ('left', 'paren'): Symbol('(', **_OPEN),
    ('close', 'paren'): Symbol(')', **_CLOSE),
    ('close', 'parenthesis'): Symbol(')', **_CLOSE),
    ('right', 'paren'): Symbol(')', **_CLOSE),
    ('open', 'bracket'): Symbol('[', **_OPEN),
    ('left', 'bracket'): Symbol('[', **_OPEN),
    ('close', 'bracket'): Symbol(']', **_CLOSE),
    ('right', 'bracket'): Symbol(']', **_CLOSE),
    ('open', 'brace'): Symbol('{', **_OPEN),
    ('open', 'curly'): Symbol('{', **_OPEN),
    ('left', 'brace'): Symbol('{', **_OPEN),
    ('close', 'brace'): Symbol('}', **_CLOSE),
    ('close', 'curly'): Symbol('}', **_CLOSE),
    ('right', 'brace'): Symbol('}', **_CLOSE),
    # punctuation
    ('semicolon',): Symbol(';', **_CLOSE),
    ('colon',): Symbol(':', **_CLOSE),
    ('comma',): Symbol(',', **_CLOSE),
    ('period',): Symbol('.', **_CLOSE),
    ('full', 'stop'): Symbol('.', **_CLOSE),
    ('question', 'mark'): Symbol('?', **_CLOSE),
    ('exclamation', 'mark'): Symbol('!', **_CLOSE),
    ('exclamation', 'point'): Symbol('!', **_CLOSE),
    ('percent',): Symbol('%', **_CLOSE),
    ('dot',): Symbol('.', **_JOIN),
    ('underscore',): Symbol('_', **_JOIN),
    ('slash',): Symbol('/', **_JOIN),
    ('backslash',): Symbol('\\', **_JOIN),
    ('new', 'line'): Symbol('\n', **_JOIN),
    ('hash',): Symbol('#', **_OPEN),
    ('at', 'sign'): Symbol('@', **_OPEN),
    ('dollar', 'sign'): Symbol('$', **_OPEN),
    # operators
    ('equals',): Symbol('='),
    ('double', 'equals'): Symbol('=='),
    ('equals', 'equals'): Symbol('=='),
    ('not', 'equals'): Symbol('!='),
    ('plus',): Symbol('+'),
    ('minus',): Symbol('-'),
    ('times',): Symbol('*'),
    ('divide',): Symbol('/'),
    ('divided', 'by'): Symbol('/'),
    ('less', 'than'): Symbol('<'),
    ('greater', 'than'): Symbol('>'),
    ('arrow',): Symbol('->'),
    ('fat', 'arrow'): Symbol('=>'),
    ('ampersand',): Symbol('&'),
    ('pipe',): Symbol('|'),
    # literals
    ('empty', 'string'): Symbol('""'),
}

MAX_SYMBOL_WORDS = max(len(phrase) for phrase in SPOKEN_SYMBOLS)

DIGITS = {
    'zero': 0,
    'one': 1,
    'two': 2,
    'three': 3,
    'four': 4,
    'five': 5,
    'six': 6,
    'seven': 7,
    'eight': 8,
    'nine': 9,
}

TEENS = {
    'ten': 10,
    'eleven': 11,
    'twelve': 12,
    'thirteen': 13,
    'fourteen': 14,
    'fifteen': 15,
    'sixteen': 16,
    'seventeen': 17,
    'eighteen': 18,
    'nineteen': 19,
}

TENS = {
    'twenty': 20,
    'thirty': 30,
    'forty': 40,
    'fifty': 50,
    'sixty': 60,
    'seventy': 70,
    'eighty': 80,
    'ninety': 90,
}

HUNDRED = 'hundred'

MAGNITUDES = {
    'thousand': 10**3,
    'million': 10**6,
    'billion': 10**9,
    'trillion': 10**12,
}

AND = 'and'
POINT = 'point'


def match_symbol(words: list[str], start: int) -> tuple[Symbol, int] | None:
    """Longest spoken-symbol phrase at *start*; returns (symbol, words consumed)."""
    longest = min(MAX_SYMBOL_WORDS, len(words) - start)
    for size in range(longest, 0, -1):
        symbol = SPOKEN_SYMBOLS.get(tuple(words[start : start + size]))
        if symbol is not None:
            return symbol, size
    return None
