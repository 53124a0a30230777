"""English numeral grammar: greedy, maximal-munch number phrase parsing.

Tie-break policy for ambiguous tails: a phrase keeps extending while the next
word is a grammatical continuation ("two hundred three" is 203, never
"200 3"). Only when it cannot extend does the phrase close, and the next word
starts a new phrase ("twenty twenty" is "20 20").
"""

from __future__ import annotations

import copy
from collections.abc import Callable
from typing import NamedTuple

from scriba.l2_use_cases.utils.spoken_terms import AND, DIGITS, HUNDRED, MAGNITUDES, POINT, TEENS, TENS


class NumberMatch(NamedTuple):
    value: str | None  # None: phrase is unfinished and must pass through unconverted
    consumed: int


class _Phrase:
    """Accumulator for one number phrase; ``last`` is the category of the last word taken."""

    def __init__(self) -> None:
        self.total = 0
        self.group = 0  # value of the group below the last magnitude word
        self.magnitude: int | None = None
        self.has_hundred = False
        self.fraction = ''
        self.last: str | None = None

    def can_take(self, word: str) -> bool:
        last = self.last
        if last == 'zero':
            return word == POINT
        if last in ('point', 'fraction'):
            return word in DIGITS
        if word in DIGITS:
            if word == 'zero':
                return last is None
            return last in (None, 'tens', 'hundred', 'magnitude', 'and')
        if word in TEENS or word in TENS:
            return last in (None, 'hundred', 'magnitude', 'and')
        if word == HUNDRED:
            return last in ('digit', 'teen', 'tens') and not self.has_hundred
        if word in MAGNITUDES:
            return (
                last in ('digit', 'teen', 'tens', 'hundred')
                and 0 < self.group < 1000
                and (self.magnitude is None or MAGNITUDES[word] < self.magnitude)
            )
        if word == AND:
            return last in ('hundred', 'magnitude')
        if word == POINT:
            return last in ('digit', 'teen', 'tens', 'hundred', 'magnitude')
        return False

    def take(self, word: str) -> None:
        if self.last in ('point', 'fraction'):
            self.fraction += str(DIGITS[word])
            self.last = 'fraction'
        elif word in DIGITS:
            self.group += DIGITS[word]
            self.last = 'zero' if word == 'zero' else 'digit'
        elif word in TEENS:
            self.group += TEENS[word]
            self.last = 'teen'
        elif word in TENS:
            self.group += TENS[word]
            self.last = 'tens'
        elif word == HUNDRED:
            self.group *= 100
            self.has_hundred = True
            self.last = 'hundred'
        elif word in MAGNITUDES:
            self.magnitude = MAGNITUDES[word]
            self.total += self.group * self.magnitude
            self.group = 0
            self.has_hundred = False
            self.last = 'magnitude'
        elif word == AND:
            self.last = 'and'
        elif word == POINT:
            self.last = 'point'

    def value(self) -> str:
        integer = str(self.total + self.group)
        return f'{integer}.{self.fraction}' if self.fraction else integer


def match_number(
    words: list[str],
    start: int,
    is_boundary: Callable[[int], bool],
) -> NumberMatch | None:
    """Parse the longest number phrase beginning at *start*.

    *words* must be lower-cased. *is_boundary(i)* reports a token that ends
    any phrase (a spoken-symbol phrase starts there). Returns None when
    ``words[start]`` cannot begin a number.
    """
    phrase = _Phrase()
    i = start
    while i < len(words):
        word = words[i]
        if is_boundary(i) or not phrase.can_take(word):
            break
        if word in (AND, POINT):
            if i + 1 == len(words):
                return NumberMatch(None, len(words) - start)
            probe = copy.copy(phrase)
            probe.take(word)
            if is_boundary(i + 1) or not probe.can_take(words[i + 1]):
                break
        phrase.take(word)
        i += 1

    if i == start:
        return None
    return NumberMatch(phrase.value(), i - start)
