"""Use case: normalize recognizer tokens into typed text.

Pure and deterministic. Rules run left to right at each position: spoken
symbol phrases (longest match first), then number phrases, then literal
passthrough. Normalization never raises; anything it does not understand is
passed through as the recognizer produced it.
"""

from __future__ import annotations

from collections.abc import Iterable

from scriba.l1_entities.hypothesis import TextSpan
from scriba.l2_use_cases.utils.number_words import match_number
from scriba.l2_use_cases.utils.spoken_terms import match_symbol


def normalize_spans(tokens: Iterable[str]) -> list[TextSpan]:
    """Normalize *tokens* into positioned output spans."""
    originals = [word for token in tokens for word in token.split()]
    words = [word.lower() for word in originals]

    def is_boundary(i: int) -> bool:
        return match_symbol(words, i) is not None

    spans: list[TextSpan] = []
    i = 0
    while i < len(words):
        symbol_match = match_symbol(words, i)
        if symbol_match is not None:
            symbol, size = symbol_match
            spans.append(
                TextSpan(
                    text=symbol.text,
                    source=tuple(originals[i : i + size]),
                    glue_left=symbol.glue_left,
                    glue_right=symbol.glue_right,
                )
            )
            i += size
            continue

        number = match_number(words, i, is_boundary)
        if number is not None:
            source = originals[i : i + number.consumed]
            if number.value is None:
                spans.extend(TextSpan(text=word, source=(word,)) for word in source)
            else:
                spans.append(TextSpan(text=number.value, source=tuple(source)))
            i += number.consumed
            continue

        spans.append(TextSpan(text=originals[i], source=(originals[i],)))
        i += 1

    return position_spans(spans)


def position_spans(spans: list[TextSpan]) -> list[TextSpan]:
    """Assign character offsets using the spacing rules.

    One space separates neighbours unless the left span glues right or the
    right span glues left.
    """
    positioned: list[TextSpan] = []
    offset = 0
    prev: TextSpan | None = None
    for span in spans:
        if prev is not None and not (prev.glue_right or span.glue_left):
            offset += 1
        end = offset + len(span.text)
        positioned.append(span.model_copy(update={'start': offset, 'end': end}))
        offset = end
        prev = span
    return positioned


def render_spans(spans: list[TextSpan]) -> str:
    """Join positioned spans into the output string."""
    chars: list[str] = []
    cursor = 0
    for span in spans:
        if span.start > cursor:
            chars.append(' ' * (span.start - cursor))
        chars.append(span.text)
        cursor = span.end
    return ''.join(chars)


def normalize(tokens: Iterable[str]) -> str:
    """Map a token sequence to output text, e.g. ``['one', 'thousand', 'twenty', 'five']`` → ``'1025'``."""
    return render_spans(normalize_spans(tokens))
