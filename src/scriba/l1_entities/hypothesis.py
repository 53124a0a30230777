"""Hypothesis stream entities: immutable recognizer revisions."""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field


class HypothesisKind(enum.Enum):
    PARTIAL = 'partial'
    FINAL = 'final'


class Hypothesis(BaseModel):
    """One recognizer revision of the in-progress utterance.

    A later revision is a new value, never a mutation of an earlier one.
    """

    model_config = {'frozen': True}

    kind: HypothesisKind
    tokens: tuple[str, ...] = ()
    confidence: float | None = Field(
        default=None,
        ge=0.0,
        le=1.0,
        description='Utterance confidence; None on partials (decoder gives no reliable score)',
    )
    revision: int = Field(default=0, ge=0, description='Monotonic within one utterance')

    @property
    def is_final(self) -> bool:
        return self.kind is HypothesisKind.FINAL

    @classmethod
    def partial(cls, tokens: list[str] | tuple[str, ...], revision: int = 0) -> Hypothesis:
        return cls(kind=HypothesisKind.PARTIAL, tokens=tuple(tokens), revision=revision)

    @classmethod
    def final(
        cls,
        tokens: list[str] | tuple[str, ...],
        confidence: float,
        revision: int = 0,
    ) -> Hypothesis:
        return cls(kind=HypothesisKind.FINAL, tokens=tuple(tokens), confidence=confidence, revision=revision)


class Reset(BaseModel):
    """Decoder discontinuity: whatever utterance is in progress is abandoned."""

    model_config = {'frozen': True}

    reason: str = ''


HypothesisEvent = Hypothesis | Reset


class TextSpan(BaseModel):
    """A run of normalized output text and the recognizer tokens it came from.

    ``start``/``end`` are character offsets of ``text`` inside the rendered
    utterance; the separating space (if any) sits just before ``start``.
    """

    model_config = {'frozen': True}

    text: str
    source: tuple[str, ...] = ()
    glue_left: bool = False  # no space before
    glue_right: bool = False  # no space after
    start: int = 0
    end: int = 0

    def renders_like(self, other: TextSpan) -> bool:
        """True when both spans produce identical output in identical surroundings."""
        return (
            self.text == other.text
            and self.glue_left == other.glue_left
            and self.glue_right == other.glue_right
        )
