"""Utterance session entity: the reconciliation state for one utterance."""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field

from scriba.l1_entities.hypothesis import Hypothesis, TextSpan
from scriba.l1_entities.output_op import OutputOp


class SessionState(enum.Enum):
    IDLE = 'idle'
    ACTIVE = 'active'
    COMMITTED = 'committed'
    ABANDONED = 'abandoned'


class UtteranceSession(BaseModel):
    """Mutable state owned by exactly one utterance.

    ``emitted_text`` is what has been handed to the output dispatcher, which is
    the intended on-screen text whether or not the keystrokes landed.
    """

    state: SessionState = SessionState.IDLE
    emitted_text: str = ''
    spans: list[TextSpan] = Field(default_factory=list)
    last_hypothesis: Hypothesis | None = None
    operations: list[OutputOp] = Field(default_factory=list)
    rejected_confidence: float | None = None

    @property
    def is_terminal(self) -> bool:
        return self.state in (SessionState.COMMITTED, SessionState.ABANDONED)
