"""DictationController: runs reconciliation and output for each hypothesis event."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from scriba.l1_entities.hypothesis import Hypothesis, HypothesisEvent
from scriba.l1_entities.output_op import OutputOp
from scriba.l1_entities.utterance_session import SessionState
from scriba.l2_use_cases.dispatch_output_use_case import OutputDispatcher
from scriba.l2_use_cases.reconcile_use_case import ReconcileTranscriptUseCase

log = logging.getLogger('scriba.controller')


@dataclass(frozen=True)
class EventOutcome:
    """What one event did: the operations applied and whether it closed an utterance."""

    ops: list[OutputOp] = field(default_factory=list)
    closed: SessionState | None = None  # COMMITTED or ABANDONED when the utterance ended here
    text: str = ''
    confidence: float | None = None
    errors: list[str] = field(default_factory=list)


class DictationController:
    """Bridges the hypothesis stream to the screen.

    Owns the reconciliation engine and the output dispatcher. The worker (L4)
    feeds events in arrival order and turns outcomes into messages.
    """

    def __init__(
        self,
        reconciler: ReconcileTranscriptUseCase,
        dispatcher: OutputDispatcher,
        debug_partials: bool = False,
    ) -> None:
        self._reconciler = reconciler
        self._dispatcher = dispatcher
        self._debug_partials = debug_partials
        self.committed: list[str] = []

    @property
    def dispatcher(self) -> OutputDispatcher:
        return self._dispatcher

    @property
    def reconciler(self) -> ReconcileTranscriptUseCase:
        return self._reconciler

    def on_event(self, event: HypothesisEvent) -> EventOutcome:
        before = self._reconciler.session
        was_terminal = before.is_terminal

        ops = self._reconciler.process(event)
        if self._debug_partials and isinstance(event, Hypothesis) and not event.is_final and ops:
            log.info('Partial r%d %r -> %s', event.revision, ' '.join(event.tokens), ops)

        errors = []
        for op in ops:
            result = self._dispatcher.apply(op)
            if not result.ok:
                errors.append(result.error)

        session = self._reconciler.session
        if not session.is_terminal or (session is before and was_terminal):
            return EventOutcome(ops=ops, errors=errors)

        if session.state is SessionState.COMMITTED:
            confidence = session.last_hypothesis.confidence if session.last_hypothesis else None
            self.committed.append(session.emitted_text)
            return EventOutcome(
                ops=ops,
                closed=SessionState.COMMITTED,
                text=session.emitted_text,
                confidence=confidence,
                errors=errors,
            )
        return EventOutcome(
            ops=ops,
            closed=SessionState.ABANDONED,
            confidence=session.rejected_confidence,
            errors=errors,
        )
