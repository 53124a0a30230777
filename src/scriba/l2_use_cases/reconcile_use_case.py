"""Use case: reconcile a revising hypothesis stream into minimal output operations."""

from __future__ import annotations

import logging

from scriba.l1_entities.hypothesis import Hypothesis, HypothesisEvent, Reset, TextSpan
from scriba.l1_entities.output_op import Append, CommitUtterance, DeleteBack, OutputOp
from scriba.l1_entities.utterance_session import SessionState, UtteranceSession
from scriba.l2_use_cases.normalize_use_case import normalize_spans, render_spans

log = logging.getLogger('scriba.reconcile')


def diff_spans(old: list[TextSpan], new: list[TextSpan]) -> list[OutputOp]:
    """Operations that turn the rendering of *old* into the rendering of *new*.

    Spans in the longest common prefix keep their text and offsets, so only
    the old suffix is erased and only the new suffix (with its leading
    separator) is typed. Identical inputs give no operations.
    """
    common = 0
    for before, after in zip(old, new):
        if not before.renders_like(after):
            break
        common += 1

    keep = old[common - 1].end if common else 0
    old_length = old[-1].end if old else 0
    suffix = render_spans(new)[keep:]

    ops: list[OutputOp] = []
    if old_length > keep:
        ops.append(DeleteBack(count=old_length - keep))
    if suffix:
        ops.append(Append(text=suffix))
    return ops


class ReconcileTranscriptUseCase:
    """Single-threaded state machine over one utterance session at a time.

    Idle → Active → Committed | Abandoned. Events must be fed in arrival
    order; the returned operations must be applied in the order given.
    Partials are typed speculatively and retracted if the final is rejected
    or the stream resets.
    """

    def __init__(self, confidence_threshold: float = 0.7) -> None:
        if not 0.0 <= confidence_threshold <= 1.0:
            raise ValueError(f'confidence_threshold must be within [0, 1], got {confidence_threshold}')
        self._threshold = confidence_threshold
        self._session = UtteranceSession()

    @property
    def confidence_threshold(self) -> float:
        return self._threshold

    @property
    def session(self) -> UtteranceSession:
        return self._session

    def process(self, event: HypothesisEvent) -> list[OutputOp]:
        if isinstance(event, Reset):
            return self._on_reset(event)

        if self._session.is_terminal:
            if event == self._session.last_hypothesis:
                return []  # duplicate delivery of the closing hypothesis
            self._session = UtteranceSession()
        if self._session.state is SessionState.IDLE:
            self._session.state = SessionState.ACTIVE
            log.debug('Utterance started at revision %d', event.revision)

        if event.is_final:
            return self._on_final(event)
        return self._on_partial(event)

    def _on_partial(self, hypothesis: Hypothesis) -> list[OutputOp]:
        spans = normalize_spans(hypothesis.tokens)
        ops = diff_spans(self._session.spans, spans)
        self._advance(hypothesis, spans, ops)
        return ops

    def _on_final(self, hypothesis: Hypothesis) -> list[OutputOp]:
        session = self._session
        # a final without a score is treated like a partial: assume it passes
        confidence = hypothesis.confidence if hypothesis.confidence is not None else 1.0

        if confidence < self._threshold:
            ops = self._retract()
            session.last_hypothesis = hypothesis
            session.rejected_confidence = confidence
            session.state = SessionState.ABANDONED
            log.info(
                'Rejected utterance (confidence %.2f < %.2f): %s',
                confidence,
                self._threshold,
                ' '.join(hypothesis.tokens),
            )
            return ops

        spans = normalize_spans(hypothesis.tokens)
        ops = diff_spans(session.spans, spans)
        self._advance(hypothesis, spans, ops)
        commit = CommitUtterance()
        ops.append(commit)
        session.operations.append(commit)
        session.state = SessionState.COMMITTED
        log.info('Committed utterance (confidence %.2f): %r', confidence, session.emitted_text)
        return ops

    def _on_reset(self, event: Reset) -> list[OutputOp]:
        session = self._session
        if session.state is not SessionState.ACTIVE:
            return []
        ops = self._retract()
        session.state = SessionState.ABANDONED
        log.info('Utterance abandoned on reset%s', f' ({event.reason})' if event.reason else '')
        return ops

    def _advance(self, hypothesis: Hypothesis, spans: list[TextSpan], ops: list[OutputOp]) -> None:
        session = self._session
        session.spans = spans
        session.emitted_text = render_spans(spans)
        session.last_hypothesis = hypothesis
        session.operations.extend(ops)

    def _retract(self) -> list[OutputOp]:
        session = self._session
        ops: list[OutputOp] = []
        if session.emitted_text:
            ops.append(DeleteBack(count=len(session.emitted_text)))
        session.operations.extend(ops)
        session.emitted_text = ''
        session.spans = []
        return ops
