"""Use case: adapt a decoder session into an ordered stream of hypothesis events."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

import numpy as np

from scriba.l1_entities.audio_frame import Discontinuity
from scriba.l1_entities.errors import AudioDeviceError, DecoderError
from scriba.l1_entities.hypothesis import Hypothesis, HypothesisEvent, HypothesisKind, Reset
from scriba.l2_use_cases.ports.decoder import DecodeResult, DecoderSession

log = logging.getLogger('scriba.decoder')


class HypothesisStreamAdapter:
    """Wraps one decoder session and yields Partial / Final / Reset events.

    Does NO I/O itself: frames come in through ``events()``. Each utterance
    numbers its hypotheses from revision 0; repeated identical partials are
    emitted once. When the frame source ends, a closing Reset is emitted so
    any speculative text is withdrawn.
    """

    def __init__(self, session: DecoderSession) -> None:
        self._session = session
        self._revision = 0
        self._in_utterance = False
        self._last_partial: tuple[str, ...] | None = None

    def events(self, frames: Iterable[np.ndarray | Discontinuity]) -> Iterator[HypothesisEvent]:
        """Lazily decode *frames*; the caller drives it one event at a time.

        A DecoderError or AudioDeviceError is preceded by a Reset and then
        re-raised.
        """
        try:
            for frame in frames:
                if isinstance(frame, Discontinuity):
                    log.warning('Audio discontinuity: %s', frame.reason or 'unknown')
                    self._session.reset()
                    yield self._reset(frame.reason or 'audio discontinuity')
                    continue

                result = self._session.accept(frame)
                if result is None:
                    continue
                event = self._to_event(result)
                if event is not None:
                    yield event
        except DecoderError:
            yield self._reset('decoder error')
            raise
        except AudioDeviceError:
            yield self._reset('audio device lost')
            raise

        yield self._reset('capture closed')

    def _to_event(self, result: DecodeResult) -> Hypothesis | None:
        if result.is_final:
            if not result.tokens and not self._in_utterance:
                return None
            event = Hypothesis(
                kind=HypothesisKind.FINAL,
                tokens=result.tokens,
                confidence=result.confidence,
                revision=self._revision,
            )
            self._clear()
            return event

        if not result.tokens and not self._in_utterance:
            return None
        if result.tokens == self._last_partial:
            return None
        self._in_utterance = True
        self._last_partial = result.tokens
        event = Hypothesis.partial(result.tokens, revision=self._revision)
        self._revision += 1
        return event

    def _reset(self, reason: str) -> Reset:
        self._clear()
        return Reset(reason=reason)

    def _clear(self) -> None:
        self._revision = 0
        self._in_utterance = False
        self._last_partial = None
