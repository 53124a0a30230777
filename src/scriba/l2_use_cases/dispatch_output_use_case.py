"""Use case: apply output operations to the key-injection backend in order."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from scriba.l1_entities.errors import OutputBackendError
from scriba.l1_entities.output_op import Append, DeleteBack, OutputOp
from scriba.l2_use_cases.ports.key_injector import KeyInjector

log = logging.getLogger('scriba.output')


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of one operation: delivered, or rejected by the backend."""

    ok: bool = True
    error: str = ''


class OutputDispatcher:
    """Delivers operations one at a time, never reordering or merging them.

    A slow backend blocks the caller; that is the backpressure path back to
    reconciliation. Backend rejections are reported in the result and do not
    stop the pipeline. ``intended_text`` is updated optimistically, so it
    shows what should be on screen even while typing is disabled.
    """

    def __init__(
        self,
        injector: KeyInjector | None,
        *,
        typing_enabled: bool = True,
        commit_suffix: str = ' ',
    ) -> None:
        self._injector = injector if typing_enabled else None
        self._commit_suffix = commit_suffix
        self._buffer = ''
        self._uncommitted = 0  # net characters typed since the last commit
        self.failures = 0

    @property
    def typing_enabled(self) -> bool:
        return self._injector is not None

    @property
    def intended_text(self) -> str:
        return self._buffer

    def apply(self, op: OutputOp) -> DispatchResult:
        if isinstance(op, Append):
            self._buffer += op.text
            self._uncommitted += len(op.text)
            return self._send(op, lambda injector: injector.append_text(op.text))

        if isinstance(op, DeleteBack):
            self._buffer = self._buffer[: max(len(self._buffer) - op.count, 0)]
            self._uncommitted = max(self._uncommitted - op.count, 0)
            return self._send(op, lambda injector: injector.delete_back(op.count))

        # CommitUtterance: separate this utterance from the next one
        typed = self._uncommitted > 0
        self._uncommitted = 0
        if not typed or not self._commit_suffix:
            return DispatchResult()
        suffix = self._commit_suffix
        self._buffer += suffix
        return self._send(op, lambda injector: injector.append_text(suffix))

    def _send(self, op: OutputOp, call: Callable[[KeyInjector], None]) -> DispatchResult:
        if self._injector is None:
            return DispatchResult()
        try:
            call(self._injector)
        except OutputBackendError as e:
            self.failures += 1
            log.warning('Output backend rejected %r: %s', op, e)
            return DispatchResult(ok=False, error=str(e))
        return DispatchResult()
