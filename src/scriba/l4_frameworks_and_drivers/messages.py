"""Messages posted by the dictation worker to its host (the CLI)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class WorkerStatus:
    """Lifecycle updates: loading_model, model_ready, recording, device_retry, error, stopped."""

    status: str
    error: str = ''


@dataclass(frozen=True)
class UtteranceCommitted:
    """An utterance passed the confidence gate and its text is final."""

    text: str
    confidence: float | None = None


@dataclass(frozen=True)
class UtteranceAbandoned:
    """An utterance was rejected (confidence set) or withdrawn by a reset (confidence None)."""

    confidence: float | None = None


@dataclass(frozen=True)
class PartialUpdate:
    """Speculative text after a partial; posted only when partial debugging is on."""

    text: str
    revision: int


@dataclass(frozen=True)
class OutputFailed:
    """The key-injection backend rejected an operation."""

    error: str
