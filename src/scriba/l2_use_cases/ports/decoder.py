"""Port: streaming speech decoder."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import numpy as np


@dataclass(frozen=True)
class DecodeResult:
    """Raw decoder output for the current utterance."""

    tokens: tuple[str, ...]
    is_final: bool
    confidence: float | None = None


class DecoderSession(Protocol):
    """One recognition run. Not thread-safe; fed from a single thread."""

    def accept(self, pcm: np.ndarray) -> DecodeResult | None:
        """Feed float32 PCM. Returns the current partial, a final, or None.

        Raises DecoderError when the decoder rejects the audio.
        """
        ...

    def reset(self) -> None:
        """Drop any in-progress utterance."""
        ...

    def close(self) -> None:
        """Release the session."""
        ...


class SpeechDecoder(Protocol):
    """Abstract decoder engine. Zero framework types leak through."""

    def load_model(self, model_ref: str) -> None:
        """Load the model. Raises DecoderError on failure."""
        ...

    def open_session(self, sample_rate: int) -> DecoderSession:
        """Create a recognition session over a loaded model."""
        ...

    def close(self) -> None:
        """Release the model."""
        ...
