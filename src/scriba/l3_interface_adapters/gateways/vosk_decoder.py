"""Gateway: Vosk streaming decoder (implements SpeechDecoder port)."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import numpy as np
from vosk import KaldiRecognizer, Model, SetLogLevel

from scriba.l1_entities.errors import DecoderError
from scriba.l2_use_cases.ports.decoder import DecodeResult

log = logging.getLogger('scriba.decoder')

UNKNOWN_WORD = '[unk]'


def to_pcm16(audio: np.ndarray) -> bytes:
    """Convert float32 samples in [-1, 1] to little-endian 16-bit PCM."""
    clipped = np.clip(audio, -1.0, 1.0)
    return (clipped * 32767).astype('<i2').tobytes()


def _tokens(text: str) -> tuple[str, ...]:
    return tuple(word for word in text.split() if word != UNKNOWN_WORD)


def _confidence(result: dict) -> float | None:
    """Mean per-word confidence, or None when the recognizer gave no scores."""
    scores = [float(word['conf']) for word in result.get('result') or [] if 'conf' in word]
    if not scores:
        return None
    return min(max(sum(scores) / len(scores), 0.0), 1.0)


class VoskDecoderSession:
    """One KaldiRecognizer. Fed from a single thread."""

    def __init__(self, recognizer: KaldiRecognizer) -> None:
        self._recognizer = recognizer

    def accept(self, pcm: np.ndarray) -> DecodeResult | None:
        try:
            if self._recognizer.AcceptWaveform(to_pcm16(pcm)):
                result = json.loads(self._recognizer.Result())
                return DecodeResult(
                    tokens=_tokens(result.get('text', '')),
                    is_final=True,
                    confidence=_confidence(result),
                )
            partial = json.loads(self._recognizer.PartialResult())
        except Exception as e:
            raise DecoderError(f'Decoder rejected audio: {e}') from e
        return DecodeResult(tokens=_tokens(partial.get('partial', '')), is_final=False)

    def reset(self) -> None:
        self._recognizer.Reset()

    def close(self) -> None:
        self._recognizer = None


class VoskDecoder:
    """Vosk adapter. Loads one model; sessions share it."""

    def __init__(self) -> None:
        self._model: Model | None = None

    def load_model(self, model_ref: str) -> None:
        SetLogLevel(0 if log.isEnabledFor(logging.DEBUG) else -1)
        try:
            if Path(model_ref).is_dir():
                self._model = Model(model_path=model_ref)
            elif model_ref.startswith('vosk-model'):
                self._model = Model(model_name=model_ref)
            else:
                self._model = Model(lang=model_ref)
        except (Exception, SystemExit) as e:  # vosk exits on unknown model names
            raise DecoderError(f'Failed to load model {model_ref!r}: {e}') from e
        log.info('Loaded model %s', model_ref)

    def open_session(self, sample_rate: int) -> VoskDecoderSession:
        if self._model is None:
            raise RuntimeError('Model not loaded. Call load_model() first.')
        recognizer = KaldiRecognizer(self._model, float(sample_rate))
        recognizer.SetWords(True)
        return VoskDecoderSession(recognizer)

    def close(self) -> None:
        self._model = None
