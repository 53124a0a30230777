"""Shared test fixtures and protocol-conforming fakes."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from scriba.l1_entities.config import AppConfig
from scriba.l1_entities.errors import OutputBackendError
from scriba.l2_use_cases.ports.decoder import DecodeResult
from scriba.l4_frameworks_and_drivers.config import build_app_config

# --- Protocol-conforming Fakes ---


class FakeDecoderSession:
    """Replays scripted decoder results, one per accepted frame.

    A script entry may be a DecodeResult, None, or an exception to raise.
    """

    def __init__(self, script: list | None = None) -> None:
        self._script = list(script or [])
        self.accepted: list[np.ndarray] = []
        self.reset_calls = 0
        self.closed = False

    def accept(self, pcm: np.ndarray) -> DecodeResult | None:
        self.accepted.append(pcm)
        if not self._script:
            return None
        item = self._script.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def reset(self) -> None:
        self.reset_calls += 1

    def close(self) -> None:
        self.closed = True


class FakeSpeechDecoder:
    """Fake decoder engine for L4 worker tests."""

    def __init__(self, session: FakeDecoderSession | None = None, load_error: Exception | None = None) -> None:
        self.session = session or FakeDecoderSession()
        self._load_error = load_error
        self.load_model_calls: list[str] = []
        self.sample_rates: list[int] = []
        self.closed = False

    def load_model(self, model_ref: str) -> None:
        self.load_model_calls.append(model_ref)
        if self._load_error is not None:
            raise self._load_error

    def open_session(self, sample_rate: int) -> FakeDecoderSession:
        self.sample_rates.append(sample_rate)
        return self.session

    def close(self) -> None:
        self.closed = True


class FakeKeyInjector:
    """Records calls and simulates the focused text field."""

    def __init__(self, fail_on: set[str] | None = None) -> None:
        self.calls: list[tuple[str, object]] = []
        self.screen = ''
        self._fail_on = fail_on or set()

    def append_text(self, text: str) -> None:
        self.calls.append(('append', text))
        if 'append' in self._fail_on:
            raise OutputBackendError('window lost focus')
        self.screen += text

    def delete_back(self, count: int) -> None:
        self.calls.append(('delete', count))
        if 'delete' in self._fail_on:
            raise OutputBackendError('window lost focus')
        self.screen = self.screen[: max(len(self.screen) - count, 0)]


class FakeAudioSource:
    """Fake audio source for L4 worker tests: implements AudioSource protocol.

    A chunk entry that is an exception is raised from ``read()``.
    """

    def __init__(self, chunks: list | None = None, open_error: Exception | None = None) -> None:
        self._chunks = list(chunks or [])
        self._open_error = open_error
        self.open_calls: list[tuple[int, int]] = []
        self.close_calls: int = 0
        self._idx = 0

    def open(self, sample_rate: int, channels: int) -> None:
        self.open_calls.append((sample_rate, channels))
        if self._open_error is not None:
            raise self._open_error

    def read(self, timeout: float = 0.1) -> np.ndarray | None:
        if self._idx >= len(self._chunks):
            return None
        chunk = self._chunks[self._idx]
        self._idx += 1
        if isinstance(chunk, Exception):
            raise chunk
        return chunk

    def close(self) -> None:
        self.close_calls += 1

    @property
    def exhausted(self) -> bool:
        return self._idx >= len(self._chunks)


def silence(samples: int = 4000) -> np.ndarray:
    return np.zeros(samples, dtype=np.float32)


# --- Fixtures ---


@pytest.fixture
def default_config() -> AppConfig:
    return build_app_config({})


@pytest.fixture
def sample_config_yaml(tmp_path: Path) -> Path:
    p = tmp_path / 'config.yaml'
    p.write_text(
        """\
recognition:
  model: small-en-us
  sample_rate: 8000
reconciliation:
  confidence_threshold: 0.5
output:
  debug_partials: true
""",
        encoding='utf-8',
    )
    return p


@pytest.fixture
def fake_injector() -> FakeKeyInjector:
    return FakeKeyInjector()
