"""Gateway: sounddevice audio source (implements AudioSource port)."""

from __future__ import annotations

import logging
import queue
from typing import Any

import numpy as np

from scriba.l1_entities.audio_constants import CHANNELS, SAMPLE_RATE
from scriba.l1_entities.errors import AudioDeviceError

log = logging.getLogger('scriba.audio')


class SounddeviceAudioSource:
    """Wraps sounddevice.InputStream to provide audio chunks.

    The capture callback must never block, so frames that arrive while the
    bounded queue is full are dropped and counted.
    """

    def __init__(self, block_size: int = 0, queue_size: int = 64) -> None:
        self._stream: Any = None
        self._queue: queue.Queue[np.ndarray] = queue.Queue(maxsize=queue_size)
        self._block_size = block_size
        self.dropped = 0

    def open(self, sample_rate: int = SAMPLE_RATE, channels: int = CHANNELS) -> None:
        import sounddevice as sd  # noqa: PLC0415 -- deferred: PortAudio is loaded only when capture starts

        def _callback(indata, frames, time_info, status):
            if status:
                log.debug('Input stream status: %s', status)
            try:
                self._queue.put_nowait(indata.copy())
            except queue.Full:
                self.dropped += 1
                if self.dropped == 1 or self.dropped % 100 == 0:
                    log.warning('Audio frame queue full, %d frames dropped', self.dropped)

        try:
            self._stream = sd.InputStream(
                samplerate=sample_rate,
                channels=channels,
                dtype='float32',
                blocksize=self._block_size,
                callback=_callback,
            )
            self._stream.start()
        except Exception as e:
            self._stream = None
            raise AudioDeviceError(f'Cannot open input device: {e}') from e

    def read(self, timeout: float = 0.1) -> np.ndarray | None:
        try:
            return self._queue.get(timeout=timeout).flatten()
        except queue.Empty:
            if self._stream is not None and not self._stream.active:
                raise AudioDeviceError('Input stream stopped unexpectedly') from None
            return None

    def close(self) -> None:
        if self._stream is not None:
            try:
                self._stream.stop()
                self._stream.close()
            except Exception as e:  # device may already be gone
                log.debug('Error closing input stream: %s', e)
            self._stream = None
        while not self._queue.empty():
            try:
                self._queue.get_nowait()
            except queue.Empty:
                break
