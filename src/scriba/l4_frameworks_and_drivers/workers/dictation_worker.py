"""Thread worker shell for dictation: connects capture and decoding to the DictationController."""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Iterator

import numpy as np

from scriba.l1_entities.audio_constants import CHANNELS, SAMPLE_RATE
from scriba.l1_entities.audio_frame import Discontinuity
from scriba.l1_entities.errors import AudioDeviceError, DecoderError
from scriba.l1_entities.hypothesis import Hypothesis
from scriba.l1_entities.utterance_session import SessionState
from scriba.l2_use_cases.hypothesis_stream_use_case import HypothesisStreamAdapter
from scriba.l2_use_cases.ports.audio_source import AudioSource
from scriba.l2_use_cases.ports.decoder import SpeechDecoder
from scriba.l3_interface_adapters.controllers.dictation_controller import DictationController
from scriba.l4_frameworks_and_drivers.messages import (
    OutputFailed,
    PartialUpdate,
    UtteranceAbandoned,
    UtteranceCommitted,
    WorkerStatus,
)

log = logging.getLogger('scriba.worker')

_END = object()


class _Failure:
    def __init__(self, error: BaseException) -> None:
        self.error = error


def _frames(
    audio_source: AudioSource,
    is_cancelled,
    post_message,
    sample_rate: int,
    device_retries: int,
) -> Iterator[np.ndarray | Discontinuity]:
    """Read frames until cancelled, reopening the device after a loss.

    Each reopen yields a Discontinuity so the current utterance is withdrawn.
    The AudioDeviceError is re-raised once *device_retries* is exhausted.
    """
    failures = 0
    while not is_cancelled():
        try:
            data = audio_source.read(timeout=0.1)
        except AudioDeviceError as e:
            failures += 1
            if failures > device_retries:
                raise
            log.warning('Audio device lost (%s), reopening (%d/%d)', e, failures, device_retries)
            post_message(WorkerStatus(status='device_retry', error=str(e)))
            audio_source.close()
            audio_source.open(sample_rate, CHANNELS)
            yield Discontinuity(reason=f'audio device reopened: {e}')
            continue
        if data is not None:
            yield data


def run_dictation_worker(
    post_message,
    is_cancelled,
    model_path: str,
    controller: DictationController,
    decoder: SpeechDecoder,
    audio_source: AudioSource,
    sample_rate: int = SAMPLE_RATE,
    event_queue_size: int = 32,
    device_retries: int = 3,
    debug_partials: bool = False,
) -> list[str]:
    """Capture, decode and type until *is_cancelled* returns True.

    Decoding runs on a producer thread; reconciliation and output run on the
    calling thread, fed through a bounded queue so a slow keyboard backend
    slows decoding instead of dropping events. Returns the committed texts.
    """
    post_message(WorkerStatus(status='loading_model'))
    try:
        decoder.load_model(model_path)
        session = decoder.open_session(sample_rate)
    except DecoderError as e:
        log.error('Failed to load speech model: %s', e, exc_info=True)
        post_message(WorkerStatus(status='error', error=f'Failed to load model: {e}'))
        decoder.close()
        return []
    post_message(WorkerStatus(status='model_ready'))

    adapter = HypothesisStreamAdapter(session)
    events: queue.Queue = queue.Queue(maxsize=event_queue_size)

    def _produce() -> None:
        try:
            audio_source.open(sample_rate, CHANNELS)
            post_message(WorkerStatus(status='recording'))
            frames = _frames(audio_source, is_cancelled, post_message, sample_rate, device_retries)
            for event in adapter.events(frames):
                events.put(event)
        except (AudioDeviceError, DecoderError) as e:
            events.put(_Failure(e))
        except Exception as e:
            log.error('Unexpected decoder thread failure: %s', e, exc_info=True)
            events.put(_Failure(e))
        finally:
            audio_source.close()
            events.put(_END)

    producer = threading.Thread(target=_produce, name='scriba-decoder', daemon=True)
    producer.start()

    error: BaseException | None = None
    while True:
        item = events.get()
        if item is _END:
            break
        if isinstance(item, _Failure):
            error = item.error
            continue

        outcome = controller.on_event(item)
        for failure in outcome.errors:
            post_message(OutputFailed(error=failure))
        if debug_partials and isinstance(item, Hypothesis) and not item.is_final and outcome.ops:
            post_message(PartialUpdate(text=controller.reconciler.session.emitted_text, revision=item.revision))
        if outcome.closed is SessionState.COMMITTED:
            post_message(UtteranceCommitted(text=outcome.text, confidence=outcome.confidence))
        elif outcome.closed is SessionState.ABANDONED:
            post_message(UtteranceAbandoned(confidence=outcome.confidence))

    producer.join(timeout=5)
    session.close()
    decoder.close()

    if error is not None:
        log.error('Dictation stopped: %s', error)
        post_message(WorkerStatus(status='error', error=str(error)))
    post_message(WorkerStatus(status='stopped'))
    return list(controller.committed)
