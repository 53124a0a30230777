"""Tests for the dictation worker: uses fakes instead of patching vosk/sounddevice/pynput."""

from __future__ import annotations

from scriba.l1_entities.errors import AudioDeviceError, DecoderError
from scriba.l2_use_cases.dispatch_output_use_case import OutputDispatcher
from scriba.l2_use_cases.ports.decoder import DecodeResult
from scriba.l2_use_cases.reconcile_use_case import ReconcileTranscriptUseCase
from scriba.l3_interface_adapters.controllers.dictation_controller import DictationController
from scriba.l4_frameworks_and_drivers.messages import (
    PartialUpdate,
    UtteranceAbandoned,
    UtteranceCommitted,
    WorkerStatus,
)
from scriba.l4_frameworks_and_drivers.workers.dictation_worker import run_dictation_worker
from tests.conftest import FakeAudioSource, FakeDecoderSession, FakeKeyInjector, FakeSpeechDecoder, silence


def _partial(*tokens: str) -> DecodeResult:
    return DecodeResult(tokens=tokens, is_final=False)


def _final(*tokens: str, confidence: float = 0.9) -> DecodeResult:
    return DecodeResult(tokens=tokens, is_final=True, confidence=confidence)


def _run(script: list, chunks: list, threshold: float = 0.5, **kwargs):
    injector = FakeKeyInjector()
    controller = DictationController(
        reconciler=ReconcileTranscriptUseCase(confidence_threshold=threshold),
        dispatcher=OutputDispatcher(injector),
    )
    decoder = kwargs.pop('decoder', None) or FakeSpeechDecoder(FakeDecoderSession(script))
    source = kwargs.pop('audio_source', None) or FakeAudioSource(chunks)
    messages: list = []
    result = run_dictation_worker(
        post_message=messages.append,
        is_cancelled=lambda: source.exhausted,
        model_path='test-model',
        controller=controller,
        decoder=decoder,
        audio_source=source,
        **kwargs,
    )
    return result, messages, injector, source, decoder


def _statuses(messages: list) -> list[str]:
    return [m.status for m in messages if isinstance(m, WorkerStatus)]


class TestDictationWorker:
    def test_model_load_failure(self):
        decoder = FakeSpeechDecoder(load_error=DecoderError('model not found'))
        result, messages, _, source, _ = _run([], [], decoder=decoder)

        assert result == []
        assert _statuses(messages) == ['loading_model', 'error']
        assert decoder.closed
        assert source.open_calls == []

    def test_immediate_cancel(self):
        result, messages, injector, source, decoder = _run([], [])

        assert result == []
        statuses = _statuses(messages)
        assert 'model_ready' in statuses
        assert 'recording' in statuses
        assert statuses[-1] == 'stopped'
        assert source.open_calls == [(16000, 1)]
        assert source.close_calls == 1
        assert decoder.session.closed
        assert decoder.closed
        assert injector.calls == []

    def test_committed_utterance_is_typed(self):
        script = [_partial('hello'), _partial('hello', 'world'), _final('hello', 'world')]
        result, messages, injector, _, decoder = _run(script, [silence()] * 3)

        assert result == ['hello world']
        assert injector.screen == 'hello world '
        assert UtteranceCommitted(text='hello world', confidence=0.9) in messages
        assert decoder.load_model_calls == ['test-model']
        assert decoder.sample_rates == [16000]

    def test_rejected_utterance_is_erased(self):
        script = [_partial('mumble'), _final('mumble', confidence=0.2)]
        result, messages, injector, _, _ = _run(script, [silence()] * 2)

        assert result == []
        assert injector.screen == ''
        assert UtteranceAbandoned(confidence=0.2) in messages

    def test_cancel_mid_utterance_leaves_no_text(self):
        result, messages, injector, _, _ = _run([_partial('half', 'a')], [silence()])

        assert result == []
        assert injector.screen == ''
        assert UtteranceAbandoned(confidence=None) in messages
        assert _statuses(messages)[-1] == 'stopped'

    def test_device_loss_reopens_and_continues(self):
        script = [_partial('lost'), _partial('kept'), _final('kept')]
        chunks = [silence(), AudioDeviceError('unplugged'), silence(), silence()]
        result, messages, injector, source, _ = _run(script, chunks)

        assert result == ['kept']
        assert injector.screen == 'kept '
        assert source.open_calls == [(16000, 1), (16000, 1)]
        assert source.close_calls == 2
        statuses = _statuses(messages)
        assert 'device_retry' in statuses
        assert 'error' not in statuses

    def test_device_loss_after_retries_is_fatal(self):
        chunks = [silence(), AudioDeviceError('unplugged')]
        result, messages, injector, _, _ = _run([_partial('gone')], chunks, device_retries=0)

        assert result == []
        assert injector.screen == ''
        errors = [m for m in messages if isinstance(m, WorkerStatus) and m.status == 'error']
        assert errors[0].error == 'unplugged'

    def test_decoder_error_is_fatal(self):
        script = [_partial('x'), DecoderError('bad audio')]
        result, messages, injector, _, _ = _run(script, [silence()] * 3)

        assert result == []
        assert injector.screen == ''
        assert 'error' in _statuses(messages)

    def test_open_failure_reported(self):
        source = FakeAudioSource(open_error=AudioDeviceError('busy'))
        _, messages, _, _, _ = _run([], [], audio_source=source)

        assert 'recording' not in _statuses(messages)
        assert 'error' in _statuses(messages)
        assert source.close_calls == 1

    def test_debug_partials_posts_updates(self):
        script = [_partial('one'), _partial('one', 'thousand')]
        _, messages, _, _, _ = _run(script, [silence()] * 2, debug_partials=True)

        updates = [m for m in messages if isinstance(m, PartialUpdate)]
        assert updates == [PartialUpdate(text='1', revision=0), PartialUpdate(text='1000', revision=1)]

    def test_small_event_queue_keeps_order(self):
        script = [_partial('a'), _partial('a', 'b'), _partial('a', 'b', 'c'), _final('a', 'b', 'c')]
        result, _, injector, _, _ = _run(script, [silence()] * 4, event_queue_size=1)

        assert result == ['a b c']
        assert injector.screen == 'a b c '
