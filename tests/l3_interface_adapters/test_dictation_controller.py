"""Tests for DictationController: real engine and dispatcher, fake keyboard."""

from __future__ import annotations

from scriba.l1_entities.hypothesis import Hypothesis, Reset
from scriba.l1_entities.output_op import Append
from scriba.l1_entities.utterance_session import SessionState
from scriba.l2_use_cases.dispatch_output_use_case import OutputDispatcher
from scriba.l2_use_cases.reconcile_use_case import ReconcileTranscriptUseCase
from scriba.l3_interface_adapters.controllers.dictation_controller import DictationController
from tests.conftest import FakeKeyInjector


def _controller(injector: FakeKeyInjector, threshold: float = 0.5) -> DictationController:
    return DictationController(
        reconciler=ReconcileTranscriptUseCase(confidence_threshold=threshold),
        dispatcher=OutputDispatcher(injector),
    )


class TestDictationController:
    def test_partial_is_typed_without_closing(self, fake_injector: FakeKeyInjector):
        controller = _controller(fake_injector)

        outcome = controller.on_event(Hypothesis.partial(['hello']))

        assert outcome.ops == [Append(text='hello')]
        assert outcome.closed is None
        assert fake_injector.screen == 'hello'

    def test_commit_reported_once(self, fake_injector: FakeKeyInjector):
        controller = _controller(fake_injector)
        final = Hypothesis.final(['one', 'thousand'], confidence=0.8)

        outcome = controller.on_event(final)
        duplicate = controller.on_event(final)

        assert outcome.closed is SessionState.COMMITTED
        assert outcome.text == '1000'
        assert outcome.confidence == 0.8
        assert duplicate.closed is None
        assert duplicate.ops == []
        assert controller.committed == ['1000']
        assert fake_injector.screen == '1000 '

    def test_rejection_reported_with_confidence(self, fake_injector: FakeKeyInjector):
        controller = _controller(fake_injector)
        controller.on_event(Hypothesis.partial(['noise']))

        outcome = controller.on_event(Hypothesis.final(['noise'], confidence=0.1, revision=1))

        assert outcome.closed is SessionState.ABANDONED
        assert outcome.confidence == 0.1
        assert fake_injector.screen == ''
        assert controller.committed == []

    def test_reset_reported_as_abandoned(self, fake_injector: FakeKeyInjector):
        controller = _controller(fake_injector)
        controller.on_event(Hypothesis.partial(['half']))

        outcome = controller.on_event(Reset(reason='capture closed'))

        assert outcome.closed is SessionState.ABANDONED
        assert outcome.confidence is None
        assert fake_injector.screen == ''

    def test_reset_when_idle_reports_nothing(self, fake_injector: FakeKeyInjector):
        outcome = _controller(fake_injector).on_event(Reset())
        assert outcome.closed is None
        assert outcome.ops == []

    def test_output_failures_collected(self):
        injector = FakeKeyInjector(fail_on={'append'})
        controller = _controller(injector)

        outcome = controller.on_event(Hypothesis.final(['hi'], confidence=0.9))

        assert outcome.closed is SessionState.COMMITTED
        assert len(outcome.errors) == 2  # text and separator
        assert controller.dispatcher.intended_text == 'hi '

    def test_consecutive_utterances(self, fake_injector: FakeKeyInjector):
        controller = _controller(fake_injector)
        controller.on_event(Hypothesis.partial(['first']))
        controller.on_event(Hypothesis.final(['first'], confidence=0.9, revision=1))
        controller.on_event(Hypothesis.partial(['second']))
        controller.on_event(Hypothesis.final(['second', 'comma'], confidence=0.9, revision=1))

        assert fake_injector.screen == 'first second, '
        assert controller.committed == ['first', 'second,']
