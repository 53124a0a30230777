"""Tests for the utterance session entity and model catalog entries."""

from __future__ import annotations

from scriba.l1_entities.model_info import ModelInfo
from scriba.l1_entities.output_op import CommitUtterance
from scriba.l1_entities.utterance_session import SessionState, UtteranceSession


class TestUtteranceSession:
    def test_new_session_is_idle_and_empty(self):
        session = UtteranceSession()
        assert session.state is SessionState.IDLE
        assert session.emitted_text == ''
        assert session.spans == []
        assert session.operations == []
        assert session.rejected_confidence is None

    def test_terminal_states(self):
        assert UtteranceSession(state=SessionState.COMMITTED).is_terminal
        assert UtteranceSession(state=SessionState.ABANDONED).is_terminal
        assert not UtteranceSession(state=SessionState.ACTIVE).is_terminal

    def test_sessions_do_not_share_lists(self):
        a = UtteranceSession()
        b = UtteranceSession()
        a.operations.append(CommitUtterance())
        assert b.operations == []


class TestModelInfo:
    def test_label(self):
        info = ModelInfo(
            key='small-fr',
            name='Small French',
            archive='vosk-model-small-fr-0.22',
            size='41MB',
            language='French',
            description='Compact model',
        )
        assert info.label() == 'Small French (French) - Compact model (41MB)'
