"""Tests for output operations and replay."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from scriba.l1_entities.output_op import Append, CommitUtterance, DeleteBack, replay_operations


class TestOutputOps:
    def test_append_requires_text(self):
        with pytest.raises(ValidationError):
            Append(text='')

    def test_delete_requires_positive_count(self):
        with pytest.raises(ValidationError):
            DeleteBack(count=0)

    def test_commit_equality(self):
        assert CommitUtterance() == CommitUtterance()


class TestReplayOperations:
    def test_applies_in_order(self):
        ops = [Append(text='hello world'), DeleteBack(count=5), Append(text='there'), CommitUtterance()]
        assert replay_operations(ops) == 'hello there'

    def test_delete_clamps_at_start(self):
        assert replay_operations([DeleteBack(count=10)], buffer='abc') == ''

    def test_starts_from_existing_buffer(self):
        assert replay_operations([Append(text='!')], buffer='hi') == 'hi!'
