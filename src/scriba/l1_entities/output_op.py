"""Output operations issued by reconciliation and applied by the dispatcher."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, Field


class Append(BaseModel):
    model_config = {'frozen': True}

    text: str = Field(min_length=1)


class DeleteBack(BaseModel):
    model_config = {'frozen': True}

    count: int = Field(gt=0, description='Characters to erase behind the cursor')


class CommitUtterance(BaseModel):
    """Checkpoint: the utterance's text will not be revised again."""

    model_config = {'frozen': True}


OutputOp = Append | DeleteBack | CommitUtterance


def replay_operations(ops: Iterable[OutputOp], buffer: str = '') -> str:
    """Apply *ops* in order to *buffer* and return the resulting text.

    DeleteBack never erases past the start of the buffer.
    """
    for op in ops:
        if isinstance(op, Append):
            buffer += op.text
        elif isinstance(op, DeleteBack):
            buffer = buffer[: max(len(buffer) - op.count, 0)]
    return buffer
