"""Configuration Pydantic models: pure schema, no infrastructure defaults."""

from __future__ import annotations

from pydantic import BaseModel, Field


class RecognitionConfig(BaseModel):
    model: str
    sample_rate: int = Field(gt=0)
    block_duration: float = Field(gt=0.0, description='Seconds of audio per capture callback')
    frame_queue_size: int = Field(gt=0)
    event_queue_size: int = Field(gt=0)
    device_retries: int = Field(default=3, ge=0)

    @property
    def block_size(self) -> int:
        return max(int(self.sample_rate * self.block_duration), 1)


class ReconciliationConfig(BaseModel):
    confidence_threshold: float = Field(ge=0.0, le=1.0)


class OutputConfig(BaseModel):
    typing_enabled: bool
    debug_partials: bool
    commit_suffix: str = ' '
    keystroke_delay: float = Field(default=0.0, ge=0.0)


class AppConfig(BaseModel):
    recognition: RecognitionConfig
    reconciliation: ReconciliationConfig
    output: OutputConfig
