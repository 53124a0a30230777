"""Application defaults: lives in L4, not domain."""

from __future__ import annotations

import copy

from scriba.l1_entities.audio_constants import SAMPLE_RATE
from scriba.l1_entities.config import AppConfig
from scriba.l3_interface_adapters.gateways.vosk_model_resolver import DEFAULT_MODEL_KEY
from scriba.l3_interface_adapters.gateways.yaml_config_loader import deep_merge

APP_CONFIG_DEFAULTS: dict = {
    'recognition': {
        'model': DEFAULT_MODEL_KEY,
        'sample_rate': SAMPLE_RATE,
        'block_duration': 0.25,
        'frame_queue_size': 64,
        'event_queue_size': 32,
        'device_retries': 3,
    },
    'reconciliation': {
        'confidence_threshold': 0.7,
    },
    'output': {
        'typing_enabled': True,
        'debug_partials': False,
        'commit_suffix': ' ',
        'keystroke_delay': 0.0,
    },
}


def build_app_config(raw: dict) -> AppConfig:
    """Merge *raw* user overrides on top of defaults, then validate."""
    merged = copy.deepcopy(APP_CONFIG_DEFAULTS)
    deep_merge(merged, raw)
    return AppConfig.model_validate(merged)
