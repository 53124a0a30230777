"""Shared path constants for configuration and local models."""

from __future__ import annotations

from platformdirs import user_config_path

CONFIG_DIR = user_config_path('scriba')
MODELS_DIR = CONFIG_DIR / 'models'

DEFAULT_CONFIG_PATHS = [
    CONFIG_DIR / 'config.yaml',
    CONFIG_DIR / 'config.yml',
]
