"""Gateway: Vosk model resolver (implements ModelResolver port)."""

from __future__ import annotations

import logging
from pathlib import Path

from scriba.l1_entities.errors import ModelResolutionError
from scriba.l1_entities.model_info import ModelInfo
from scriba.l3_interface_adapters.gateways.paths import MODELS_DIR

log = logging.getLogger('scriba.decoder')

MODEL_PREFIX = 'vosk-model'
DEFAULT_MODEL_KEY = 'en-us'

# (key, name, archive, size, language, description)
_CATALOG_ROWS = [
    ('small-en-us', 'Small English US', 'vosk-model-small-en-us-0.15', '40MB', 'English (US)', 'Fast, basic vocabulary'),
    ('en-us', 'English US (Recommended)', 'vosk-model-en-us-0.22-lgraph', '128MB', 'English (US)',
     'Better accuracy, larger vocabulary'),
    ('en-us-large', 'Large English US', 'vosk-model-en-us-0.22', '1.8GB', 'English (US)', 'Highest accuracy'),
    ('en-us-gigaspeech', 'English US (GigaSpeech)', 'vosk-model-en-us-0.42-gigaspeech', '2.3GB', 'English (US)',
     'Latest large model with improved accuracy'),
    ('en-in', 'English India', 'vosk-model-en-in-0.5', '1GB', 'English (India)', 'Trained on Indian accents'),
    ('small-en-in', 'Small English India', 'vosk-model-small-en-in-0.4', '36MB', 'English (India)',
     'Compact model for Indian accents'),
    ('cn', 'Chinese', 'vosk-model-cn-0.22', '1.2GB', 'Chinese', 'Standard model'),
    ('small-cn', 'Small Chinese', 'vosk-model-small-cn-0.22', '42MB', 'Chinese', 'Compact model'),
    ('ru', 'Russian', 'vosk-model-ru-0.42', '2.5GB', 'Russian', 'Large model with high accuracy'),
    ('small-ru', 'Small Russian', 'vosk-model-small-ru-0.22', '45MB', 'Russian', 'Compact model'),
    ('small-fr', 'Small French', 'vosk-model-small-fr-0.22', '41MB', 'French', 'Compact model'),
    ('de', 'German', 'vosk-model-de-0.21', '1.2GB', 'German', 'Standard model'),
    ('small-de', 'Small German', 'vosk-model-small-de-0.15', '45MB', 'German', 'Compact model'),
    ('es', 'Spanish', 'vosk-model-es-0.42', '1.4GB', 'Spanish', 'Standard model'),
    ('small-es', 'Small Spanish', 'vosk-model-small-es-0.42', '39MB', 'Spanish', 'Compact model'),
    ('pt', 'Portuguese', 'vosk-model-pt-0.3', '1.2GB', 'Portuguese', 'Standard model'),
    ('small-pt', 'Small Portuguese', 'vosk-model-small-pt-0.3', '31MB', 'Portuguese', 'Compact model'),
    ('it', 'Italian', 'vosk-model-it-0.22', '1.2GB', 'Italian', 'Standard model'),
    ('small-it', 'Small Italian', 'vosk-model-small-it-0.22', '48MB', 'Italian', 'Compact model'),
    ('nl', 'Dutch', 'vosk-model-nl-spraakherkenning-0.6', '860MB', 'Dutch', 'Standard model'),
    ('small-nl', 'Small Dutch', 'vosk-model-small-nl-0.22', '39MB', 'Dutch', 'Compact model'),
    ('ja', 'Japanese', 'vosk-model-ja-0.22', '1GB', 'Japanese', 'Standard model'),
    ('small-ja', 'Small Japanese', 'vosk-model-small-ja-0.22', '48MB', 'Japanese', 'Compact model'),
    ('small-ko', 'Small Korean', 'vosk-model-small-ko-0.22', '42MB', 'Korean', 'Compact model'),
    ('hi', 'Hindi', 'vosk-model-hi-0.22', '1.5GB', 'Hindi', 'Standard model'),
    ('small-hi', 'Small Hindi', 'vosk-model-small-hi-0.22', '36MB', 'Hindi', 'Compact model'),
    ('uk', 'Ukrainian', 'vosk-model-uk-v3-lgraph', '350MB', 'Ukrainian', 'Standard model'),
    ('small-uk', 'Small Ukrainian', 'vosk-model-small-uk-v3-small', '133MB', 'Ukrainian', 'Compact model'),
    ('small-tr', 'Turkish', 'vosk-model-small-tr-0.3', '35MB', 'Turkish', 'Compact model'),
    ('small-vn', 'Vietnamese', 'vosk-model-small-vn-0.4', '32MB', 'Vietnamese', 'Compact model'),
    ('ar', 'Arabic', 'vosk-model-ar-mgb2-0.4', '318MB', 'Arabic', 'Standard model'),
    ('fa', 'Persian (Farsi)', 'vosk-model-fa-0.5', '1GB', 'Persian', 'Standard model'),
    ('small-fa', 'Small Persian (Farsi)', 'vosk-model-small-fa-0.5', '47MB', 'Persian', 'Compact model'),
    ('small-pl', 'Small Polish', 'vosk-model-small-pl-0.22', '50MB', 'Polish', 'Compact model'),
    ('gu', 'Gujarati', 'vosk-model-gu-0.42', '1.4GB', 'Gujarati', 'Standard model'),
    ('small-gu', 'Small Gujarati', 'vosk-model-small-gu-0.42', '58MB', 'Gujarati', 'Compact model'),
]

MODEL_CATALOG: dict[str, ModelInfo] = {
    key: ModelInfo(key=key, name=name, archive=archive, size=size, language=language, description=description)
    for key, name, archive, size, language, description in _CATALOG_ROWS
}


def find_model_directory(models_dir: Path, name: str | None = None) -> Path | None:
    """First ``vosk-model*`` directory below *models_dir*, or the one named *name*."""
    if not models_dir.is_dir():
        return None
    for candidate in sorted(models_dir.rglob(f'{MODEL_PREFIX}*')):
        if candidate.is_dir() and (name is None or candidate.name == name):
            return candidate
    return None


class VoskModelResolver:
    """Maps a model reference to a local directory or a name Vosk can fetch itself.

    Accepted references, in order: an existing model directory, a catalog
    key, an official ``vosk-model-*`` name, or a bare language code.
    """

    def __init__(self, models_dir: Path = MODELS_DIR) -> None:
        self._models_dir = models_dir

    def resolve(self, model_name: str) -> str:
        path = Path(model_name).expanduser()
        if path.is_dir():
            return str(path)
        if path.is_absolute():
            raise ModelResolutionError(f'Model directory not found: {model_name}')

        entry = MODEL_CATALOG.get(model_name)
        archive = entry.archive if entry is not None else model_name
        if archive.startswith(MODEL_PREFIX):
            local = find_model_directory(self._models_dir, archive)
            if local is not None:
                log.debug('Using local model %s', local)
                return str(local)
        return archive
