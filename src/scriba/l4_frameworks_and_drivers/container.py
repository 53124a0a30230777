"""Dependency container: composition root for wiring all layers together."""

from __future__ import annotations

import logging

from scriba.l1_entities.config import AppConfig, OutputConfig
from scriba.l1_entities.errors import OutputBackendError
from scriba.l2_use_cases.dispatch_output_use_case import OutputDispatcher
from scriba.l2_use_cases.ports.audio_source import AudioSource
from scriba.l2_use_cases.ports.decoder import SpeechDecoder
from scriba.l2_use_cases.ports.key_injector import KeyInjector
from scriba.l2_use_cases.ports.model_resolver import ModelResolver
from scriba.l2_use_cases.reconcile_use_case import ReconcileTranscriptUseCase
from scriba.l3_interface_adapters.controllers.dictation_controller import DictationController
from scriba.l3_interface_adapters.gateways.sounddevice_audio_source import SounddeviceAudioSource
from scriba.l3_interface_adapters.gateways.vosk_model_resolver import VoskModelResolver
from scriba.l3_interface_adapters.gateways.yaml_config_loader import YamlConfigLoader

log = logging.getLogger('scriba.worker')


class DependencyContainer:
    """Creates and wires all concrete instances. Easy to override for testing."""

    def __init__(self, config: AppConfig) -> None:
        self.config = config

        recognition = config.recognition
        self.model_resolver: ModelResolver = VoskModelResolver()
        self.decoder: SpeechDecoder = self._build_decoder()
        self.audio_source: AudioSource = SounddeviceAudioSource(
            block_size=recognition.block_size,
            queue_size=recognition.frame_queue_size,
        )
        self.key_injector: KeyInjector | None = self._build_key_injector(config.output)

        self.dispatcher = OutputDispatcher(
            self.key_injector,
            typing_enabled=self.key_injector is not None,
            commit_suffix=config.output.commit_suffix,
        )
        self.reconciler = ReconcileTranscriptUseCase(config.reconciliation.confidence_threshold)
        self.controller = DictationController(
            reconciler=self.reconciler,
            dispatcher=self.dispatcher,
            debug_partials=config.output.debug_partials,
        )

    @staticmethod
    def _build_decoder() -> SpeechDecoder:
        from scriba.l3_interface_adapters.gateways.vosk_decoder import (  # noqa: PLC0415 -- deferred: loads libvosk
            VoskDecoder,
        )

        return VoskDecoder()

    @staticmethod
    def _build_key_injector(output: OutputConfig) -> KeyInjector | None:
        if not output.typing_enabled:
            return None
        from scriba.l3_interface_adapters.gateways.pynput_key_injector import (  # noqa: PLC0415 -- deferred: needs a display server
            PynputKeyInjector,
        )

        try:
            return PynputKeyInjector(keystroke_delay=output.keystroke_delay)
        except OutputBackendError as e:
            log.error('%s. Running in no-typing mode.', e)
            return None

    @staticmethod
    def config_loader() -> YamlConfigLoader:
        return YamlConfigLoader()
