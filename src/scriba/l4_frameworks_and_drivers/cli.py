"""CLI entry point for scriba."""

from __future__ import annotations

import signal
import sys
import threading
from pathlib import Path

import click

from scriba import __version__


@click.command()
@click.option(
    '-c',
    '--config',
    'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help='Path to YAML config file.',
)
@click.option(
    '-m',
    '--model',
    default=None,
    help='Catalog key, official vosk-model name, language code, or model directory.',
)
@click.option('-s', '--sample-rate', type=int, default=None, help='Sample rate for audio input.')
@click.option(
    '-t',
    '--confidence-threshold',
    type=click.FloatRange(0.0, 1.0),
    default=None,
    help='Confidence threshold for final transcriptions (0.0-1.0).',
)
@click.option('-d', '--debug', is_flag=True, help='Show debug output.')
@click.option('--no-typing', is_flag=True, help='Print transcriptions instead of typing them.')
@click.option('--debug-partials', is_flag=True, help='Show every speculative edit.')
@click.option('--select-model', is_flag=True, help='Pick a model from the catalog interactively.')
@click.option('--list-models', is_flag=True, help='List catalog models and exit.')
@click.option(
    '--log-file',
    default=None,
    type=click.Path(dir_okay=False),
    help='Also write debug logs to this file.',
)
@click.version_option(version=__version__)
def cli(
    config_path,
    model,
    sample_rate,
    confidence_threshold,
    debug,
    no_typing,
    debug_partials,
    select_model,
    list_models,
    log_file,
):
    """scriba -- real-time speech transcription typed into the focused window."""
    from scriba.l3_interface_adapters.gateways.vosk_model_resolver import (  # noqa: PLC0415 -- deferred: not needed for --help
        MODEL_CATALOG,
    )

    if list_models:
        for key, info in MODEL_CATALOG.items():
            click.echo(f'{key:18} {info.label()}')
        return

    from scriba.l1_entities.errors import ModelResolutionError  # noqa: PLC0415 -- deferred: not needed for --help
    from scriba.l3_interface_adapters.gateways.vosk_model_resolver import (  # noqa: PLC0415 -- deferred: not needed for --help
        VoskModelResolver,
    )
    from scriba.l3_interface_adapters.gateways.yaml_config_loader import (  # noqa: PLC0415 -- deferred: yaml stack not loaded on --help
        YamlConfigLoader,
    )
    from scriba.l4_frameworks_and_drivers.config import build_app_config  # noqa: PLC0415 -- deferred: not needed for --help
    from scriba.l4_frameworks_and_drivers.logging_setup import setup_logging  # noqa: PLC0415 -- deferred: not needed for --help

    setup_logging(debug=debug, log_file=Path(log_file) if log_file else None)

    if select_model:
        model = _prompt_model(MODEL_CATALOG)

    overrides = _build_overrides(model, sample_rate, confidence_threshold, no_typing, debug_partials)
    try:
        raw = YamlConfigLoader().load_raw(config_path, overrides=overrides or None)
        config = build_app_config(raw)
    except (FileNotFoundError, ValueError) as e:
        click.echo(f'Error: {e}', err=True)
        sys.exit(1)

    try:
        model_ref = VoskModelResolver().resolve(config.recognition.model)
    except ModelResolutionError as e:
        click.echo(f'Error: {e}', err=True)
        sys.exit(1)

    _preflight_microphone()

    from scriba.l4_frameworks_and_drivers.container import (  # noqa: PLC0415 -- deferred: audio and keyboard stacks not loaded for --help
        DependencyContainer,
    )
    from scriba.l4_frameworks_and_drivers.workers.dictation_worker import (  # noqa: PLC0415 -- deferred: audio and keyboard stacks not loaded for --help
        run_dictation_worker,
    )

    container = DependencyContainer(config)
    printer = _MessagePrinter(echo_commits=not container.dispatcher.typing_enabled)

    stop = threading.Event()
    signal.signal(signal.SIGINT, lambda signum, frame: stop.set())

    run_dictation_worker(
        post_message=printer,
        is_cancelled=stop.is_set,
        model_path=model_ref,
        controller=container.controller,
        decoder=container.decoder,
        audio_source=container.audio_source,
        sample_rate=config.recognition.sample_rate,
        event_queue_size=config.recognition.event_queue_size,
        device_retries=config.recognition.device_retries,
        debug_partials=config.output.debug_partials,
    )
    if printer.failed:
        sys.exit(1)


def _build_overrides(model, sample_rate, confidence_threshold, no_typing, debug_partials) -> dict:
    overrides: dict = {}
    if model:
        overrides.setdefault('recognition', {})['model'] = model
    if sample_rate is not None:
        overrides.setdefault('recognition', {})['sample_rate'] = sample_rate
    if confidence_threshold is not None:
        overrides['reconciliation'] = {'confidence_threshold': confidence_threshold}
    if no_typing:
        overrides.setdefault('output', {})['typing_enabled'] = False
    if debug_partials:
        overrides.setdefault('output', {})['debug_partials'] = True
    return overrides


def _prompt_model(catalog) -> str:
    from scriba.l3_interface_adapters.gateways.vosk_model_resolver import (  # noqa: PLC0415 -- deferred: not needed for --help
        DEFAULT_MODEL_KEY,
    )

    keys = list(catalog)
    click.echo('Available models:')
    for number, key in enumerate(keys, start=1):
        click.echo(f'{number:3}. {catalog[key].label()}')
    choice = click.prompt(
        'Select a model',
        type=click.IntRange(1, len(keys)),
        default=keys.index(DEFAULT_MODEL_KEY) + 1,
    )
    return keys[choice - 1]


class _MessagePrinter:
    """Renders worker messages on the terminal."""

    def __init__(self, echo_commits: bool) -> None:
        self._echo_commits = echo_commits
        self.failed = False

    def __call__(self, message) -> None:
        from scriba.l4_frameworks_and_drivers.messages import (  # noqa: PLC0415 -- deferred: not needed for --help
            OutputFailed,
            PartialUpdate,
            UtteranceCommitted,
            WorkerStatus,
        )

        if isinstance(message, WorkerStatus):
            if message.status == 'loading_model':
                click.echo('Loading speech model...', err=True)
            elif message.status == 'recording':
                click.echo('Listening. Speak into your microphone, Ctrl+C to stop.', err=True)
            elif message.status == 'error':
                self.failed = True
                click.echo(f'Error: {message.error}', err=True)
            elif message.status == 'stopped':
                click.echo('Stopped.', err=True)
        elif isinstance(message, UtteranceCommitted):
            if self._echo_commits:
                click.echo(message.text)
        elif isinstance(message, PartialUpdate):
            click.echo(f'[r{message.revision}] {message.text}', err=True)
        elif isinstance(message, OutputFailed):
            click.echo(f'Warning: typing failed ({message.error}).', err=True)


def _preflight_microphone() -> None:
    try:
        import sounddevice as sd  # noqa: PLC0415 -- deferred: not loaded on --help

        devices = sd.query_devices()
        input_devices = [d for d in devices if d['max_input_channels'] > 0]
        if not input_devices:
            click.echo('Warning: No input audio devices found.', err=True)
    except Exception as e:
        click.echo(f'Warning: Cannot query audio devices ({e}).', err=True)
