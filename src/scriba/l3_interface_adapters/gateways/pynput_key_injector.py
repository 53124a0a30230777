"""Gateway: pynput key injector (implements KeyInjector port)."""

from __future__ import annotations

import logging
import time

from scriba.l1_entities.errors import OutputBackendError

log = logging.getLogger('scriba.output')


class PynputKeyInjector:
    """Synthesizes key events into whichever window has focus."""

    def __init__(self, keystroke_delay: float = 0.0) -> None:
        try:
            from pynput import keyboard  # noqa: PLC0415 -- deferred: backend probes the display server on import

            self._controller = keyboard.Controller()
        except Exception as e:
            raise OutputBackendError(f'Cannot create keyboard controller: {e}') from e
        self._backspace = keyboard.Key.backspace
        self._delay = keystroke_delay

    def append_text(self, text: str) -> None:
        try:
            if self._delay <= 0:
                self._controller.type(text)
                return
            for char in text:
                self._controller.type(char)
                time.sleep(self._delay)
        except Exception as e:
            raise OutputBackendError(f'Failed to type {text!r}: {e}') from e

    def delete_back(self, count: int) -> None:
        try:
            for _ in range(count):
                self._controller.tap(self._backspace)
                if self._delay > 0:
                    time.sleep(self._delay)
        except Exception as e:
            raise OutputBackendError(f'Failed to send {count} backspaces: {e}') from e
