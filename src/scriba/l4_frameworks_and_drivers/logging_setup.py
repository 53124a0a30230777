"""Console and optional file logging setup."""

from __future__ import annotations

import logging
from pathlib import Path


def setup_logging(debug: bool = False, log_file: Path | None = None) -> None:
    """Attach a stderr handler to the ``scriba`` logger, plus a debug file handler if *log_file* is set."""
    root = logging.getLogger('scriba')
    root.handlers.clear()

    console = logging.StreamHandler()
    console.setLevel(logging.DEBUG if debug else logging.INFO)
    console.setFormatter(logging.Formatter('%(levelname)s %(name)s: %(message)s'))
    root.addHandler(console)
    root.setLevel(logging.DEBUG if debug or log_file is not None else logging.INFO)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file, encoding='utf-8')
        handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s %(message)s'))
        root.addHandler(handler)
        logging.getLogger('scriba.worker').info('Debug logging started → %s', log_file)
