"""Domain error types."""


class ModelResolutionError(Exception):
    """Raised when a speech model reference cannot be resolved to something loadable."""


class DecoderError(Exception):
    """Raised when the speech decoder fails to load or to accept audio."""


class AudioDeviceError(Exception):
    """Raised when the capture device is lost or changes mid-stream."""


class OutputBackendError(Exception):
    """Raised when the key-injection backend rejects an operation."""
