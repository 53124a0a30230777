"""Port: speech model resolution."""

from __future__ import annotations

from typing import Protocol


class ModelResolver(Protocol):
    """Abstract model resolver: maps a model reference to something the decoder can load."""

    def resolve(self, model_name: str) -> str:
        """Resolve a model reference. Raises ModelResolutionError on failure."""
        ...
