"""Port: key-injection backend."""

from __future__ import annotations

from typing import Protocol


class KeyInjector(Protocol):
    """Types into whatever input target currently has focus."""

    def append_text(self, text: str) -> None:
        """Type *text*. Raises OutputBackendError if the backend rejects it."""
        ...

    def delete_back(self, count: int) -> None:
        """Erase *count* characters behind the cursor. Raises OutputBackendError on failure."""
        ...
