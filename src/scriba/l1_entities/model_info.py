"""Speech model catalog entity."""

from __future__ import annotations

from pydantic import BaseModel


class ModelInfo(BaseModel):
    key: str
    name: str
    archive: str  # official model name; also the extracted directory name
    size: str
    language: str
    description: str = ''

    def label(self) -> str:
        return f'{self.name} ({self.language}) - {self.description} ({self.size})'
