"""Audio stream markers passed alongside PCM frames."""

from __future__ import annotations

from pydantic import BaseModel


class Discontinuity(BaseModel):
    """The capture stream broke (device lost or changed) and was restarted."""

    model_config = {'frozen': True}

    reason: str = ''
