"""Base model shared by every pymapsync data model.

Models are immutable value objects: the registry and the controller pass
them around freely, so a feature handed to the surface can never be
mutated behind its back.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class MapSyncBaseModel(BaseModel):
    """Frozen pydantic base that ignores unknown keys."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )
