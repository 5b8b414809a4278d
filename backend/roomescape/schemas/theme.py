"""Theme schemas."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ThemeCreate(BaseModel):
    """Payload for creating a theme."""

    name: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1, max_length=1024)
    thumbnail: str = Field(min_length=1, max_length=1024)


class ThemeRead(BaseModel):
    """Serialized theme representation."""

    id: int
    name: str
    description: str
    thumbnail: str

    model_config = ConfigDict(from_attributes=True)
