"""Models for receipt images and extracted pantry items."""

import asyncio
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field, field_validator


class StorageLocation(StrEnum):
    """Closed set of storage labels an item may be assigned."""

    PANTRY = "Pantry"
    FRIDGE = "Fridge"
    FREEZER = "Freezer"


class ImageResource(Protocol):
    """An image supplied by the caller for a single scan."""

    media_type: str | None

    async def read(self) -> bytes:
        """Return the full image content."""


@dataclass(frozen=True)
class InMemoryImage(ImageResource):
    """Image whose bytes are already loaded, e.g. from a request body."""

    content: bytes
    media_type: str | None = None

    async def read(self) -> bytes:
        return self.content


@dataclass(frozen=True)
class FileImage(ImageResource):
    """Image stored on the local filesystem."""

    path: Path
    media_type: str | None = None

    async def read(self) -> bytes:
        return await asyncio.to_thread(self.path.read_bytes)


class EncodedImagePart(BaseModel):
    """Transport-safe inline image payload."""

    model_config = ConfigDict(frozen=True)

    data: str
    mime_type: str

    def to_data_url(self) -> str:
        """Render the payload as a base64 data URL."""
        return f"data:{self.mime_type};base64,{self.data}"


class PantryItemCandidate(BaseModel):
    """Single structurally validated food item extracted from a receipt."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = Field(min_length=1)
    shelf_life: str = Field(alias="shelfLife", min_length=1)
    storage: StorageLocation

    @field_validator("name", "shelf_life")
    @classmethod
    def _strip_text(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("must not be blank")
        return cleaned
