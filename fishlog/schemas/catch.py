"""Pydantic DTOs for catch records and their converted fish rows."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CatchRecordBase(BaseModel):
    name: str = Field(..., min_length=1, description="Angler name as reported.")
    species: str = Field(..., min_length=1, description="Species, e.g. 'Laks'.")
    weight: float = Field(..., ge=0, description="Weight of the fish in kilograms.")
    date: date
    location: str | None = None
    gear: str | None = None
    zone: str | None = None

    @field_validator("name", "species", mode="before")
    @classmethod
    def _strip_required_text(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("location", "gear", "zone", mode="before")
    @classmethod
    def _empty_string_to_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class CatchRecordCreate(CatchRecordBase):
    """Incoming scraped catch."""


class CatchRecord(CatchRecordBase):
    """Persisted catch record."""

    model_config = ConfigDict(from_attributes=True)

    id: int


class FishCreate(CatchRecordBase):
    """Fish row derived from a catch record."""


class Fish(CatchRecordBase):
    model_config = ConfigDict(from_attributes=True)

    id: int


class ConversionResponse(BaseModel):
    converted: int
    message: str


__all__ = [
    "CatchRecord",
    "CatchRecordBase",
    "CatchRecordCreate",
    "ConversionResponse",
    "Fish",
    "FishCreate",
]
