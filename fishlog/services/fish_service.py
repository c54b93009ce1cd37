"""Conversion of raw catch records into normalised fish rows."""

from __future__ import annotations

import logging
from typing import Protocol

from fishlog.schemas.catch import CatchRecord, ConversionResponse, Fish, FishCreate
from fishlog.services.catch_service import CatchRepositoryProtocol

logger = logging.getLogger(__name__)


class FishRepositoryProtocol(Protocol):
    async def save(self, fish: FishCreate) -> Fish: ...

    async def find_all(self) -> list[Fish]: ...


def fish_from_catch(record: CatchRecord) -> FishCreate:
    return FishCreate(
        name=record.name,
        species=record.species,
        weight=record.weight,
        date=record.date,
        location=record.location,
        gear=record.gear,
        zone=record.zone,
    )


def conversion_message(count: int) -> str:
    return f"Converted {count} entities successfully."


class FishService:
    def __init__(
        self,
        fish_repository: FishRepositoryProtocol,
        catch_repository: CatchRepositoryProtocol,
    ) -> None:
        self._fish_repository = fish_repository
        self._catch_repository = catch_repository

    async def save(self, fish: FishCreate) -> Fish:
        return await self._fish_repository.save(fish)

    async def find_all(self) -> list[Fish]:
        return await self._fish_repository.find_all()

    async def convert_data_to_fish(self) -> ConversionResponse:
        """Copy every stored catch record into the fish table.

        Running the conversion twice copies the records twice.
        """

        count = 0
        for record in await self._catch_repository.find_all():
            await self._fish_repository.save(fish_from_catch(record))
            count += 1
        logger.info("Converted %d catch records to fish", count)
        return ConversionResponse(converted=count, message=conversion_message(count))


__all__ = [
    "FishRepositoryProtocol",
    "FishService",
    "conversion_message",
    "fish_from_catch",
]
