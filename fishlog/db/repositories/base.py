"""Base repository utilities shared across all repository implementations."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession


class BaseRepository:
    """Base repository holding the session and common persistence helpers."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _persist_all(self, entities: Iterable[Any]) -> list[Any]:
        """Add ``entities`` and flush so database-generated ids are populated."""

        items = list(entities)
        if not items:
            return []
        self._session.add_all(items)
        await self._session.flush()
        return items
