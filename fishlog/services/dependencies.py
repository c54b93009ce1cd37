"""FastAPI dependency wiring for the catch and fish services.

Keeping the factories apart from the service modules leaves the services free
of web-layer concerns so the loader script and tests can build them directly.
"""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fishlog.cache import CacheClient, get_cache_client
from fishlog.db.connection import get_db
from fishlog.db.repositories.catch_repository import CatchRepository
from fishlog.db.repositories.fish_repository import FishRepository
from fishlog.services.catch_service import CatchService
from fishlog.services.fish_service import FishService
from fishlog.settings import get_settings


def get_catch_service(
    session: AsyncSession = Depends(get_db),
    cache: CacheClient = Depends(get_cache_client),
) -> CatchService:
    """Provide a :class:`CatchService` bound to the request session."""

    return CatchService(
        CatchRepository(session),
        cache=cache,
        best_weeks_limit=get_settings().best_weeks_limit,
        commit=session.commit,
    )


def get_fish_service(session: AsyncSession = Depends(get_db)) -> FishService:
    return FishService(FishRepository(session), CatchRepository(session))


__all__ = ["get_catch_service", "get_fish_service"]
