"""Repository package for the database access layer."""

from fishlog.db.repositories.base import BaseRepository
from fishlog.db.repositories.catch_repository import CatchRepository
from fishlog.db.repositories.fish_repository import FishRepository

__all__ = [
    "BaseRepository",
    "CatchRepository",
    "FishRepository",
]
