from fastapi import APIRouter, Depends, Query

from fishlog.api.params import species_param
from fishlog.schemas.stats import AnglerResponse, AnglerStats, NameListResponse
from fishlog.services.catch_service import CatchService
from fishlog.services.dependencies import get_catch_service

router = APIRouter()


@router.get("/", response_model=NameListResponse)
@router.get("", response_model=NameListResponse, include_in_schema=False)
async def list_anglers(
    species: str | None = Query(
        None, min_length=1, description="Restrict to anglers who caught this species."
    ),
    service: CatchService = Depends(get_catch_service),
) -> NameListResponse:
    anglers = await service.list_anglers(species)
    return NameListResponse(items=anglers, total=len(anglers))


@router.get("/{name}", response_model=AnglerResponse)
async def get_angler(
    name: str,
    species: str = Depends(species_param),
    service: CatchService = Depends(get_catch_service),
) -> AnglerResponse:
    """Return an angler's catches of one species together with their totals."""
    return await service.find_by_name_and_species(name, species)


@router.get("/{name}/stats", response_model=AnglerStats)
async def get_angler_stats(
    name: str,
    species: str = Depends(species_param),
    service: CatchService = Depends(get_catch_service),
) -> AnglerStats:
    return await service.create_angler_stats(name, species)
