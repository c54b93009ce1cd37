from fastapi import APIRouter, Depends

from fishlog.schemas.catch import ConversionResponse, Fish
from fishlog.services.dependencies import get_fish_service
from fishlog.services.fish_service import FishService

router = APIRouter()


@router.post("/convert", response_model=ConversionResponse)
async def convert_catches_to_fish(
    service: FishService = Depends(get_fish_service),
) -> ConversionResponse:
    """Copy every stored catch record into the fish table."""
    return await service.convert_data_to_fish()


@router.get("/", response_model=list[Fish])
@router.get("", response_model=list[Fish], include_in_schema=False)
async def list_fish(
    service: FishService = Depends(get_fish_service),
) -> list[Fish]:
    return await service.find_all()
