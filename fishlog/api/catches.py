from fastapi import APIRouter, Depends, Query, status

from fishlog.schemas.catch import CatchRecord, CatchRecordCreate
from fishlog.services.catch_service import CatchService
from fishlog.services.dependencies import get_catch_service

router = APIRouter()


@router.post(
    "/",
    response_model=list[CatchRecord],
    status_code=status.HTTP_201_CREATED,
)
@router.post(
    "",
    response_model=list[CatchRecord],
    status_code=status.HTTP_201_CREATED,
    include_in_schema=False,
)
async def save_catches(
    records: list[CatchRecordCreate],
    service: CatchService = Depends(get_catch_service),
) -> list[CatchRecord]:
    """Store a batch of scraped catch records."""
    return await service.save_all(records)


@router.get("/", response_model=list[CatchRecord])
@router.get("", response_model=list[CatchRecord], include_in_schema=False)
async def list_catches(
    name: str | None = Query(
        None, min_length=1, description="Only return catches reported by this angler."
    ),
    service: CatchService = Depends(get_catch_service),
) -> list[CatchRecord]:
    if name is not None:
        return await service.find_by_name(name)
    return await service.find_all()


@router.get("/{record_id}", response_model=CatchRecord)
async def get_catch(
    record_id: int,
    service: CatchService = Depends(get_catch_service),
) -> CatchRecord:
    """Fetch one catch record; unknown ids produce a structured 404 payload."""
    return await service.get_record(record_id)
