"""
TurtleWatch Backend - Nest Route Handlers
==========================================

Route Inventory:
    POST /api/nests/create
    GET  /api/nests
    GET  /api/nests/{nest_code}
    PUT  /api/nests/{nest_id}/update

Nests are fetched by their human-assigned code but updated by internal id.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from turtlewatch.database import get_db_session
from turtlewatch.schemas.common import ErrorResponse
from turtlewatch.schemas.nest import NestEnvelope, NestListEnvelope, NestRequest
from turtlewatch.services.nest_service import nest_service

router = APIRouter(prefix="/api/nests", tags=["Nests"])


@router.post(
    "/create",
    response_model=NestEnvelope,
    responses={
        400: {"description": "Missing field, invalid status or duplicate nest code",
              "model": ErrorResponse},
    },
    summary="Register a nest",
)
async def create_nest(
    payload: NestRequest,
    db: AsyncSession = Depends(get_db_session),
) -> NestEnvelope:
    nest = await nest_service.create(db, payload)
    return NestEnvelope(message="Nest created successfully", nest=nest)


@router.get(
    "",
    response_model=NestListEnvelope,
    summary="List nests",
    description="Ordered by date_found descending, then id descending.",
)
async def list_nests(db: AsyncSession = Depends(get_db_session)) -> NestListEnvelope:
    nests = await nest_service.list_nests(db)
    return NestListEnvelope(message="Nests retrieved successfully", nests=nests)


@router.get(
    "/{nest_code}",
    response_model=NestEnvelope,
    responses={404: {"description": "Nest not found", "model": ErrorResponse}},
    summary="Get a nest by its code",
)
async def get_nest(
    nest_code: str,
    db: AsyncSession = Depends(get_db_session),
) -> NestEnvelope:
    nest = await nest_service.get_by_code(db, nest_code)
    return NestEnvelope(message="Nest retrieved successfully", nest=nest)


@router.put(
    "/{nest_id}/update",
    response_model=NestEnvelope,
    responses={
        400: {"description": "Missing field, invalid status or duplicate nest code",
              "model": ErrorResponse},
        404: {"description": "Nest not found", "model": ErrorResponse},
    },
    summary="Overwrite a nest",
)
async def update_nest(
    nest_id: int,
    payload: NestRequest,
    db: AsyncSession = Depends(get_db_session),
) -> NestEnvelope:
    nest = await nest_service.update(db, nest_id, payload)
    return NestEnvelope(message="Nest updated successfully", nest=nest)
