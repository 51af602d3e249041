"""
TurtleWatch Backend - Nest Event Route Handlers
================================================

Route Inventory:
    POST /api/nest-events/create
    GET  /api/nest-events/{nest_code}
    PUT  /api/nest-events/{event_id}
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from turtlewatch.database import get_db_session
from turtlewatch.schemas.common import ErrorResponse
from turtlewatch.schemas.nest_event import (
    NestEventCreateRequest,
    NestEventEnvelope,
    NestEventListEnvelope,
    NestEventUpdateRequest,
)
from turtlewatch.services.nest_event_service import nest_event_service

router = APIRouter(prefix="/api/nest-events", tags=["Nest Events"])


@router.post(
    "/create",
    response_model=NestEventEnvelope,
    responses={
        400: {"description": "event_type or nest_code missing", "model": ErrorResponse},
        404: {"description": "Nest not found", "model": ErrorResponse},
    },
    summary="Log a nest event",
)
async def create_nest_event(
    payload: NestEventCreateRequest,
    db: AsyncSession = Depends(get_db_session),
) -> NestEventEnvelope:
    event = await nest_event_service.create(db, payload)
    return NestEventEnvelope(message="Nest event created successfully", nest_event=event)


@router.get(
    "/{nest_code}",
    response_model=NestEventListEnvelope,
    responses={404: {"description": "Nest not found", "model": ErrorResponse}},
    summary="List a nest's events, newest first",
)
async def list_nest_events(
    nest_code: str,
    db: AsyncSession = Depends(get_db_session),
) -> NestEventListEnvelope:
    events, total = await nest_event_service.list_for_nest(db, nest_code)
    return NestEventListEnvelope(
        message="Nest events retrieved successfully",
        nest_events=events,
        total=total,
    )


@router.put(
    "/{event_id}",
    response_model=NestEventEnvelope,
    responses={
        400: {"description": "event_type, nest_id or nest_code missing", "model": ErrorResponse},
        404: {"description": "Nest event or nest not found", "model": ErrorResponse},
    },
    summary="Overwrite a nest event",
)
async def update_nest_event(
    event_id: int,
    payload: NestEventUpdateRequest,
    db: AsyncSession = Depends(get_db_session),
) -> NestEventEnvelope:
    event = await nest_event_service.update(db, event_id, payload)
    return NestEventEnvelope(message="Nest event updated successfully", nest_event=event)
