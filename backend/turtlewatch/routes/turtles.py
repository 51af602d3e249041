"""
TurtleWatch Backend - Turtle Route Handlers
============================================

Route Inventory:
    POST /api/turtles/create
    GET  /api/turtles
    GET  /api/turtles/{turtle_id}
    PUT  /api/turtles/{turtle_id}/update
    GET  /api/turtles/{turtle_id}/survey_events
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from turtlewatch.database import get_db_session
from turtlewatch.schemas.common import ErrorResponse
from turtlewatch.schemas.survey_event import SurveyEventListEnvelope
from turtlewatch.schemas.turtle import (
    TurtleCreateRequest,
    TurtleEnvelope,
    TurtleListEnvelope,
    TurtleUpdateRequest,
)
from turtlewatch.services.turtle_service import turtle_service

router = APIRouter(prefix="/api/turtles", tags=["Turtles"])

NOT_FOUND = {404: {"description": "Turtle not found", "model": ErrorResponse}}


@router.post(
    "/create",
    response_model=TurtleEnvelope,
    responses={400: {"description": "Missing field or invalid sex", "model": ErrorResponse}},
    summary="Register a turtle",
)
async def create_turtle(
    payload: TurtleCreateRequest,
    db: AsyncSession = Depends(get_db_session),
) -> TurtleEnvelope:
    turtle = await turtle_service.create(db, payload)
    return TurtleEnvelope(message="Turtle created successfully", turtle=turtle)


@router.get("", response_model=TurtleListEnvelope, summary="List turtles, newest first")
async def list_turtles(db: AsyncSession = Depends(get_db_session)) -> TurtleListEnvelope:
    turtles = await turtle_service.list_turtles(db)
    return TurtleListEnvelope(message="Turtles retrieved successfully", turtles=turtles)


@router.get(
    "/{turtle_id}",
    response_model=TurtleEnvelope,
    responses=NOT_FOUND,
    summary="Get one turtle",
)
async def get_turtle(
    turtle_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> TurtleEnvelope:
    turtle = await turtle_service.get_turtle(db, turtle_id)
    return TurtleEnvelope(message="Turtle retrieved successfully", turtle=turtle)


@router.put(
    "/{turtle_id}/update",
    response_model=TurtleEnvelope,
    responses={
        400: {"description": "Missing field", "model": ErrorResponse},
        **NOT_FOUND,
    },
    summary="Overwrite a turtle's health, measurements and tags",
)
async def update_turtle(
    turtle_id: int,
    payload: TurtleUpdateRequest,
    db: AsyncSession = Depends(get_db_session),
) -> TurtleEnvelope:
    turtle = await turtle_service.update(db, turtle_id, payload)
    return TurtleEnvelope(message="Turtle updated successfully", turtle=turtle)


@router.get(
    "/{turtle_id}/survey_events",
    response_model=SurveyEventListEnvelope,
    responses=NOT_FOUND,
    summary="List a turtle's survey events, newest first",
)
async def list_turtle_survey_events(
    turtle_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> SurveyEventListEnvelope:
    events = await turtle_service.list_survey_events(db, turtle_id)
    return SurveyEventListEnvelope(
        message="Survey events retrieved successfully",
        survey_events=events,
    )
