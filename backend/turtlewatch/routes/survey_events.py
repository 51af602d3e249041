"""
TurtleWatch Backend - Survey Event Route Handlers
==================================================

What:  POST /api/turtle_survey_events/create
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from turtlewatch.database import get_db_session
from turtlewatch.schemas.common import ErrorResponse
from turtlewatch.schemas.survey_event import SurveyEventCreateRequest, SurveyEventEnvelope
from turtlewatch.services.survey_event_service import survey_event_service

router = APIRouter(prefix="/api/turtle_survey_events", tags=["Survey Events"])


@router.post(
    "/create",
    response_model=SurveyEventEnvelope,
    responses={
        400: {"description": "Missing required field", "model": ErrorResponse},
        404: {"description": "Turtle not found", "model": ErrorResponse},
    },
    summary="Log a turtle survey event",
)
async def create_survey_event(
    payload: SurveyEventCreateRequest,
    db: AsyncSession = Depends(get_db_session),
) -> SurveyEventEnvelope:
    event = await survey_event_service.create(db, payload)
    return SurveyEventEnvelope(message="Survey event created successfully", survey_event=event)
