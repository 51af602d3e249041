"""
TurtleWatch Backend - Survey Event Service
===========================================

What:  Logs turtle survey events and reads them back joined with the
       parent turtle's name and species.
Who:   /api/turtle_survey_events (create) and TurtleService
       (survey events of one turtle).

Parent check:
    No lookup before the insert. The foreign key on turtle_id rejects an
    unknown turtle and the violation is reported as NotFoundError.
"""

import logging
from typing import List

from sqlalchemy import Select, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from turtlewatch.exceptions import NotFoundError
from turtlewatch.models.mixins import utcnow
from turtlewatch.models.survey_event import TurtleSurveyEvent
from turtlewatch.models.turtle import Turtle
from turtlewatch.schemas.common import MEASUREMENT_FIELDS, TAG_FIELDS
from turtlewatch.schemas.survey_event import (
    SURVEY_TIMING_FIELDS,
    SurveyEventCreateRequest,
    SurveyEventResponse,
)
from turtlewatch.services.db_errors import error_boundary, is_foreign_key_violation
from turtlewatch.services.validation import require_fields

logger = logging.getLogger(__name__)

SURVEY_REQUIRED_FIELDS = (
    ("event_type", "location", "turtle_id")
    + MEASUREMENT_FIELDS
    + ("health_condition", "observer")
)

SURVEY_OPTIONAL_FIELDS = TAG_FIELDS + SURVEY_TIMING_FIELDS + ("notes",)


def survey_events_with_turtle() -> Select:
    """SELECT event, turtle name, turtle species: events joined to their turtle."""
    return select(TurtleSurveyEvent, Turtle.name, Turtle.species).join(
        Turtle, Turtle.id == TurtleSurveyEvent.turtle_id
    )


def to_response(event: TurtleSurveyEvent, name, species) -> SurveyEventResponse:
    response = SurveyEventResponse.model_validate(event)
    response.turtle_name = name
    response.turtle_species = species
    return response


class SurveyEventService:

    async def create(
        self, db: AsyncSession, payload: SurveyEventCreateRequest
    ) -> SurveyEventResponse:
        """
        Insert a survey event; event_date defaults to now.

        Raises:
            ValidationError: a required field is missing
            NotFoundError: turtle_id matches no turtle
        """
        require_fields(payload, SURVEY_REQUIRED_FIELDS)

        with error_boundary("creating survey event", turtle_id=payload.turtle_id):
            values = payload.model_dump(
                include=set(SURVEY_REQUIRED_FIELDS + SURVEY_OPTIONAL_FIELDS)
            )
            values["event_date"] = payload.event_date or utcnow()
            event = TurtleSurveyEvent(**values)
            db.add(event)
            try:
                await db.flush()
            except IntegrityError as e:
                if is_foreign_key_violation(e, "fk_turtle_survey_events_turtle_id"):
                    raise NotFoundError(resource="Turtle", resource_id=payload.turtle_id)
                raise

            result = await db.execute(
                survey_events_with_turtle().where(TurtleSurveyEvent.id == event.id)
            )
            row, name, species = result.one()
            logger.info(
                "Survey event %s logged for turtle %s (%s)",
                row.id, row.turtle_id, row.event_type,
            )
            return to_response(row, name, species)

    async def list_for_turtle(
        self, db: AsyncSession, turtle_id: int
    ) -> List[SurveyEventResponse]:
        """Events of one turtle, newest event_date first (ties: newest id)."""
        with error_boundary("listing survey events", turtle_id=turtle_id):
            result = await db.execute(
                survey_events_with_turtle()
                .where(TurtleSurveyEvent.turtle_id == turtle_id)
                .order_by(TurtleSurveyEvent.event_date.desc(), TurtleSurveyEvent.id.desc())
            )
            return [to_response(event, name, species) for event, name, species in result.all()]


survey_event_service = SurveyEventService()
