"""
TurtleWatch Backend - Turtle Service (Turtle Registry)
=======================================================

What:  Create, update, list and fetch turtles; list a turtle's survey events.
Who:   /api/turtles route handlers.

Normalization:
    sex is trimmed and lowercased, defaults to "unknown", and must be one of
    male / female / unknown.

Update:
    Full overwrite of health_condition, the nine measurements and the eight
    tag fields (absent tags become null). name, species and sex are only set
    at creation. updated_at is refreshed on every update.
"""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from turtlewatch.exceptions import NotFoundError
from turtlewatch.models.mixins import utcnow
from turtlewatch.models.turtle import Turtle
from turtlewatch.schemas.common import MEASUREMENT_FIELDS, TAG_FIELDS
from turtlewatch.schemas.survey_event import SurveyEventResponse
from turtlewatch.schemas.turtle import (
    TurtleCreateRequest,
    TurtleResponse,
    TurtleUpdateRequest,
)
from turtlewatch.services.db_errors import error_boundary
from turtlewatch.services.survey_event_service import survey_event_service
from turtlewatch.services.validation import normalize_choice, require_fields

logger = logging.getLogger(__name__)

TURTLE_SEXES = ("male", "female", "unknown")

CREATE_REQUIRED_FIELDS = ("species", "health_condition") + MEASUREMENT_FIELDS
UPDATE_REQUIRED_FIELDS = ("health_condition",) + MEASUREMENT_FIELDS

# Columns an update overwrites
MUTABLE_FIELDS = ("health_condition",) + MEASUREMENT_FIELDS + TAG_FIELDS


class TurtleService:

    async def _get_turtle(self, db: AsyncSession, turtle_id: int) -> Turtle:
        result = await db.execute(select(Turtle).where(Turtle.id == turtle_id))
        turtle = result.scalar_one_or_none()
        if turtle is None:
            raise NotFoundError(resource="Turtle", resource_id=turtle_id)
        return turtle

    async def create(self, db: AsyncSession, payload: TurtleCreateRequest) -> TurtleResponse:
        """
        Register a turtle.

        Raises:
            ValidationError: species, health_condition or a measurement
                missing, or sex outside male/female/unknown
        """
        require_fields(payload, CREATE_REQUIRED_FIELDS)
        sex = normalize_choice(payload.sex, TURTLE_SEXES, "unknown", "sex")

        with error_boundary("creating turtle", species=payload.species):
            turtle = Turtle(
                name=payload.name,
                species=payload.species,
                sex=sex,
                **payload.model_dump(include=set(MUTABLE_FIELDS)),
            )
            db.add(turtle)
            await db.flush()
            await db.refresh(turtle)
            logger.info("Turtle %s created (%s, %s)", turtle.id, turtle.species, turtle.sex)
            return TurtleResponse.model_validate(turtle)

    async def update(
        self, db: AsyncSession, turtle_id: int, payload: TurtleUpdateRequest
    ) -> TurtleResponse:
        """
        Overwrite a turtle's mutable fields.

        Raises:
            ValidationError: health_condition or a measurement missing
            NotFoundError: no turtle with this id (nothing is written)
        """
        require_fields(payload, UPDATE_REQUIRED_FIELDS)

        with error_boundary("updating turtle", turtle_id=turtle_id):
            turtle = await self._get_turtle(db, turtle_id)
            for field in MUTABLE_FIELDS:
                setattr(turtle, field, getattr(payload, field))
            turtle.updated_at = utcnow()
            await db.flush()
            await db.refresh(turtle)
            logger.info("Turtle %s updated", turtle.id)
            return TurtleResponse.model_validate(turtle)

    async def list_turtles(self, db: AsyncSession) -> List[TurtleResponse]:
        """All turtles, newest created first."""
        with error_boundary("listing turtles"):
            result = await db.execute(
                select(Turtle).order_by(Turtle.created_at.desc(), Turtle.id.desc())
            )
            return [TurtleResponse.model_validate(t) for t in result.scalars().all()]

    async def get_turtle(self, db: AsyncSession, turtle_id: int) -> TurtleResponse:
        """Raises NotFoundError for an unknown id."""
        with error_boundary("fetching turtle", turtle_id=turtle_id):
            turtle = await self._get_turtle(db, turtle_id)
            return TurtleResponse.model_validate(turtle)

    async def list_survey_events(
        self, db: AsyncSession, turtle_id: int
    ) -> List[SurveyEventResponse]:
        """Survey events of an existing turtle, newest first."""
        with error_boundary("listing turtle survey events", turtle_id=turtle_id):
            await self._get_turtle(db, turtle_id)
        return await survey_event_service.list_for_turtle(db, turtle_id)


turtle_service = TurtleService()
