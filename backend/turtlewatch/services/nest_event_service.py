"""
TurtleWatch Backend - Nest Event Service
=========================================

What:  Logs nest events (inventories, relocations...), lists them per nest
       and overwrites them.
Who:   /api/nest-events route handlers.

Create Flow (one transaction):
    ┌───────────────────────────┐      ┌──────────────────────────────┐
    │ SELECT id, nest_code      │ ───▶ │ INSERT turtle_nest_events    │
    │ FROM turtle_nests         │      │ (nest_id, nest_code, ...)    │
    │ WHERE nest_code = :code   │      └──────────────────────────────┘
    │ FOR UPDATE                │
    └───────────────────────────┘
    The nest row stays locked until the request's transaction commits, so
    the nest cannot disappear between the lookup and the insert. An unknown
    code raises NotFoundError before anything is written.
"""

import logging
from typing import List, Tuple

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from turtlewatch.exceptions import NotFoundError
from turtlewatch.models.mixins import utcnow
from turtlewatch.models.nest import TurtleNest
from turtlewatch.models.nest_event import TurtleNestEvent
from turtlewatch.schemas.nest_event import (
    NEST_EVENT_DATA_FIELDS,
    NestEventCreateRequest,
    NestEventResponse,
    NestEventUpdateRequest,
)
from turtlewatch.services.db_errors import error_boundary, is_foreign_key_violation
from turtlewatch.services.validation import require_fields

logger = logging.getLogger(__name__)


class NestEventService:

    async def create(
        self, db: AsyncSession, payload: NestEventCreateRequest
    ) -> NestEventResponse:
        """
        Raises:
            ValidationError: event_type or nest_code missing
            NotFoundError: no nest with this nest_code (no row written)
        """
        require_fields(payload, ("event_type", "nest_code"))

        with error_boundary("creating nest event", nest_code=payload.nest_code):
            result = await db.execute(
                select(TurtleNest.id, TurtleNest.nest_code)
                .where(TurtleNest.nest_code == payload.nest_code)
                .with_for_update()
            )
            nest = result.one_or_none()
            if nest is None:
                raise NotFoundError(resource="Nest", resource_id=payload.nest_code)

            event = TurtleNestEvent(
                event_type=payload.event_type,
                nest_id=nest.id,
                nest_code=nest.nest_code,
                **payload.model_dump(include=set(NEST_EVENT_DATA_FIELDS)),
            )
            db.add(event)
            await db.flush()
            await db.refresh(event)
            logger.info(
                "Nest event %s (%s) logged for nest %s",
                event.id, event.event_type, event.nest_code,
            )
            return NestEventResponse.model_validate(event)

    async def list_for_nest(
        self, db: AsyncSession, nest_code: str
    ) -> Tuple[List[NestEventResponse], int]:
        """
        Events of an existing nest, newest first, with their count.

        Raises:
            NotFoundError: no nest with this nest_code
        """
        with error_boundary("listing nest events", nest_code=nest_code):
            result = await db.execute(
                select(TurtleNest.id).where(TurtleNest.nest_code == nest_code)
            )
            if result.scalar_one_or_none() is None:
                raise NotFoundError(resource="Nest", resource_id=nest_code)

            result = await db.execute(
                select(TurtleNestEvent)
                .where(TurtleNestEvent.nest_code == nest_code)
                .order_by(TurtleNestEvent.created_at.desc(), TurtleNestEvent.id.desc())
            )
            events = [NestEventResponse.model_validate(e) for e in result.scalars().all()]
            return events, len(events)

    async def update(
        self, db: AsyncSession, event_id: int, payload: NestEventUpdateRequest
    ) -> NestEventResponse:
        """
        Full overwrite of a nest event. Counts absent from the payload reset
        to 0, other absent fields to null.

        Raises:
            ValidationError: event_type, nest_id or nest_code missing
            NotFoundError: no event with this id, or nest_id matches no nest
        """
        require_fields(payload, ("event_type", "nest_id", "nest_code"))

        with error_boundary("updating nest event", event_id=event_id):
            result = await db.execute(
                select(TurtleNestEvent).where(TurtleNestEvent.id == event_id)
            )
            event = result.scalar_one_or_none()
            if event is None:
                raise NotFoundError(resource="Nest event", resource_id=event_id)

            event.event_type = payload.event_type
            event.nest_id = payload.nest_id
            event.nest_code = payload.nest_code
            for field, value in payload.model_dump(include=set(NEST_EVENT_DATA_FIELDS)).items():
                setattr(event, field, value)
            event.updated_at = utcnow()

            try:
                await db.flush()
            except IntegrityError as e:
                if is_foreign_key_violation(e, "fk_turtle_nest_events_nest_id"):
                    raise NotFoundError(resource="Nest", resource_id=payload.nest_id)
                raise
            await db.refresh(event)
            logger.info("Nest event %s updated", event.id)
            return NestEventResponse.model_validate(event)


nest_event_service = NestEventService()
