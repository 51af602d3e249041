"""
TurtleWatch Backend - Nest Service (Nest Registry)
===================================================

What:  Create, update, list and fetch nests.
Who:   /api/nests route handlers.

Create and update share one normalization pass:
    1. nest_code, depth_top_egg_h, distance_to_sea_s, gps_lat, gps_long,
       date_found and beach are required
    2. status: trimmed + lowercased, default "incubating", must be one of
       incubating / hatching / hatched
    3. current_num_eggs defaults to total_num_eggs
    4. relocated / is_archived default to false

A nest_code already used by another row raises ConflictError.
"""

import logging
from typing import Any, Dict, List

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from turtlewatch.exceptions import ConflictError, NotFoundError
from turtlewatch.models.mixins import utcnow
from turtlewatch.models.nest import TurtleNest
from turtlewatch.schemas.nest import NEST_REQUIRED_FIELDS, NestRequest, NestResponse
from turtlewatch.services.db_errors import error_boundary, is_unique_violation
from turtlewatch.services.validation import normalize_choice, require_fields

logger = logging.getLogger(__name__)

NEST_STATUSES = ("incubating", "hatching", "hatched")


def nest_values(payload: NestRequest) -> Dict[str, Any]:
    """Validate a nest payload and return the full set of column values."""
    require_fields(payload, NEST_REQUIRED_FIELDS)

    values = payload.model_dump()
    values["status"] = normalize_choice(payload.status, NEST_STATUSES, "incubating", "status")
    if values["current_num_eggs"] is None:
        values["current_num_eggs"] = payload.total_num_eggs
    values["relocated"] = bool(payload.relocated)
    values["is_archived"] = bool(payload.is_archived)
    return values


class NestService:

    async def _flush_or_conflict(self, db: AsyncSession, nest_code: str) -> None:
        try:
            await db.flush()
        except IntegrityError as e:
            if is_unique_violation(e, "uq_turtle_nests_nest_code"):
                logger.info("Nest code %s already in use", nest_code)
                raise ConflictError(
                    message=f"Nest code '{nest_code}' already exists",
                    context={"nest_code": nest_code},
                )
            raise

    async def create(self, db: AsyncSession, payload: NestRequest) -> NestResponse:
        """
        Raises:
            ValidationError: required field missing or invalid status
            ConflictError: nest_code already exists
        """
        values = nest_values(payload)

        with error_boundary("creating nest", nest_code=payload.nest_code):
            nest = TurtleNest(**values)
            db.add(nest)
            await self._flush_or_conflict(db, payload.nest_code)
            await db.refresh(nest)
            logger.info("Nest %s created (code=%s)", nest.id, nest.nest_code)
            return NestResponse.model_validate(nest)

    async def update(
        self, db: AsyncSession, nest_id: int, payload: NestRequest
    ) -> NestResponse:
        """
        Full overwrite of a nest.

        Raises:
            ValidationError: required field missing or invalid status
            NotFoundError: no nest with this id
            ConflictError: nest_code belongs to a different nest
        """
        values = nest_values(payload)

        with error_boundary("updating nest", nest_id=nest_id):
            result = await db.execute(select(TurtleNest).where(TurtleNest.id == nest_id))
            nest = result.scalar_one_or_none()
            if nest is None:
                raise NotFoundError(resource="Nest", resource_id=nest_id)

            for field, value in values.items():
                setattr(nest, field, value)
            nest.updated_at = utcnow()
            await self._flush_or_conflict(db, payload.nest_code)
            await db.refresh(nest)
            logger.info("Nest %s updated", nest.id)
            return NestResponse.model_validate(nest)

    async def list_nests(self, db: AsyncSession) -> List[NestResponse]:
        """All nests, most recently found first (ties: highest id first)."""
        with error_boundary("listing nests"):
            result = await db.execute(
                select(TurtleNest).order_by(
                    TurtleNest.date_found.desc(), TurtleNest.id.desc()
                )
            )
            return [NestResponse.model_validate(n) for n in result.scalars().all()]

    async def get_by_code(self, db: AsyncSession, nest_code: str) -> NestResponse:
        """Raises NotFoundError for an unknown code."""
        with error_boundary("fetching nest", nest_code=nest_code):
            result = await db.execute(
                select(TurtleNest).where(TurtleNest.nest_code == nest_code)
            )
            nest = result.scalar_one_or_none()
            if nest is None:
                raise NotFoundError(resource="Nest", resource_id=nest_code)
            return NestResponse.model_validate(nest)


nest_service = NestService()
