"""
TurtleWatch Backend - Turtle Schemas
=====================================

What:  Request bodies for turtle create/update and the turtle record.

Update contract:
    Full overwrite of health_condition, the nine measurements and the tag
    fields. name, species and sex are fixed after creation; if a client
    sends them to the update route they are ignored.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from turtlewatch.schemas.common import MeasurementFields, TagFields


class TurtleCreateRequest(TagFields, MeasurementFields):
    name: Optional[str] = None
    species: Optional[str] = None
    sex: Optional[str] = Field(default=None, description="male, female or unknown (any case)")
    health_condition: Optional[str] = None


class TurtleUpdateRequest(TagFields, MeasurementFields):
    health_condition: Optional[str] = None


class TurtleResponse(TagFields, MeasurementFields):
    id: int
    name: Optional[str] = None
    species: str
    sex: str
    health_condition: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class TurtleEnvelope(BaseModel):
    message: str
    turtle: TurtleResponse


class TurtleListEnvelope(BaseModel):
    message: str
    turtles: List[TurtleResponse]
