"""
TurtleWatch Backend - Turtle Survey Event Schemas
==================================================

What:  Request body for logging a survey event and the event record, which
       carries the parent turtle's name and species from the join.
"""

from datetime import datetime, time
from typing import List, Optional

from pydantic import BaseModel, Field

from turtlewatch.schemas.common import MeasurementFields, TagFields


# Nesting timeline, in the order the observer records it
SURVEY_TIMING_FIELDS = (
    "time_first_seen",
    "time_start_egg_laying",
    "time_covering",
    "time_end_camouflage",
    "time_reach_sea",
)


class SurveyTimingFields(BaseModel):
    time_first_seen: Optional[time] = None
    time_start_egg_laying: Optional[time] = None
    time_covering: Optional[time] = None
    time_end_camouflage: Optional[time] = None
    time_reach_sea: Optional[time] = None


class SurveyEventCreateRequest(TagFields, MeasurementFields, SurveyTimingFields):
    event_date: Optional[datetime] = Field(default=None, description="Defaults to now")
    event_type: Optional[str] = None
    location: Optional[str] = None
    turtle_id: Optional[int] = None
    health_condition: Optional[str] = None
    observer: Optional[str] = None
    notes: Optional[str] = None


class SurveyEventResponse(TagFields, MeasurementFields, SurveyTimingFields):
    id: int
    event_date: datetime
    event_type: str
    location: str
    turtle_id: int
    health_condition: str
    observer: str
    notes: Optional[str] = None
    turtle_name: Optional[str] = None
    turtle_species: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class SurveyEventEnvelope(BaseModel):
    message: str
    survey_event: SurveyEventResponse


class SurveyEventListEnvelope(BaseModel):
    message: str
    survey_events: List[SurveyEventResponse]
