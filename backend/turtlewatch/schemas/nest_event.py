"""
TurtleWatch Backend - Turtle Nest Event Schemas
================================================

What:  Request bodies for nest event create/update and the event record.

Count fields:
    Every egg/hatchling/track count defaults to 0; an explicit null is
    stored as 0 as well. Measurements, times and text default to null.
"""

from datetime import date, datetime, time
from typing import List, Optional

from pydantic import BaseModel, field_validator


NEST_EVENT_STAGES = (
    "hatched",
    "non_viable",
    "eye_spot",
    "early",
    "middle",
    "late",
    "piped_dead",
    "piped_alive",
)
PATHOGEN_SUFFIXES = ("", "_black_fungus", "_pink_fungus", "_green_fungus")

NEST_EVENT_COUNT_FIELDS = tuple(
    f"{stage}{suffix}" for stage in NEST_EVENT_STAGES for suffix in PATHOGEN_SUFFIXES
) + (
    "alive_within",
    "dead_within",
    "alive_above",
    "dead_above",
    "tracks_to_sea",
    "tracks_lost",
)

NEST_EVENT_MEASUREMENT_FIELDS = (
    "original_depth_top_egg_h",
    "original_depth_bottom_chamber_h",
    "original_width_w",
    "original_distance_to_sea_s",
    "reburied_depth_top_egg_h",
    "reburied_depth_bottom_chamber_h",
    "reburied_width_w",
    "reburied_distance_to_sea_s",
)

# Everything an event row stores besides id, event_type and the nest reference
NEST_EVENT_DATA_FIELDS = (
    ("event_date", "start_time", "end_time", "observer", "notes")
    + NEST_EVENT_MEASUREMENT_FIELDS
    + NEST_EVENT_COUNT_FIELDS
)


class NestEventCounts(BaseModel):
    hatched: int = 0
    hatched_black_fungus: int = 0
    hatched_pink_fungus: int = 0
    hatched_green_fungus: int = 0
    non_viable: int = 0
    non_viable_black_fungus: int = 0
    non_viable_pink_fungus: int = 0
    non_viable_green_fungus: int = 0
    eye_spot: int = 0
    eye_spot_black_fungus: int = 0
    eye_spot_pink_fungus: int = 0
    eye_spot_green_fungus: int = 0
    early: int = 0
    early_black_fungus: int = 0
    early_pink_fungus: int = 0
    early_green_fungus: int = 0
    middle: int = 0
    middle_black_fungus: int = 0
    middle_pink_fungus: int = 0
    middle_green_fungus: int = 0
    late: int = 0
    late_black_fungus: int = 0
    late_pink_fungus: int = 0
    late_green_fungus: int = 0
    piped_dead: int = 0
    piped_dead_black_fungus: int = 0
    piped_dead_pink_fungus: int = 0
    piped_dead_green_fungus: int = 0
    piped_alive: int = 0
    piped_alive_black_fungus: int = 0
    piped_alive_pink_fungus: int = 0
    piped_alive_green_fungus: int = 0
    alive_within: int = 0
    dead_within: int = 0
    alive_above: int = 0
    dead_above: int = 0
    tracks_to_sea: int = 0
    tracks_lost: int = 0

    @field_validator(*NEST_EVENT_COUNT_FIELDS, mode="before")
    @classmethod
    def null_count_is_zero(cls, v):
        return 0 if v is None else v


class NestEventMeasurements(BaseModel):
    original_depth_top_egg_h: Optional[float] = None
    original_depth_bottom_chamber_h: Optional[float] = None
    original_width_w: Optional[float] = None
    original_distance_to_sea_s: Optional[float] = None
    reburied_depth_top_egg_h: Optional[float] = None
    reburied_depth_bottom_chamber_h: Optional[float] = None
    reburied_width_w: Optional[float] = None
    reburied_distance_to_sea_s: Optional[float] = None


class NestEventCreateRequest(NestEventCounts, NestEventMeasurements):
    event_type: Optional[str] = None
    nest_code: Optional[str] = None
    event_date: Optional[date] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    observer: Optional[str] = None
    notes: Optional[str] = None


class NestEventUpdateRequest(NestEventCreateRequest):
    nest_id: Optional[int] = None


class NestEventResponse(NestEventCounts, NestEventMeasurements):
    id: int
    event_type: str
    nest_id: int
    nest_code: str
    event_date: Optional[date] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    observer: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class NestEventEnvelope(BaseModel):
    message: str
    nest_event: NestEventResponse


class NestEventListEnvelope(BaseModel):
    message: str
    nest_events: List[NestEventResponse]
    total: int
