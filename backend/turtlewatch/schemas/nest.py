"""
TurtleWatch Backend - Turtle Nest Schemas
==========================================

What:  One request body shared by nest create and update (same validation),
       and the nest record.
"""

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field


NEST_REQUIRED_FIELDS = (
    "nest_code",
    "depth_top_egg_h",
    "distance_to_sea_s",
    "gps_lat",
    "gps_long",
    "date_found",
    "beach",
)


class NestRequest(BaseModel):
    nest_code: Optional[str] = None
    total_num_eggs: Optional[int] = None
    current_num_eggs: Optional[int] = Field(
        default=None, description="Defaults to total_num_eggs"
    )
    depth_top_egg_h: Optional[float] = None
    depth_bottom_chamber_h: Optional[float] = None
    distance_to_sea_s: Optional[float] = None
    width_w: Optional[float] = None
    gps_lat: Optional[float] = None
    gps_long: Optional[float] = None
    tri_tl_desc: Optional[str] = None
    tri_tl_lat: Optional[float] = None
    tri_tl_long: Optional[float] = None
    tri_tl_distance: Optional[float] = None
    tri_tr_desc: Optional[str] = None
    tri_tr_lat: Optional[float] = None
    tri_tr_long: Optional[float] = None
    tri_tr_distance: Optional[float] = None
    status: Optional[str] = Field(
        default=None, description="incubating (default), hatching or hatched"
    )
    relocated: Optional[bool] = None
    is_archived: Optional[bool] = None
    date_found: Optional[date] = None
    beach: Optional[str] = None
    notes: Optional[str] = None


class NestResponse(BaseModel):
    id: int
    nest_code: str
    total_num_eggs: Optional[int] = None
    current_num_eggs: Optional[int] = None
    depth_top_egg_h: float
    depth_bottom_chamber_h: Optional[float] = None
    distance_to_sea_s: float
    width_w: Optional[float] = None
    gps_lat: float
    gps_long: float
    tri_tl_desc: Optional[str] = None
    tri_tl_lat: Optional[float] = None
    tri_tl_long: Optional[float] = None
    tri_tl_distance: Optional[float] = None
    tri_tr_desc: Optional[str] = None
    tri_tr_lat: Optional[float] = None
    tri_tr_long: Optional[float] = None
    tri_tr_distance: Optional[float] = None
    status: str
    relocated: bool
    is_archived: bool
    date_found: date
    beach: str
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class NestEnvelope(BaseModel):
    message: str
    nest: NestResponse


class NestListEnvelope(BaseModel):
    message: str
    nests: List[NestResponse]
