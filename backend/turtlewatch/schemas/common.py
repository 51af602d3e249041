"""
TurtleWatch Backend - Shared Pydantic Schemas
==============================================

What:  Field groups shared by several request/response models, plus the
       error and health response formats.

Request models declare every field Optional: required-field checks belong to
the services, which report all missing fields in one ValidationError.
"""

from typing import Optional

from pydantic import BaseModel, Field


TAG_FIELDS = (
    "left_front_tag",
    "left_front_address",
    "right_front_tag",
    "right_front_address",
    "left_rear_tag",
    "left_rear_address",
    "right_rear_tag",
    "right_rear_address",
)

# Six carapace measurements + three tail lengths
MEASUREMENT_FIELDS = (
    "scl_max",
    "scl_min",
    "scw",
    "ccl_max",
    "ccl_min",
    "ccw",
    "tail_length_pl_vent",
    "tail_length_vent_tip",
    "tail_length_pl_tip",
)


class TagFields(BaseModel):
    left_front_tag: Optional[str] = None
    left_front_address: Optional[str] = None
    right_front_tag: Optional[str] = None
    right_front_address: Optional[str] = None
    left_rear_tag: Optional[str] = None
    left_rear_address: Optional[str] = None
    right_rear_tag: Optional[str] = None
    right_rear_address: Optional[str] = None


class MeasurementFields(BaseModel):
    scl_max: Optional[float] = Field(default=None, description="Straight carapace length, max (cm)")
    scl_min: Optional[float] = Field(default=None, description="Straight carapace length, min (cm)")
    scw: Optional[float] = Field(default=None, description="Straight carapace width (cm)")
    ccl_max: Optional[float] = Field(default=None, description="Curved carapace length, max (cm)")
    ccl_min: Optional[float] = Field(default=None, description="Curved carapace length, min (cm)")
    ccw: Optional[float] = Field(default=None, description="Curved carapace width (cm)")
    tail_length_pl_vent: Optional[float] = Field(default=None, description="Plastron to vent (cm)")
    tail_length_vent_tip: Optional[float] = Field(default=None, description="Vent to tail tip (cm)")
    tail_length_pl_tip: Optional[float] = Field(default=None, description="Plastron to tail tip (cm)")


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    """
    Error body returned by every failing endpoint.

    Example:
        {"error": "Nest 'N-042' not found"}
    """
    error: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
