"""
TurtleWatch Backend - Turtle Survey Event Model
================================================

What:  ORM model for `turtle_survey_events`: one row per field encounter
       with a turtle (nesting, stranding, in-water capture...).

Table Notes:
    - turtle_id references turtles.id; the foreign key is what rejects an
      unknown turtle on insert.
    - The time_* columns are times of day recorded during a nesting
      encounter (first seen → egg laying → covering → camouflage → sea).
"""

from datetime import datetime, time
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, Time, text
from sqlalchemy.orm import Mapped, mapped_column

from turtlewatch.database import Base
from turtlewatch.models.mixins import (
    MeasurementColumnsMixin,
    TagColumnsMixin,
    TimestampMixin,
    utcnow,
)


class TurtleSurveyEvent(TagColumnsMixin, MeasurementColumnsMixin, TimestampMixin, Base):
    __tablename__ = "turtle_survey_events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    event_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )
    event_type: Mapped[str] = mapped_column(String(50), nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    turtle_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("turtles.id", name="fk_turtle_survey_events_turtle_id"),
        nullable=False,
    )
    health_condition: Mapped[str] = mapped_column(Text, nullable=False)
    observer: Mapped[str] = mapped_column(String(255), nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text)

    time_first_seen: Mapped[Optional[time]] = mapped_column(Time)
    time_start_egg_laying: Mapped[Optional[time]] = mapped_column(Time)
    time_covering: Mapped[Optional[time]] = mapped_column(Time)
    time_end_camouflage: Mapped[Optional[time]] = mapped_column(Time)
    time_reach_sea: Mapped[Optional[time]] = mapped_column(Time)

    __table_args__ = (
        Index("idx_turtle_survey_events_turtle_id", "turtle_id", "event_date"),
    )

    def __repr__(self) -> str:
        return (
            f"<TurtleSurveyEvent(id={self.id}, turtle_id={self.turtle_id}, "
            f"event_type='{self.event_type}')>"
        )
