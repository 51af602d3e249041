"""
TurtleWatch Backend - Turtle Model
===================================

What:  ORM model for the `turtles` table: one row per identified individual.
Who:   TurtleService (CRUD), SurveyEventService (join for name/species).

Query Patterns:
    - List: ORDER BY created_at DESC, id DESC
    - Survey events of a turtle: turtle_survey_events JOIN turtles
"""

from typing import Optional

from sqlalchemy import Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from turtlewatch.database import Base
from turtlewatch.models.mixins import (
    MeasurementColumnsMixin,
    TagColumnsMixin,
    TimestampMixin,
)


class Turtle(TagColumnsMixin, MeasurementColumnsMixin, TimestampMixin, Base):
    """
    An individual sea turtle.

    sex is always stored lowercase: male, female or unknown.
    """

    __tablename__ = "turtles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[Optional[str]] = mapped_column(String(100))
    species: Mapped[str] = mapped_column(String(100), nullable=False)
    sex: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
        default="unknown",
        server_default=text("'unknown'"),
    )
    health_condition: Mapped[str] = mapped_column(Text, nullable=False)

    __table_args__ = (
        Index("idx_turtles_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Turtle(id={self.id}, name='{self.name}', species='{self.species}')>"
