"""
TurtleWatch Backend - Turtle Nest Event Model
==============================================

What:  ORM model for `turtle_nest_events`: inventories, relocations and
       other visits to a nest.

Table Notes:
    - nest_id references turtle_nests.id; nest_code is a denormalized copy so
      events can be listed by code without a join.
    - Egg counts are cross-tabulated: each developmental stage has a total
      plus three fungal-infection categories (black, pink, green).
    - Every count column is NOT NULL DEFAULT 0.
"""

from datetime import date, time
from typing import Optional

from sqlalchemy import Date, Float, ForeignKey, Index, Integer, String, Text, Time, text
from sqlalchemy.orm import Mapped, mapped_column

from turtlewatch.database import Base
from turtlewatch.models.mixins import TimestampMixin


def _count():
    return mapped_column(Integer, nullable=False, default=0, server_default=text("0"))


class TurtleNestEvent(TimestampMixin, Base):
    __tablename__ = "turtle_nest_events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    event_type: Mapped[str] = mapped_column(String(50), nullable=False)
    event_date: Mapped[Optional[date]] = mapped_column(Date)
    nest_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("turtle_nests.id", name="fk_turtle_nest_events_nest_id"),
        nullable=False,
    )
    nest_code: Mapped[str] = mapped_column(String(50), nullable=False)

    # ── Chamber measurements before / after relocation (cm) ───────────────
    original_depth_top_egg_h: Mapped[Optional[float]] = mapped_column(Float)
    original_depth_bottom_chamber_h: Mapped[Optional[float]] = mapped_column(Float)
    original_width_w: Mapped[Optional[float]] = mapped_column(Float)
    original_distance_to_sea_s: Mapped[Optional[float]] = mapped_column(Float)
    reburied_depth_top_egg_h: Mapped[Optional[float]] = mapped_column(Float)
    reburied_depth_bottom_chamber_h: Mapped[Optional[float]] = mapped_column(Float)
    reburied_width_w: Mapped[Optional[float]] = mapped_column(Float)
    reburied_distance_to_sea_s: Mapped[Optional[float]] = mapped_column(Float)

    # ── Egg counts by developmental stage and infection ───────────────────
    hatched: Mapped[int] = _count()
    hatched_black_fungus: Mapped[int] = _count()
    hatched_pink_fungus: Mapped[int] = _count()
    hatched_green_fungus: Mapped[int] = _count()
    non_viable: Mapped[int] = _count()
    non_viable_black_fungus: Mapped[int] = _count()
    non_viable_pink_fungus: Mapped[int] = _count()
    non_viable_green_fungus: Mapped[int] = _count()
    eye_spot: Mapped[int] = _count()
    eye_spot_black_fungus: Mapped[int] = _count()
    eye_spot_pink_fungus: Mapped[int] = _count()
    eye_spot_green_fungus: Mapped[int] = _count()
    early: Mapped[int] = _count()
    early_black_fungus: Mapped[int] = _count()
    early_pink_fungus: Mapped[int] = _count()
    early_green_fungus: Mapped[int] = _count()
    middle: Mapped[int] = _count()
    middle_black_fungus: Mapped[int] = _count()
    middle_pink_fungus: Mapped[int] = _count()
    middle_green_fungus: Mapped[int] = _count()
    late: Mapped[int] = _count()
    late_black_fungus: Mapped[int] = _count()
    late_pink_fungus: Mapped[int] = _count()
    late_green_fungus: Mapped[int] = _count()
    piped_dead: Mapped[int] = _count()
    piped_dead_black_fungus: Mapped[int] = _count()
    piped_dead_pink_fungus: Mapped[int] = _count()
    piped_dead_green_fungus: Mapped[int] = _count()
    piped_alive: Mapped[int] = _count()
    piped_alive_black_fungus: Mapped[int] = _count()
    piped_alive_pink_fungus: Mapped[int] = _count()
    piped_alive_green_fungus: Mapped[int] = _count()

    # ── Hatchlings found in / above the chamber ───────────────────────────
    alive_within: Mapped[int] = _count()
    dead_within: Mapped[int] = _count()
    alive_above: Mapped[int] = _count()
    dead_above: Mapped[int] = _count()

    # ── Hatchling tracks ──────────────────────────────────────────────────
    tracks_to_sea: Mapped[int] = _count()
    tracks_lost: Mapped[int] = _count()

    start_time: Mapped[Optional[time]] = mapped_column(Time)
    end_time: Mapped[Optional[time]] = mapped_column(Time)
    observer: Mapped[Optional[str]] = mapped_column(String(255))
    notes: Mapped[Optional[str]] = mapped_column(Text)

    __table_args__ = (
        Index("idx_turtle_nest_events_nest_code", "nest_code", "created_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<TurtleNestEvent(id={self.id}, nest_code='{self.nest_code}', "
            f"event_type='{self.event_type}')>"
        )
