"""
TurtleWatch Backend - Turtle Nest Model
========================================

What:  ORM model for `turtle_nests`: one row per physical nest on a beach.

Table Design:
    - nest_code: human-assigned code painted on the nest stake; unique
      (uq_turtle_nests_nest_code) and used in URLs instead of the id.
    - status: incubating → hatching → hatched, stored lowercase.
    - Two triangulation points (tri_tl = top-left, tri_tr = top-right) let a
      team re-find the egg chamber after the stake is lost.
    - is_archived is a plain flag; rows are never deleted.

    Index on (date_found, id): backs the list ordering
    (date_found DESC, id DESC).
"""

from datetime import date
from typing import Optional

from sqlalchemy import (
    Boolean,
    Date,
    Float,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from turtlewatch.database import Base
from turtlewatch.models.mixins import TimestampMixin


class TurtleNest(TimestampMixin, Base):
    __tablename__ = "turtle_nests"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nest_code: Mapped[str] = mapped_column(String(50), nullable=False)

    # ── Eggs ──────────────────────────────────────────────────────────────
    total_num_eggs: Mapped[Optional[int]] = mapped_column(Integer)
    current_num_eggs: Mapped[Optional[int]] = mapped_column(Integer)

    # ── Physical measurements (cm) ────────────────────────────────────────
    depth_top_egg_h: Mapped[float] = mapped_column(Float, nullable=False)
    depth_bottom_chamber_h: Mapped[Optional[float]] = mapped_column(Float)
    distance_to_sea_s: Mapped[float] = mapped_column(Float, nullable=False)
    width_w: Mapped[Optional[float]] = mapped_column(Float)
    gps_lat: Mapped[float] = mapped_column(Float, nullable=False)
    gps_long: Mapped[float] = mapped_column(Float, nullable=False)

    # ── Triangulation ─────────────────────────────────────────────────────
    tri_tl_desc: Mapped[Optional[str]] = mapped_column(Text)
    tri_tl_lat: Mapped[Optional[float]] = mapped_column(Float)
    tri_tl_long: Mapped[Optional[float]] = mapped_column(Float)
    tri_tl_distance: Mapped[Optional[float]] = mapped_column(Float)
    tri_tr_desc: Mapped[Optional[str]] = mapped_column(Text)
    tri_tr_lat: Mapped[Optional[float]] = mapped_column(Float)
    tri_tr_long: Mapped[Optional[float]] = mapped_column(Float)
    tri_tr_distance: Mapped[Optional[float]] = mapped_column(Float)

    # ── State ─────────────────────────────────────────────────────────────
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="incubating",
        server_default=text("'incubating'"),
    )
    relocated: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )
    is_archived: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )
    date_found: Mapped[date] = mapped_column(Date, nullable=False)
    beach: Mapped[str] = mapped_column(String(255), nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text)

    __table_args__ = (
        UniqueConstraint("nest_code", name="uq_turtle_nests_nest_code"),
        Index("idx_turtle_nests_date_found", "date_found", "id"),
    )

    def __repr__(self) -> str:
        return (
            f"<TurtleNest(id={self.id}, nest_code='{self.nest_code}', "
            f"status='{self.status}')>"
        )
