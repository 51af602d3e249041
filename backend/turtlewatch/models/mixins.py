"""
TurtleWatch Backend - Shared Column Mixins
===========================================

What:  Column groups reused by several tables.
How:   SQLAlchemy copies `mapped_column` attributes declared on a mixin into
       every mapped subclass, so each table gets its own Column objects.

    TimestampMixin          created_at / updated_at
    TagColumnsMixin         four limb tag/address pairs
    MeasurementColumnsMixin six carapace measurements + three tail lengths
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Float, String, text
from sqlalchemy.orm import Mapped, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )


class TagColumnsMixin:
    """Flipper tags: one tag number and one return address per limb."""

    left_front_tag: Mapped[Optional[str]] = mapped_column(String(50))
    left_front_address: Mapped[Optional[str]] = mapped_column(String(255))
    right_front_tag: Mapped[Optional[str]] = mapped_column(String(50))
    right_front_address: Mapped[Optional[str]] = mapped_column(String(255))
    left_rear_tag: Mapped[Optional[str]] = mapped_column(String(50))
    left_rear_address: Mapped[Optional[str]] = mapped_column(String(255))
    right_rear_tag: Mapped[Optional[str]] = mapped_column(String(50))
    right_rear_address: Mapped[Optional[str]] = mapped_column(String(255))


class MeasurementColumnsMixin:
    """
    Morphometrics in centimetres.

    scl = straight carapace length, scw = straight carapace width,
    ccl = curved carapace length, ccw = curved carapace width.
    Tail lengths: plastron→vent, vent→tip, plastron→tip.
    """

    scl_max: Mapped[Optional[float]] = mapped_column(Float)
    scl_min: Mapped[Optional[float]] = mapped_column(Float)
    scw: Mapped[Optional[float]] = mapped_column(Float)
    ccl_max: Mapped[Optional[float]] = mapped_column(Float)
    ccl_min: Mapped[Optional[float]] = mapped_column(Float)
    ccw: Mapped[Optional[float]] = mapped_column(Float)
    tail_length_pl_vent: Mapped[Optional[float]] = mapped_column(Float)
    tail_length_vent_tip: Mapped[Optional[float]] = mapped_column(Float)
    tail_length_pl_tip: Mapped[Optional[float]] = mapped_column(Float)
