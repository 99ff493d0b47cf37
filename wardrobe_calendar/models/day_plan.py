"""DayPlan ORM — a user's calendar-date record that items and outfits attach to.

Invariants:
    - id is UUID primary key
    - At most one day plan per (user_id, date)
    - items_version / outfits_version increase by one on every applied association diff
    - cascade delete for item and outfit associations

Design Decisions:
    - One version counter per entity kind: an item write never conflicts with
      a concurrent outfit write on the same plan
"""

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import Date, DateTime, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from wardrobe_calendar.db.base import Base


class DayPlan(Base):
    """Day plan aggregate root — owns its item and outfit associations."""
    __tablename__ = "day_plans"
    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_day_plans_user_date"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )
    plan_date: Mapped[date] = mapped_column("date", Date, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    items_version: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    outfits_version: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    items: Mapped[list["DayPlanItem"]] = relationship(
        "DayPlanItem", back_populates="day_plan",
        cascade="all, delete-orphan", passive_deletes=True,
    )
    outfits: Mapped[list["DayPlanOutfit"]] = relationship(
        "DayPlanOutfit", back_populates="day_plan",
        cascade="all, delete-orphan", passive_deletes=True,
    )
