"""DayPlanOutfit ORM — link between a day plan and one saved outfit.

Invariants:
    - (day_plan_id, outfit_id) is unique
    - user_id equals the owner of day_plan_id
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from wardrobe_calendar.db.base import Base


class DayPlanOutfit(Base):
    """Membership of an outfit in a day plan."""
    __tablename__ = "day_plan_outfits"
    __table_args__ = (
        UniqueConstraint(
            "day_plan_id", "outfit_id", name="uq_day_plan_outfits_plan_outfit",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    day_plan_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("day_plans.id", ondelete="CASCADE"),
        nullable=False,
    )
    outfit_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    day_plan: Mapped["DayPlan"] = relationship(
        "DayPlan", back_populates="outfits",
    )
