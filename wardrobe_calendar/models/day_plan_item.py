"""DayPlanItem ORM — link between a day plan and one wardrobe item.

Invariants:
    - (day_plan_id, item_id) is unique: a day plan holds a set of items
    - user_id equals the owner of day_plan_id (checked before every write)
    - Rows are inserted or deleted, never updated

Design Decisions:
    - user_id denormalized: reverse lookups scoped by user without joining day_plans
    - No FK to the wardrobe item table: items live in another service
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from wardrobe_calendar.db.base import Base


class DayPlanItem(Base):
    """Membership of a wardrobe item in a day plan."""
    __tablename__ = "day_plan_items"
    __table_args__ = (
        UniqueConstraint(
            "day_plan_id", "item_id", name="uq_day_plan_items_plan_item",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    day_plan_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("day_plans.id", ondelete="CASCADE"),
        nullable=False,
    )
    item_id: Mapped[uuid.UUID] = mapped_column(
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

    # Relationships
    day_plan: Mapped["DayPlan"] = relationship(
        "DayPlan", back_populates="items",
    )
