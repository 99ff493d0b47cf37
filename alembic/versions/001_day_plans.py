"""Day plans and their item/outfit association tables.

Revision ID: 001_day_plans
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_day_plans"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _association_table(name: str, entity_column: str) -> None:
    op.create_table(
        name,
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "day_plan_id", UUID(as_uuid=True),
            sa.ForeignKey("day_plans.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(entity_column, UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", UUID(as_uuid=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint(
            "day_plan_id", entity_column,
            name=f"uq_{name}_plan_{entity_column.removesuffix('_id')}",
        ),
    )
    op.create_index(f"ix_{name}_{entity_column}", name, [entity_column])
    op.create_index(f"ix_{name}_user_id", name, ["user_id"])


def upgrade() -> None:
    op.create_table(
        "day_plans",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", UUID(as_uuid=True), nullable=False),
        sa.Column("date", sa.Date, nullable=False),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("items_version", sa.Integer, nullable=False, server_default="0"),
        sa.Column("outfits_version", sa.Integer, nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("user_id", "date", name="uq_day_plans_user_date"),
    )
    op.create_index("ix_day_plans_user_id", "day_plans", ["user_id"])

    _association_table("day_plan_items", "item_id")
    _association_table("day_plan_outfits", "outfit_id")


def downgrade() -> None:
    op.drop_table("day_plan_outfits")
    op.drop_table("day_plan_items")
    op.drop_index("ix_day_plans_user_id", table_name="day_plans")
    op.drop_table("day_plans")
