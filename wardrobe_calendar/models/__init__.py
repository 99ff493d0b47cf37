"""ORM Models — SQLAlchemy declarative models for day plans and their associations.

Invariants:
    - All models inherit from Base (db/base.py)
    - DayPlan is the aggregate root; associations scoped by day_plan_id

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from wardrobe_calendar.models.day_plan import DayPlan  # noqa: F401
from wardrobe_calendar.models.day_plan_item import DayPlanItem  # noqa: F401
from wardrobe_calendar.models.day_plan_outfit import DayPlanOutfit  # noqa: F401
