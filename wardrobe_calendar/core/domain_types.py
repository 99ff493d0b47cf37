"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - DayPlanId, UserId, EntityId wrap UUIDs — never use bare UUID in domain logic
    - EntityKind has exactly two members (item, outfit); every association
      operation is parameterized by one of them
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

DayPlanId = NewType("DayPlanId", UUID)
UserId = NewType("UserId", UUID)
EntityId = NewType("EntityId", UUID)    # item id or outfit id, per EntityKind


# ─── Enums ───────────────────────────────────────────────────────

class EntityKind(str, Enum):
    """Wardrobe entities that can be attached to a day plan."""
    ITEM = "item"
    OUTFIT = "outfit"

    @property
    def plural(self) -> str:
        return f"{self.value}s"


class OwnershipVerdict(str, Enum):
    """Outcome of checking a user against a day plan's owner."""
    AUTHORIZED = "authorized"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
