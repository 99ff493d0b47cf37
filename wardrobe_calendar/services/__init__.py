"""Services Layer — async orchestration and SQLAlchemy adapters around the pure core.

Invariants:
    - One AsyncSession per request, injected by the API layer
    - Services hold no state between calls beyond their injected collaborators

Design Decisions:
    - Adapters implement core/repository_protocols.py structurally (no base class)
"""
