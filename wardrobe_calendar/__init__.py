"""Wardrobe Calendar — day plans and their item/outfit associations.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
