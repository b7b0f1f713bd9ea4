"""Identifier generation for records the engine creates."""

from __future__ import annotations

from collections.abc import Callable
from uuid import uuid4


IdGenerator = Callable[[], str]
"""Supplies opaque unique ids for new combatants, conditions and inventory entries."""


def uuid_id_generator() -> str:
    """Default id generator producing uuid4 strings."""
    return str(uuid4())


__all__ = [
    "IdGenerator",
    "uuid_id_generator",
]
