"""Identifier generation for new entities."""

from typing import Callable
from uuid import uuid4


IdFactory = Callable[[], str]


def generate_id() -> str:
    """Opaque id, unique for the lifetime of any realistic document."""
    return uuid4().hex[:12]
