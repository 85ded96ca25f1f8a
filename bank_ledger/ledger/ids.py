"""Opaque identifiers for ledger entities."""

from uuid import uuid4


def create_id(prefix: str) -> str:
    """Return an id like ``transfer-3f9c1a7b2d4e``."""
    return f"{prefix}-{uuid4().hex[:12]}"
