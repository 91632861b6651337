"""Effective game status (pure helper for the orchestrator)."""
from __future__ import annotations

from datetime import datetime

from .types import GameStatus


def effective_game_status(
    status: str, closes_at: datetime | None, now: datetime
) -> GameStatus:
    """Resolve the status fed into GAME_LOADED.

    An 'active' game past its closes_at is reported as 'expired'. The clock
    is always passed in by the caller.
    """
    if status in ("completed", "generating", "ready", "expired"):
        return status  # type: ignore[return-value]
    if closes_at is not None and now >= closes_at:
        return "expired"
    return "active"
