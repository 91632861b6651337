"""Legal precondition screens per event type.

An event dispatched from a screen outside its set is a no-op. ``None`` means
the event is legal from every screen.
"""
from __future__ import annotations

from typing import Dict, FrozenSet, Optional, Tuple

from .config import DEFAULT_CONFIG, GameConfig

LEGAL_SCREENS: Dict[str, Optional[FrozenSet[str]]] = {
    "GAME_LOADED": frozenset({"loading"}),
    "START_GAME": frozenset({"intro"}),
    "AUTH_SUCCESS": frozenset({"auth"}),
    "AUTH_RESTORED": None,
    "SUBMIT_ANSWER": frozenset({"round_play"}),
    "ANSWER_RESULT": frozenset({"round_play"}),
    "NEXT_ROUND": frozenset({"round_result"}),
    "VIEW_LEADERBOARD": frozenset({"final_results", "expired"}),
    "BACK_TO_RESULTS": frozenset({"leaderboard"}),
    "SET_ERROR": None,
    "CLEAR_ERROR": None,
    "RESUME_SESSION": None,
    "GAME_EXPIRED": None,
    # Prayer-bonus extension
    "GO_TO_PRAYER": frozenset({"final_results"}),
    "PRAYER_SUBMITTED": frozenset({"prayer_bonus"}),
    "SKIP_PRAYER": frozenset({"prayer_bonus"}),
}

PRAYER_EVENTS: FrozenSet[str] = frozenset(
    {"GO_TO_PRAYER", "PRAYER_SUBMITTED", "SKIP_PRAYER"}
)


def is_known_event(event_type: object) -> bool:
    return isinstance(event_type, str) and event_type in LEGAL_SCREENS


def is_feature_enabled(event_type: str, config: GameConfig | None = None) -> bool:
    cfg = config or DEFAULT_CONFIG
    if event_type in PRAYER_EVENTS:
        return cfg.prayer_bonus_enabled
    return True


def is_event_allowed(
    screen: str, event_type: str, *, config: GameConfig | None = None
) -> bool:
    """Return True if event_type may be dispatched while on screen."""
    if not is_known_event(event_type):
        return False
    if not is_feature_enabled(event_type, config):
        return False
    legal = LEGAL_SCREENS[event_type]
    return legal is None or screen in legal


def allowed_events(
    screen: str, *, config: GameConfig | None = None
) -> Tuple[str, ...]:
    """Events an orchestrator may dispatch from screen, in table order."""
    return tuple(
        event_type
        for event_type in LEGAL_SCREENS
        if is_event_allowed(screen, event_type, config=config)
    )
