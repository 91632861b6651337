"""Core game flow transitions (pure, no UI/network).

This module implements the player-facing flow of a Hi-Lo trivia game.
All functions are deterministic and side-effect free (no I/O, no clock, no
randomness).

Architecture:
- State is a plain dict (GameState) created by initial_state()
- Events are plain dicts with a 'type' field (GAME_LOADED, SUBMIT_ANSWER, ...)
- apply_event() takes (state, event) and returns a TransitionOutcome
- transition() is the bare next_state = transition(state, event) contract
- Changes are made on a deepcopy so the caller's state is never touched
- The orchestrator (UI, network, timers) owns the single long-lived state

Screens:
    loading -> intro -> auth -> round_play <-> round_result (x4)
    -> final_results <-> leaderboard
    expired is reachable from every screen.

Rejected events:
- Unknown type or malformed payload -> Rejection(kind='invalid_event')
- Dispatched outside its legal screens -> Rejection(kind='illegal_screen')
- Extension event with its flag off -> Rejection(kind='feature_disabled')
In every case the returned state equals the input state.
"""
from __future__ import annotations

import logging
from copy import deepcopy
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from .config import DEFAULT_CONFIG, GameConfig
from .guard import LEGAL_SCREENS, is_feature_enabled, is_known_event
from .resume import build_resumed_state
from .rounds import TOTAL_ROUNDS
from .types import GameState
from .validation import GameEvent, parse_event

logger = logging.getLogger(__name__)


@dataclass
class Rejection:
    """Why an event was treated as a no-op."""

    kind: str
    message: str | None = None


@dataclass
class TransitionOutcome:
    """Result of applying one event."""

    state: GameState
    applied: bool
    rejection: Rejection | None = None


def initial_state() -> GameState:
    """Create the state for a fresh page load."""
    return {
        "screen": "loading",
        "current_round": 1,
        "rounds": (),
        "total_score": 0,
        "authenticated": False,
        "profile_id": None,
        "first_name": "",
        "session_id": None,
        "submitting": False,
        "last_miss": None,
        "error": None,
        "prayer_submitted": False,
    }


def _reject(state: GameState, kind: str, message: str | None = None) -> TransitionOutcome:
    logger.debug(f"Event rejected ({kind}): {message}")
    return TransitionOutcome(
        state=state, applied=False, rejection=Rejection(kind=kind, message=message)
    )


def _apply_transition(
    state: GameState, event: GameEvent, config: GameConfig
) -> GameState:
    """Apply an already validated, already permitted event.

    Works on a deepcopy of the provided state.
    """
    new_state: GameState = deepcopy(state)
    etype = event.type

    if etype == "GAME_LOADED":
        new_state["screen"] = "intro" if event.status == "active" else "expired"

    elif etype == "START_GAME":
        if new_state["authenticated"]:
            new_state["screen"] = "round_play"
            new_state["current_round"] = 1
        else:
            new_state["screen"] = "auth"

    elif etype in ("AUTH_SUCCESS", "AUTH_RESTORED"):
        new_state["authenticated"] = True
        new_state["profile_id"] = event.profile_id
        new_state["first_name"] = event.first_name
        # Silent restoration keeps whatever screen is showing.
        if etype == "AUTH_SUCCESS":
            new_state["screen"] = "round_play"

    elif etype == "SUBMIT_ANSWER":
        new_state["submitting"] = True
        new_state["error"] = None
        new_state["last_miss"] = None

    elif etype == "ANSWER_RESULT":
        result = event.result
        new_state["submitting"] = False
        if not result.on_list:
            # Miss: retry the same round, leave no trace in rounds.
            new_state["last_miss"] = result.submitted_answer
        else:
            new_state["rounds"] = tuple(new_state["rounds"]) + (result.to_round(),)
            # Server total is authoritative (may include out-of-band bonuses).
            new_state["total_score"] = result.total_score
            if result.session_id is not None:
                new_state["session_id"] = result.session_id
            new_state["last_miss"] = None
            new_state["screen"] = "round_result"

    elif etype == "NEXT_ROUND":
        if new_state["current_round"] >= TOTAL_ROUNDS:
            new_state["screen"] = "final_results"
        else:
            new_state["screen"] = "round_play"
            new_state["current_round"] = new_state["current_round"] + 1

    elif etype == "VIEW_LEADERBOARD":
        new_state["screen"] = "leaderboard"

    elif etype == "BACK_TO_RESULTS":
        new_state["screen"] = "final_results"

    elif etype == "SET_ERROR":
        new_state["error"] = event.message
        new_state["submitting"] = False

    elif etype == "CLEAR_ERROR":
        new_state["error"] = None

    elif etype == "RESUME_SESSION":
        new_state = build_resumed_state(
            new_state,
            event.session_id,
            [r.to_round() for r in event.completed_rounds],
            event.total_score,
        )

    elif etype == "GAME_EXPIRED":
        new_state["screen"] = "expired"

    elif etype == "GO_TO_PRAYER":
        new_state["screen"] = "prayer_bonus"

    elif etype == "PRAYER_SUBMITTED":
        bonus = event.bonus_points
        if bonus is None:
            bonus = config.prayer_bonus_points
        new_state["total_score"] = new_state["total_score"] + bonus
        new_state["prayer_submitted"] = True
        new_state["screen"] = "leaderboard"

    elif etype == "SKIP_PRAYER":
        new_state["screen"] = "final_results"

    return new_state


def apply_event(
    state: GameState, event: Any, *, config: GameConfig | None = None
) -> TransitionOutcome:
    """Apply one event to the game state.

    Total function: never raises. A rejected event yields an outcome whose
    state is the input state unchanged.

    Args:
        state: Current game state (not mutated)
        event: Event dict with a 'type' field and event-specific fields
        config: Capability flags; DEFAULT_CONFIG when omitted

    Returns:
        TransitionOutcome with:
        - state: Next state (input state if rejected)
        - applied: False if the event was a no-op
        - rejection: Reason for the no-op, else None
    """
    cfg = config or DEFAULT_CONFIG
    etype = event.get("type") if isinstance(event, dict) else getattr(event, "type", None)

    if not is_known_event(etype):
        return _reject(state, "invalid_event", f"unknown event type: {etype!r}")
    if not is_feature_enabled(etype, cfg):
        return _reject(state, "feature_disabled", f"{etype} requires an extension flag")

    legal = LEGAL_SCREENS[etype]
    screen = state.get("screen")
    if legal is not None and screen not in legal:
        return _reject(state, "illegal_screen", f"{etype} not allowed on {screen}")

    if etype == "GO_TO_PRAYER" and state.get("prayer_submitted"):
        return _reject(state, "already_applied", "prayer bonus already awarded")

    try:
        parsed = parse_event(event)
    except ValidationError as e:
        logger.warning(f"Event validation failed for {etype}: {e}")
        return _reject(state, "invalid_event", str(e))

    return TransitionOutcome(
        state=_apply_transition(state, parsed, cfg), applied=True
    )


def transition(
    state: GameState, event: Any, *, config: GameConfig | None = None
) -> GameState:
    """next_state = transition(state, event)"""
    return apply_event(state, event, config=config).state
