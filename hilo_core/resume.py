"""Session resume builder (pure).

Rebuilds the mid-game state a fresh page load should land on from the
persisted round history, so a reload reproduces what continuous play would
have reached without replaying any reveal effects.
"""
from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict, Iterable, Mapping, Sequence

from .rounds import TOTAL_ROUNDS, RoundData, round_from_history, sum_round_scores
from .types import GameState


def build_resumed_state(
    state: GameState,
    session_id: str,
    completed_rounds: Sequence[RoundData],
    total_score: int,
) -> GameState:
    """Return the state equivalent to having played completed_rounds live.

    Args:
        state: Current state (not mutated); identity and error are carried over
        session_id: Persisted game session id
        completed_rounds: Rounds already scored, in completion order
        total_score: Server-persisted total (never re-summed here)

    Returns:
        New GameState:
        - rounds: completed_rounds verbatim
        - current_round: len + 1, capped at 4
        - screen: final_results once 4 rounds are done, else round_play
    """
    done = len(completed_rounds)
    new_state: GameState = deepcopy(state)
    new_state["session_id"] = session_id
    new_state["rounds"] = tuple(completed_rounds)
    new_state["total_score"] = total_score
    new_state["current_round"] = min(done + 1, TOTAL_ROUNDS)
    new_state["screen"] = "final_results" if done >= TOTAL_ROUNDS else "round_play"
    # A reload never has a submission in flight.
    new_state["submitting"] = False
    new_state["last_miss"] = None
    return new_state


def resume_event(
    session_id: str,
    completed_rounds: Iterable[RoundData],
    total_score: int,
) -> Dict[str, Any]:
    return {
        "type": "RESUME_SESSION",
        "session_id": session_id,
        "completed_rounds": list(completed_rounds),
        "total_score": total_score,
    }


def resume_from_history(
    session_id: str | None,
    history_rows: Iterable[Mapping[str, Any]],
    total_score: int | None = None,
) -> Dict[str, Any]:
    """Build a RESUME_SESSION event from session-history rows.

    Rows are ordered by round_number. When the history service returned no
    persisted total, the round scores are summed instead.
    """
    rounds = sorted(
        (round_from_history(row) for row in history_rows),
        key=lambda r: r.round_number,
    )
    if total_score is None:
        total_score = sum_round_scores(rounds)
    return resume_event(session_id or "", rounds, total_score)
