"""Single long-lived game state owner for the orchestration layer.

GameSession performs no I/O. It holds the current state, feeds events
through apply_event(), and applies the one sequencing rule the pure core
leaves to its caller: no second SUBMIT_ANSWER while one is in flight.
"""
from __future__ import annotations

import logging
from typing import Any, List, Tuple

from .config import DEFAULT_CONFIG, GameConfig
from .game import Rejection, TransitionOutcome, apply_event, initial_state
from .guard import allowed_events
from .types import GameState

logger = logging.getLogger(__name__)


class GameSession:
    def __init__(
        self, config: GameConfig | None = None, state: GameState | None = None
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        self._state: GameState = state if state is not None else initial_state()
        self._history: List[str] = []

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def history(self) -> Tuple[str, ...]:
        """Types of the events that changed state, in dispatch order."""
        return tuple(self._history)

    def can_submit(self) -> bool:
        return self._state["screen"] == "round_play" and not self._state["submitting"]

    def allowed_events(self) -> Tuple[str, ...]:
        return allowed_events(self._state["screen"], config=self.config)

    def dispatch(self, event: Any) -> TransitionOutcome:
        etype = event.get("type") if isinstance(event, dict) else getattr(event, "type", None)

        if (
            etype == "SUBMIT_ANSWER"
            and self.config.reject_duplicate_submissions
            and self._state["submitting"]
        ):
            logger.info("Ignoring SUBMIT_ANSWER while a submission is in flight")
            return TransitionOutcome(
                state=self._state,
                applied=False,
                rejection=Rejection(kind="submission_in_flight"),
            )

        outcome = apply_event(self._state, event, config=self.config)
        if outcome.applied:
            previous = self._state["screen"]
            self._state = outcome.state
            self._history.append(etype)
            if previous != self._state["screen"]:
                logger.debug(f"{etype}: {previous} -> {self._state['screen']}")
        return outcome
