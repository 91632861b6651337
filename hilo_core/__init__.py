from .config import DEFAULT_CONFIG, GameConfig
from .game import (
    Rejection,
    TransitionOutcome,
    apply_event,
    initial_state,
    transition,
)
from .guard import LEGAL_SCREENS, allowed_events, is_event_allowed
from .resume import build_resumed_state, resume_event, resume_from_history
from .rounds import (
    TOTAL_ROUNDS,
    RankedAnswer,
    RoundData,
    round_direction,
    round_from_history,
    round_from_result,
    sum_round_scores,
)
from .session import GameSession
from .status import effective_game_status
from .types import AnswerResultPayload, EventPayload, GameScreen, GameState, GameStatus
from .validation import InputSanitizer, parse_event

__all__ = [
    "DEFAULT_CONFIG",
    "GameConfig",
    "Rejection",
    "TransitionOutcome",
    "apply_event",
    "initial_state",
    "transition",
    "LEGAL_SCREENS",
    "allowed_events",
    "is_event_allowed",
    "build_resumed_state",
    "resume_event",
    "resume_from_history",
    "TOTAL_ROUNDS",
    "RankedAnswer",
    "RoundData",
    "round_direction",
    "round_from_history",
    "round_from_result",
    "sum_round_scores",
    "GameSession",
    "effective_game_status",
    "AnswerResultPayload",
    "EventPayload",
    "GameScreen",
    "GameState",
    "GameStatus",
    "InputSanitizer",
    "parse_event",
]
