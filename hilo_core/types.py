"""Type definitions for game state and events."""
from __future__ import annotations

from typing import List, Literal, Optional, Tuple, TypedDict, TYPE_CHECKING

if TYPE_CHECKING:
    from .rounds import RoundData


GameScreen = Literal[
    "loading",
    "intro",
    "auth",
    "round_play",
    "round_result",
    "final_results",
    "leaderboard",
    "expired",
    # Only reachable when the prayer-bonus extension is enabled.
    "prayer_bonus",
]

GameStatus = Literal["active", "expired", "completed", "generating", "ready"]

RoundDirection = Literal["high", "low"]


class RankedAnswerDict(TypedDict):
    answer: str
    rank: int


class GameState(TypedDict):
    """
    TypedDict representing a single player's game session.

    Created by initial_state() and only ever replaced through transition().
    """
    screen: GameScreen
    # 1-4, the round being played or just resolved
    current_round: int
    # Append-only, ordered by completion; one entry per successful submission
    rounds: Tuple["RoundData", ...]
    # Server-authoritative; includes any prayer bonus
    total_score: int

    # Identity
    authenticated: bool
    profile_id: Optional[str]
    first_name: str
    session_id: Optional[str]

    # Submission feedback
    submitting: bool
    last_miss: Optional[str]
    error: Optional[str]

    # Prayer-bonus extension
    prayer_submitted: bool


class AnswerResultPayload(TypedDict, total=False):
    """Payload returned by the answer submission service."""
    session_id: str
    round_number: int
    submitted_answer: str
    on_list: bool
    rank: Optional[int]
    round_score: int
    total_score: int
    direction: RoundDirection
    all_answers: List[RankedAnswerDict]


class HistoryRow(TypedDict, total=False):
    """One completed round as returned by the session history service."""
    round_number: int
    submitted_answer: str
    on_list: bool
    rank: Optional[int]
    # Column name used by the history query; alias of rank
    answer_rank: Optional[int]
    round_score: int
    direction: RoundDirection


class EventPayload(TypedDict, total=False):
    """
    TypedDict for events sent to transition().

    Fields vary by event type.
    """
    type: str

    # GAME_LOADED
    status: GameStatus

    # AUTH_SUCCESS / AUTH_RESTORED
    profile_id: str
    first_name: str

    # SUBMIT_ANSWER
    answer: str

    # ANSWER_RESULT
    result: AnswerResultPayload

    # SET_ERROR
    message: str

    # RESUME_SESSION
    session_id: str
    completed_rounds: List["RoundData"]
    total_score: int

    # PRAYER_SUBMITTED
    bonus_points: int


StateDict = GameState
EventDict = EventPayload
