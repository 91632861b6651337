"""
Event validation schemas using Pydantic v2
Validates every event variant before it reaches the transition function
"""

import logging
import re
from typing import Annotated, Any, List, Literal, Optional, Self, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    field_validator,
    model_validator,
)

from .rounds import TOTAL_ROUNDS, RankedAnswer, RoundData

logger = logging.getLogger(__name__)

MAX_ANSWER_LENGTH = 200


class InputSanitizer:
    """Utility class for input sanitization"""

    @staticmethod
    def sanitize_answer(answer: Any) -> str:
        """Strip control characters and cap a player's answer at MAX_ANSWER_LENGTH"""
        if not isinstance(answer, str):
            answer = str(answer)
        answer = re.sub(r"[\x00-\x1f\x7f]", "", answer.strip())
        return answer[:MAX_ANSWER_LENGTH].strip()

    @staticmethod
    def normalize_answer(answer: str) -> str:
        """Lowercase, trim and collapse internal whitespace for comparison"""
        return re.sub(r"\s+", " ", answer.strip().lower())


# ==================== PAYLOAD MODELS ====================
# Server payloads are authoritative: only ranges the game defines are checked.


class RankedAnswerModel(BaseModel):
    answer: str
    rank: int = Field(..., ge=1)

    model_config = ConfigDict(frozen=True)


class RoundDataModel(BaseModel):
    """A completed round as carried by ANSWER_RESULT or RESUME_SESSION"""

    round_number: int = Field(..., ge=1, le=TOTAL_ROUNDS, description="Round (1-4)")
    submitted_answer: str
    on_list: bool
    rank: Optional[int] = Field(None, ge=1, description="Rank if matched")
    round_score: int = Field(..., ge=0, description="Points earned this round")
    direction: Literal["high", "low"]
    all_answers: List[RankedAnswerModel] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, extra="ignore")

    def to_round(self) -> RoundData:
        return RoundData(
            round_number=self.round_number,
            submitted_answer=self.submitted_answer,
            on_list=self.on_list,
            rank=self.rank,
            round_score=self.round_score,
            direction=self.direction,
            all_answers=tuple(
                RankedAnswer(answer=a.answer, rank=a.rank) for a in self.all_answers
            ),
        )


class AnswerResultModel(RoundDataModel):
    """Answer submission service response"""

    session_id: Optional[str] = None
    # Server-computed, includes any out-of-band bonus
    total_score: int = Field(..., ge=0)


# ==================== EVENT MODELS ====================


class _Event(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class GameLoaded(_Event):
    type: Literal["GAME_LOADED"]
    # Anything other than "active" sends the player to the expired screen
    status: str = Field(..., validation_alias=AliasChoices("status", "game_status"))


class StartGame(_Event):
    type: Literal["START_GAME"]


class _AuthEvent(_Event):
    profile_id: str = Field(..., min_length=1)
    first_name: str = ""

    @field_validator("first_name", mode="before")
    @classmethod
    def coerce_missing_name(cls, v: Any) -> Any:
        return "" if v is None else v


class AuthSuccess(_AuthEvent):
    type: Literal["AUTH_SUCCESS"]


class AuthRestored(_AuthEvent):
    type: Literal["AUTH_RESTORED"]


class SubmitAnswer(_Event):
    type: Literal["SUBMIT_ANSWER"]
    answer: str = Field(..., min_length=1)

    @field_validator("answer", mode="before")
    @classmethod
    def sanitize(cls, v: Any) -> Any:
        """Control characters stripped, capped at MAX_ANSWER_LENGTH"""
        if isinstance(v, str):
            return InputSanitizer.sanitize_answer(v)
        return v


class AnswerResult(_Event):
    type: Literal["ANSWER_RESULT"]
    result: AnswerResultModel


class NextRound(_Event):
    type: Literal["NEXT_ROUND"]


class ViewLeaderboard(_Event):
    type: Literal["VIEW_LEADERBOARD"]


class BackToResults(_Event):
    type: Literal["BACK_TO_RESULTS"]


class SetError(_Event):
    type: Literal["SET_ERROR"]
    # A missing message still clears the in-flight submission
    message: Optional[str] = Field(None, validation_alias=AliasChoices("message", "error"))


class ClearError(_Event):
    type: Literal["CLEAR_ERROR"]


class ResumeSession(_Event):
    type: Literal["RESUME_SESSION"]
    session_id: str
    completed_rounds: List[RoundDataModel] = Field(
        default_factory=list, max_length=TOTAL_ROUNDS
    )
    total_score: int = Field(..., ge=0)

    @field_validator("completed_rounds", mode="before")
    @classmethod
    def unwrap_round_data(cls, v: Any) -> Any:
        """Accept RoundData instances alongside plain dicts"""
        if isinstance(v, (list, tuple)):
            return [r.to_dict() if isinstance(r, RoundData) else r for r in v]
        return v

    @model_validator(mode="after")
    def validate_round_order(self) -> Self:
        numbers = [r.round_number for r in self.completed_rounds]
        if len(set(numbers)) != len(numbers):
            raise ValueError("completed_rounds contains duplicate round numbers")
        return self


class GameExpired(_Event):
    type: Literal["GAME_EXPIRED"]


class GoToPrayer(_Event):
    type: Literal["GO_TO_PRAYER"]


class PrayerSubmitted(_Event):
    type: Literal["PRAYER_SUBMITTED"]
    # None means "use GameConfig.prayer_bonus_points"
    bonus_points: Optional[int] = Field(None, ge=0, le=100000)


class SkipPrayer(_Event):
    type: Literal["SKIP_PRAYER"]


GameEvent = Annotated[
    Union[
        GameLoaded,
        StartGame,
        AuthSuccess,
        AuthRestored,
        SubmitAnswer,
        AnswerResult,
        NextRound,
        ViewLeaderboard,
        BackToResults,
        SetError,
        ClearError,
        ResumeSession,
        GameExpired,
        GoToPrayer,
        PrayerSubmitted,
        SkipPrayer,
    ],
    Field(discriminator="type"),
]

_EVENT_ADAPTER = TypeAdapter(GameEvent)


def parse_event(event: Any) -> GameEvent:
    """Validate a raw event dict into its typed variant.

    Raises:
        pydantic.ValidationError: unknown type or malformed payload
    """
    if isinstance(event, BaseModel):
        event = event.model_dump()
    return _EVENT_ADAPTER.validate_python(event)


# ==================== EXPORT ====================

__all__ = [
    "AnswerResultModel",
    "GameEvent",
    "InputSanitizer",
    "RoundDataModel",
    "parse_event",
]
