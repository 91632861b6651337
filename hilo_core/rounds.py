"""Completed-round records.

A RoundData is created once per successful submission (a "hit") and never
changes afterwards. Misses leave no record at all.

Rounds 1-2 are HIGH rounds (guess the most popular answer), rounds 3-4 are
LOW rounds (guess the least popular answer).
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Iterable, Mapping

from .types import RoundDirection

TOTAL_ROUNDS = 4


@dataclass(frozen=True)
class RankedAnswer:
    answer: str
    rank: int


@dataclass(frozen=True)
class RoundData:
    round_number: int
    submitted_answer: str
    on_list: bool
    rank: int | None
    round_score: int
    direction: RoundDirection
    # Reveal snapshot; empty when rebuilt from history
    all_answers: tuple[RankedAnswer, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["all_answers"] = [dict(a) for a in data["all_answers"]]
        return data


def round_direction(round_number: int) -> RoundDirection:
    """Return the scoring direction for a round.

    Raises:
        ValueError: if round_number is not an integer in 1..TOTAL_ROUNDS
    """
    if (
        isinstance(round_number, bool)
        or not isinstance(round_number, int)
        or round_number < 1
        or round_number > TOTAL_ROUNDS
    ):
        raise ValueError(
            f"Invalid round number: {round_number}. Must be 1-{TOTAL_ROUNDS}."
        )
    return "high" if round_number <= 2 else "low"


def _ranked_answers(raw: Iterable[Any] | None) -> tuple[RankedAnswer, ...]:
    if not raw:
        return ()
    answers: list[RankedAnswer] = []
    for item in raw:
        if isinstance(item, RankedAnswer):
            answers.append(item)
        elif isinstance(item, Mapping):
            answers.append(RankedAnswer(answer=item["answer"], rank=item["rank"]))
        else:
            answers.append(RankedAnswer(answer=item.answer, rank=item.rank))
    return tuple(answers)


def round_from_result(result: Mapping[str, Any]) -> RoundData:
    """Build the permanent record for a hit from an answer_result payload."""
    return RoundData(
        round_number=result["round_number"],
        submitted_answer=result["submitted_answer"],
        on_list=result["on_list"],
        rank=result.get("rank"),
        round_score=result["round_score"],
        direction=result["direction"],
        all_answers=_ranked_answers(result.get("all_answers")),
    )


def round_from_history(row: Mapping[str, Any]) -> RoundData:
    """Build a RoundData from a session-history row.

    History rows carry the rank as ``answer_rank``; ``rank`` is accepted too.
    The answer list is not persisted, so ``all_answers`` is always empty.
    """
    rank = row.get("rank")
    if rank is None:
        rank = row.get("answer_rank")
    return RoundData(
        round_number=row["round_number"],
        submitted_answer=row["submitted_answer"],
        on_list=row["on_list"],
        rank=rank,
        round_score=row["round_score"],
        direction=row["direction"],
    )


def sum_round_scores(rounds: Iterable[RoundData]) -> int:
    return sum(r.round_score for r in rounds)
