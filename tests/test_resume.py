from hilo_core import (
    RoundData,
    build_resumed_state,
    initial_state,
    resume_event,
    resume_from_history,
    transition,
)


def _round(round_number, score=100):
    return RoundData(
        round_number=round_number,
        submitted_answer=f"answer-{round_number}",
        on_list=True,
        rank=round_number + 1,
        round_score=score,
        direction="high" if round_number <= 2 else "low",
    )


def _loading(**overrides):
    state = initial_state()
    state.update(overrides)
    return state


def test_resume_lands_on_next_round():
    state = _loading(authenticated=True, profile_id="prof-1")
    completed = [_round(1, 198), _round(2, 380)]
    next_state = transition(state, resume_event("sess-1", completed, 578))
    assert next_state["current_round"] == 3
    assert next_state["screen"] == "round_play"
    assert len(next_state["rounds"]) == 2
    assert next_state["rounds"] == tuple(completed)
    assert next_state["total_score"] == 578
    assert next_state["session_id"] == "sess-1"
    # identity carried through
    assert next_state["profile_id"] == "prof-1"
    assert next_state["authenticated"] is True


def test_resume_with_all_rounds_goes_to_final_results():
    completed = [_round(n) for n in range(1, 5)]
    next_state = transition(_loading(), resume_event("sess-1", completed, 400))
    assert next_state["screen"] == "final_results"
    assert next_state["current_round"] == 4
    assert next_state["total_score"] == 400


def test_resume_with_no_rounds_matches_fresh_start():
    resumed = transition(
        _loading(authenticated=True), resume_event("sess-1", [], 0)
    )

    fresh = transition(_loading(authenticated=True), {"type": "GAME_LOADED", "status": "active"})
    fresh = transition(fresh, {"type": "START_GAME"})

    for key in ("screen", "current_round", "rounds", "total_score", "submitting", "last_miss"):
        assert resumed[key] == fresh[key]
    assert resumed["screen"] == "round_play"
    assert resumed["current_round"] == 1


def test_resume_is_idempotent():
    event = resume_event("sess-1", [_round(1)], 100)
    once = transition(_loading(), event)
    twice = transition(once, event)
    assert once == twice


def test_resume_matches_live_play():
    live = _loading(screen="round_play", authenticated=True)
    total = 0
    for n in (1, 2):
        total += 100
        live = transition(
            live,
            {
                "type": "ANSWER_RESULT",
                "result": {**_round(n).to_dict(), "session_id": "sess-1", "total_score": total},
            },
        )
        live = transition(live, {"type": "NEXT_ROUND"})

    resumed = transition(
        _loading(authenticated=True), resume_event("sess-1", [_round(1), _round(2)], 200)
    )
    for key in ("screen", "current_round", "rounds", "total_score", "session_id"):
        assert resumed[key] == live[key]


def test_resume_accepts_plain_dict_rounds():
    rows = [_round(1).to_dict()]
    next_state = transition(
        _loading(),
        {"type": "RESUME_SESSION", "session_id": "s", "completed_rounds": rows, "total_score": 100},
    )
    assert next_state["rounds"] == (_round(1),)


def test_resume_rejects_more_than_four_rounds():
    state = _loading()
    completed = [_round(n) for n in range(1, 5)] + [_round(4)]
    assert transition(state, resume_event("s", completed, 0)) == state


def test_resume_clears_in_flight_submission():
    state = _loading(screen="round_play", submitting=True, last_miss="kiwi")
    next_state = build_resumed_state(state, "sess-1", [], 0)
    assert next_state["submitting"] is False
    assert next_state["last_miss"] is None
    assert state["submitting"] is True


def test_resume_from_history_rows():
    rows = [
        {
            "round_number": 2,
            "submitted_answer": "grace",
            "on_list": True,
            "answer_rank": 4,
            "round_score": 380,
            "direction": "high",
        },
        {
            "round_number": 1,
            "submitted_answer": "love",
            "on_list": True,
            "answer_rank": 2,
            "round_score": 198,
            "direction": "high",
        },
    ]
    event = resume_from_history("sess-9", rows)
    assert event["type"] == "RESUME_SESSION"
    assert event["total_score"] == 578
    assert [r.round_number for r in event["completed_rounds"]] == [1, 2]
    assert event["completed_rounds"][0].rank == 2
    assert event["completed_rounds"][0].all_answers == ()

    next_state = transition(_loading(), event)
    assert next_state["current_round"] == 3
    assert next_state["session_id"] == "sess-9"


def test_resume_from_history_prefers_persisted_total():
    rows = [
        {
            "round_number": 1,
            "submitted_answer": "love",
            "on_list": True,
            "rank": 2,
            "round_score": 198,
            "direction": "high",
        }
    ]
    event = resume_from_history(None, rows, total_score=698)
    assert event["total_score"] == 698
    assert event["session_id"] == ""
