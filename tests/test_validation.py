import pytest
from pydantic import ValidationError

from hilo_core import InputSanitizer, parse_event
from hilo_core.validation import AnswerResult, GameLoaded, ResumeSession, SetError


def test_parse_event_returns_typed_variant():
    event = parse_event({"type": "GAME_LOADED", "status": "active"})
    assert isinstance(event, GameLoaded)
    assert event.status == "active"


def test_parse_event_accepts_legacy_field_names():
    assert parse_event({"type": "GAME_LOADED", "game_status": "ready"}).status == "ready"
    event = parse_event({"type": "SET_ERROR", "error": "Failed to submit answer"})
    assert isinstance(event, SetError)
    assert event.message == "Failed to submit answer"


def test_parse_event_rejects_unknown_type():
    with pytest.raises(ValidationError):
        parse_event({"type": "NOPE"})


def test_answer_result_constraints():
    base = {
        "session_id": "sess-1",
        "round_number": 1,
        "submitted_answer": "love",
        "on_list": True,
        "rank": 1,
        "round_score": 300,
        "total_score": 300,
        "direction": "high",
    }
    event = parse_event({"type": "ANSWER_RESULT", "result": base})
    assert isinstance(event, AnswerResult)
    assert event.result.all_answers == []

    for bad in (
        {"round_number": 5},
        {"round_score": -1},
        {"rank": 0},
        {"direction": "sideways"},
    ):
        with pytest.raises(ValidationError):
            parse_event({"type": "ANSWER_RESULT", "result": {**base, **bad}})


def test_submit_answer_strips_and_rejects_blank():
    assert parse_event({"type": "SUBMIT_ANSWER", "answer": "  love  "}).answer == "love"
    with pytest.raises(ValidationError):
        parse_event({"type": "SUBMIT_ANSWER", "answer": "   "})


def test_resume_session_rejects_duplicate_rounds():
    row = {
        "round_number": 1,
        "submitted_answer": "love",
        "on_list": True,
        "rank": 1,
        "round_score": 300,
        "direction": "high",
    }
    event = parse_event(
        {"type": "RESUME_SESSION", "session_id": "s", "completed_rounds": [row], "total_score": 300}
    )
    assert isinstance(event, ResumeSession)
    with pytest.raises(ValidationError):
        parse_event(
            {
                "type": "RESUME_SESSION",
                "session_id": "s",
                "completed_rounds": [row, row],
                "total_score": 600,
            }
        )


def test_sanitize_answer_removes_control_chars():
    assert InputSanitizer.sanitize_answer("  lo\x00ve\n ") == "love"
    assert len(InputSanitizer.sanitize_answer("x" * 500)) == 200


def test_normalize_answer():
    assert InputSanitizer.normalize_answer("  Amazing   GRACE ") == "amazing grace"


def test_submit_answer_is_sanitized_on_parse():
    event = parse_event({"type": "SUBMIT_ANSWER", "answer": "\tfaith\x07"})
    assert event.answer == "faith"
    assert len(parse_event({"type": "SUBMIT_ANSWER", "answer": "x" * 500}).answer) == 200
    with pytest.raises(ValidationError):
        parse_event({"type": "SUBMIT_ANSWER", "answer": "\x00\x01"})


def test_server_payload_strings_have_no_length_limit():
    result = {
        "session_id": "s" * 100,
        "round_number": 1,
        "submitted_answer": "a" * 500,
        "on_list": True,
        "rank": 1,
        "round_score": 300,
        "total_score": 300,
        "direction": "high",
        "all_answers": [{"answer": "b" * 500, "rank": 1}],
    }
    event = parse_event({"type": "ANSWER_RESULT", "result": result})
    assert event.result.submitted_answer == "a" * 500
    assert event.result.session_id == "s" * 100


def test_nullable_name_and_message_are_accepted():
    auth = parse_event({"type": "AUTH_RESTORED", "profile_id": "prof-1", "first_name": None})
    assert auth.first_name == ""
    assert parse_event({"type": "SET_ERROR", "message": None}).message is None
    assert parse_event({"type": "SET_ERROR"}).message is None
