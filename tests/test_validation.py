from datetime import timedelta

import pytest

from dailyquiz.errors import ValidationError
from dailyquiz.services.utils import today_utc
from dailyquiz.services.validation import (
    date_or_today,
    parse_date,
    validate_score_data,
    validate_username,
)


def test_username_accepts_hebrew_and_trims():
    assert validate_username("  שלום_1 ") == "שלום_1"


@pytest.mark.parametrize("name", [None, "", "x", "a" * 21, "drop;table", 42])
def test_username_rejects(name):
    with pytest.raises(ValidationError):
        validate_username(name)


def test_integral_floats_are_accepted_as_ints():
    submission = validate_score_data({
        "score": 80.0, "correct_answers": 4, "total_questions": 5, "response_time_ms": 1500,
    })

    assert submission.score == 80
    assert isinstance(submission.score, int)


def test_booleans_are_not_numbers():
    with pytest.raises(ValidationError):
        validate_score_data({
            "score": True, "correct_answers": 1, "total_questions": 1, "response_time_ms": 1,
        })


def test_response_time_upper_bound():
    with pytest.raises(ValidationError, match="10 minutes"):
        validate_score_data({
            "score": 1, "correct_answers": 1, "total_questions": 1, "response_time_ms": 600001,
        })


def test_dates():
    today = today_utc()
    assert date_or_today(None) == today
    assert parse_date(today.isoformat()) == today

    tomorrow = (today + timedelta(days=1)).isoformat()
    assert parse_date(tomorrow) == today + timedelta(days=1)
    with pytest.raises(ValidationError, match="future"):
        parse_date(tomorrow, allow_future=False)

    with pytest.raises(ValidationError, match="YYYY-MM-DD"):
        parse_date("18/10/2026")
    with pytest.raises(ValidationError, match="Invalid date"):
        parse_date("2026-02-30")
