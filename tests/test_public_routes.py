from datetime import timedelta
from unittest.mock import patch

from dailyquiz.errors import ResolutionFailed
from dailyquiz.services.daily_question_service import DailyQuestionService
from dailyquiz.services.utils import today_utc


def test_daily_question_payload(client, make_question, make_score):
    question = make_question(text="Capital of France?", category="geography")
    make_score("alice", today_utc(), 10)

    response = client.get("/api/daily-question")

    assert response.status_code == 200
    data = response.get_json()
    assert data == {
        "id": question.id,
        "date": today_utc().isoformat(),
        "question": "Capital of France?",
        "answers": question.get_answers(),
        "correct_answer_index": question.correct_answer_index,
        "category": "geography",
        "difficulty": "easy",
        "participants_count": 1,
    }


def test_every_player_sees_the_same_question(client, make_question):
    for _ in range(6):
        make_question()

    ids = {client.get("/api/daily-question").get_json()["id"] for _ in range(8)}

    assert len(ids) == 1


def test_past_date_can_be_requested(client, make_question):
    make_question()
    day = (today_utc() - timedelta(days=3)).isoformat()

    response = client.get(f"/api/daily-question?date={day}")

    assert response.status_code == 200
    assert response.get_json()["date"] == day


def test_future_date_is_rejected(client, make_question):
    make_question()
    day = (today_utc() + timedelta(days=1)).isoformat()

    response = client.get(f"/api/daily-question?date={day}")

    assert response.status_code == 400


def test_empty_pool_is_404(client, ctx):
    response = client.get("/api/daily-question")

    assert response.status_code == 404
    assert response.get_json() == {"error": "No questions available"}


def test_resolution_failure_is_500(client, make_question):
    make_question()

    with patch.object(DailyQuestionService, "resolve", side_effect=ResolutionFailed()):
        response = client.get("/api/daily-question")

    assert response.status_code == 500
    assert response.get_json() == {"error": "Failed to get daily question"}


def test_unexpected_error_is_generic_500(client, make_question):
    make_question()

    with patch.object(DailyQuestionService, "resolve", side_effect=RuntimeError("db password is hunter2")):
        response = client.get("/api/daily-question")

    assert response.status_code == 500
    assert response.get_json() == {"error": "Internal server error"}


def test_cors_headers_present(client, ctx):
    response = client.get("/api/daily-leaderboard")

    assert response.headers["Access-Control-Allow-Origin"] == "*"
    assert "POST" in response.headers["Access-Control-Allow-Methods"]


def test_preflight_is_answered(client):
    response = client.open("/api/submit-score", method="OPTIONS")

    assert response.status_code == 200
    assert response.headers["Access-Control-Allow-Origin"] == "*"


def test_daily_question_rejects_post(client):
    response = client.post("/api/daily-question", json={})

    assert response.status_code == 405
    assert response.get_json() == {"error": "Method not allowed"}
