from flask import Blueprint, jsonify, request

from extensions import db
from dailyquiz.services.daily_question_service import DailyQuestionService
from dailyquiz.services.leaderboard_service import LeaderboardService
from dailyquiz.services.question_service import get_daily_question_payload
from dailyquiz.services.score_service import ScoreLedger
from dailyquiz.services.utils import today_utc
from dailyquiz.services.validation import (
    date_or_today,
    require_json_object,
    validate_score_data,
    validate_username,
)

public_bp = Blueprint("public", __name__)


# -------------------
# QUESTION OF THE DAY
# -------------------
@public_bp.route("/daily-question", methods=["GET"])
def daily_question():
    day = date_or_today(request.args.get("date"), allow_future=False)

    service = DailyQuestionService(db.session)
    question = service.resolve(day)
    participants = service.participants_count(day)

    return jsonify(get_daily_question_payload(question, day, participants))


# -------------------
# SUBMIT SCORE
# -------------------
@public_bp.route("/submit-score", methods=["POST"])
def submit_score():
    data = require_json_object(request.get_json(silent=True))

    username = validate_username(data.get("username"))
    submission = validate_score_data(data)

    result = ScoreLedger(db.session).submit(username, today_utc(), submission)

    if result.accepted:
        return jsonify({
            "success": True,
            "message": "Score saved successfully!" if result.first else "New high score saved!",
            "is_new_record": True,
            "score": result.effective_score,
        })

    return jsonify({
        "success": True,
        "message": "Score recorded, but not your highest today",
        "is_new_record": False,
        "current_high_score": result.effective_score,
    })


# -------------------
# LEADERBOARD
# -------------------
@public_bp.route("/daily-leaderboard", methods=["GET"])
def daily_leaderboard():
    day = date_or_today(request.args.get("date"))
    return jsonify(LeaderboardService(db.session).build(day))
