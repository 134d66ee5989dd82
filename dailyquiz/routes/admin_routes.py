import logging
from functools import wraps

from flask import Blueprint, current_app, jsonify, request
from sqlalchemy.exc import SQLAlchemyError

from extensions import db
from dailyquiz.errors import DailyQuizError, Unauthorized, UpstreamStorageError, ValidationError
from dailyquiz.services.question_service import QuestionBank, get_question_display
from dailyquiz.services.stats_service import get_database_stats
from dailyquiz.services.utils import today_utc
from dailyquiz.services.validation import validate_question_payload

logger = logging.getLogger(__name__)

admin_bp = Blueprint("admin", __name__)


@admin_bp.errorhandler(DailyQuizError)
def handle_admin_error(err):
    return jsonify({"success": False, "message": err.message}), err.status_code


# -------------------
# ADMIN KEY REQUIRED
# -------------------
def admin_required(f):
    @wraps(f)
    def wrapped(*args, **kwargs):
        expected = current_app.config.get("ADMIN_API_KEY")
        if expected and request.headers.get("X-Admin-Key") != expected:
            raise Unauthorized()
        return f(*args, **kwargs)
    return wrapped


def _int_arg(name, default):
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValidationError(f"{name} must be an integer")
    if value < 0:
        raise ValidationError(f"{name} cannot be negative")
    return value


def _active_arg():
    raw = request.args.get("active")
    if raw is None or raw == "":
        return None
    return raw.lower() == "true"


# -------------------
# QUESTIONS POOL
# -------------------
@admin_bp.route("/questions", methods=["GET"])
@admin_required
def list_questions():
    questions = QuestionBank(db.session).list(
        search=request.args.get("search"),
        category=request.args.get("category"),
        difficulty=request.args.get("difficulty"),
        active=_active_arg(),
        limit=_int_arg("limit", 100),
        offset=_int_arg("offset", 0),
    )
    return jsonify([get_question_display(q) for q in questions])


@admin_bp.route("/questions", methods=["POST"])
@admin_required
def create_question():
    values = validate_question_payload(request.get_json(silent=True))
    question = QuestionBank(db.session).create(values)
    return jsonify({
        "success": True,
        "message": "Question created successfully",
        "data": get_question_display(question),
    }), 201


@admin_bp.route("/questions/<int:question_id>", methods=["GET"])
@admin_required
def get_question(question_id):
    return jsonify(get_question_display(QuestionBank(db.session).get(question_id)))


@admin_bp.route("/questions/<int:question_id>", methods=["PUT"])
@admin_required
def update_question(question_id):
    values = validate_question_payload(request.get_json(silent=True))
    question = QuestionBank(db.session).update(question_id, values)
    return jsonify({
        "success": True,
        "message": "Question updated successfully",
        "data": get_question_display(question),
    })


@admin_bp.route("/questions/<int:question_id>", methods=["DELETE"])
@admin_required
def delete_question(question_id):
    QuestionBank(db.session).delete(question_id)
    logger.info("Question %s deleted", question_id)
    return jsonify({"success": True, "message": "Question deleted successfully"})


# -------------------
# STATS & DEBUG
# -------------------
@admin_bp.route("/stats", methods=["GET"])
@admin_required
def stats():
    try:
        return jsonify(get_database_stats(db.session, today_utc()))
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.exception("Fetching database stats failed")
        raise UpstreamStorageError() from exc


@admin_bp.route("/debug", methods=["GET"])
@admin_required
def debug_references():
    """Reports what still points at a question before an admin deletes it."""
    question_id = _int_arg("questionId", None)
    if question_id is None:
        raise ValidationError("questionId required")
    return jsonify(QuestionBank(db.session).references(question_id))
