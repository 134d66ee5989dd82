import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class DailyQuizError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message=None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class ValidationError(DailyQuizError):
    status_code = 400
    message = "Invalid request"


class Unauthorized(DailyQuizError):
    status_code = 401
    message = "Admin key required"


class NotFoundError(DailyQuizError):
    status_code = 404
    message = "Not found"


class NoQuestionsAvailable(NotFoundError):
    message = "No questions available"


class ConflictError(DailyQuizError):
    """Unique or foreign key violation, reported as a bad request."""
    status_code = 400
    message = "Request conflicts with existing data"


class UpstreamStorageError(DailyQuizError):
    status_code = 500
    message = "Internal server error"


class ResolutionFailed(UpstreamStorageError):
    message = "Failed to get daily question"


def register_error_handlers(app):
    @app.errorhandler(DailyQuizError)
    def handle_daily_quiz_error(err):
        return jsonify({"error": err.message}), err.status_code

    @app.errorhandler(404)
    def handle_not_found(err):
        return jsonify({"error": "Not found"}), 404

    @app.errorhandler(405)
    def handle_method_not_allowed(err):
        return jsonify({"error": "Method not allowed"}), 405

    @app.errorhandler(Exception)
    def handle_unexpected(err):
        if isinstance(err, HTTPException):
            return jsonify({"error": err.description}), err.code
        logger.exception("Unhandled error")
        return jsonify({"error": "Internal server error"}), 500
