import re
from datetime import date, datetime

from dailyquiz.errors import ValidationError
from dailyquiz.services.utils import today_utc

USERNAME_RE = re.compile(r"^[\u0590-\u05FFa-zA-Z0-9_\-\s]+$")
DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

MAX_TOTAL_QUESTIONS = 100
MAX_SCORE = 2**31 - 1  # largest value an INTEGER column holds everywhere
MAX_RESPONSE_TIME_MS = 10 * 60 * 1000
SCORE_FIELDS = ("score", "correct_answers", "total_questions", "response_time_ms")


class ScoreSubmission:
    def __init__(self, score, correct_answers, total_questions, response_time_ms):
        self.score = score
        self.correct_answers = correct_answers
        self.total_questions = total_questions
        self.response_time_ms = response_time_ms

    def as_columns(self):
        return {
            "score": self.score,
            "correct_answers": self.correct_answers,
            "total_questions": self.total_questions,
            "response_time_ms": self.response_time_ms,
        }


def require_json_object(body, required=()):
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    missing = [f for f in required if f not in body]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")
    return body


def validate_username(username) -> str:
    if not username or not isinstance(username, str):
        raise ValidationError("Username is required and must be a string")

    trimmed = username.strip()
    if len(trimmed) < 2:
        raise ValidationError("Username must be at least 2 characters long")
    if len(trimmed) > 20:
        raise ValidationError("Username must be no more than 20 characters long")
    if not USERNAME_RE.match(trimmed):
        raise ValidationError("Username contains invalid characters")
    return trimmed


def _as_int(value):
    # JSON numbers arrive as int or float; bool is an int subclass but not a number here
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError("Score data must be numbers")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValidationError("Score data must be whole numbers")
        return int(value)
    return value


def validate_score_data(data) -> ScoreSubmission:
    """
    Checks a score submission before anything touches the database.

    Raises ValidationError with a message meant for the player.
    """
    if any(data.get(f) is None for f in SCORE_FIELDS):
        raise ValidationError("Missing required fields")

    score, correct, total, elapsed = (_as_int(data[f]) for f in SCORE_FIELDS)

    if score < 0:
        raise ValidationError("Score cannot be negative")
    if score > MAX_SCORE:
        raise ValidationError("Score is too large")
    if correct < 0:
        raise ValidationError("Correct answers cannot be negative")
    if total <= 0:
        raise ValidationError("Total questions must be positive")
    if correct > total:
        raise ValidationError("Correct answers cannot exceed total questions")
    if elapsed <= 0:
        raise ValidationError("Response time must be positive")
    if total > MAX_TOTAL_QUESTIONS:
        raise ValidationError(f"Total questions cannot exceed {MAX_TOTAL_QUESTIONS}")
    if elapsed > MAX_RESPONSE_TIME_MS:
        raise ValidationError("Response time cannot exceed 10 minutes")

    return ScoreSubmission(score, correct, total, elapsed)


def parse_date(value, allow_future=True) -> date:
    """Parses YYYY-MM-DD; the date must lie within a year of today (UTC)."""
    if not value or not isinstance(value, str):
        raise ValidationError("Date must be a string")
    if not DATE_RE.match(value):
        raise ValidationError("Date must be in YYYY-MM-DD format")
    try:
        parsed = datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError("Invalid date")

    today = today_utc()
    if abs((parsed - today).days) > 365:
        raise ValidationError("Date must be within one year of current date")
    if not allow_future and parsed > today:
        raise ValidationError("Date cannot be in the future")
    return parsed


def date_or_today(value, allow_future=True) -> date:
    if value is None or value == "":
        return today_utc()
    return parse_date(value, allow_future=allow_future)


def validate_question_payload(data) -> dict:
    """Normalizes an admin question payload into column values."""
    require_json_object(data)

    question_text = data.get("questionText")
    answers = data.get("answers")
    correct_idx = data.get("correctAnswerIndex")
    category = data.get("category")
    difficulty = data.get("difficulty")
    is_active = data.get("isActive", True)

    if not question_text or not answers or correct_idx is None or not category or not difficulty:
        raise ValidationError(
            "Missing required fields: questionText, answers, correctAnswerIndex, category, difficulty"
        )

    if not isinstance(answers, list) or len(answers) != 4:
        raise ValidationError("Answers must be an array of exactly 4 strings")

    if isinstance(correct_idx, bool) or not isinstance(correct_idx, int) or not 0 <= correct_idx <= 3:
        raise ValidationError("correctAnswerIndex must be between 0 and 3")

    if any(not isinstance(a, str) or not a.strip() for a in answers):
        raise ValidationError("All answers must be non-empty strings")

    if not all(isinstance(v, str) for v in (question_text, category, difficulty)):
        raise ValidationError("questionText, category and difficulty must be strings")

    if is_active is None:
        is_active = True
    if not isinstance(is_active, bool):
        raise ValidationError("isActive must be a boolean")

    return {
        "question_text": question_text.strip(),
        "answers": [a.strip() for a in answers],
        "correct_answer_index": correct_idx,
        "category": category.strip().lower(),
        "difficulty": difficulty.strip().lower(),
        "is_active": is_active,
    }
