import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from dailyquiz.errors import ConflictError, NotFoundError, UpstreamStorageError
from dailyquiz.models import DailyQuestion, Question
from dailyquiz.services.utils import isoformat_utc

logger = logging.getLogger(__name__)

REFERENCED_MESSAGE = (
    "Cannot delete question because it is referenced by existing game data. "
    "Please delete related records first."
)


def get_question_display(question: Question):
    """Admin view of a question, camelCase for the mobile client."""
    return {
        "id": question.id,
        "questionText": question.question_text,
        "answers": question.get_answers(),
        "correctAnswerIndex": question.correct_answer_index,
        "category": question.category,
        "difficulty": question.difficulty,
        "isActive": bool(question.is_active),
        "createdAt": isoformat_utc(question.created_at),
    }


def get_daily_question_payload(question: Question, day, participants_count=0):
    return {
        "id": question.id,
        "date": day.isoformat(),
        "question": question.question_text,
        "answers": question.get_answers(),
        "correct_answer_index": question.correct_answer_index,
        "category": question.category,
        "difficulty": question.difficulty,
        "participants_count": participants_count,
    }


def _apply(question, values):
    question.question_text = values["question_text"]
    question.set_answers(values["answers"])
    question.correct_answer_index = values["correct_answer_index"]
    question.category = values["category"]
    question.difficulty = values["difficulty"]
    question.is_active = values["is_active"]


class QuestionBank:
    """Admin reads and writes over the question pool."""

    def __init__(self, session):
        self.session = session

    def list(self, search=None, category=None, difficulty=None, active=None, limit=100, offset=0):
        query = self.session.query(Question)

        if search:
            query = query.filter(Question.question_text.icontains(search, autoescape=True))
        if category:
            query = query.filter(Question.category == category.lower())
        if difficulty:
            query = query.filter(Question.difficulty == difficulty.lower())
        if active is not None:
            query = query.filter(Question.is_active.is_(active))

        query = query.order_by(Question.created_at.desc(), Question.id.desc()) \
            .offset(offset) \
            .limit(limit)

        try:
            return query.all()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Listing questions failed")
            raise UpstreamStorageError("Failed to fetch questions") from exc

    def get(self, question_id):
        question = self.session.get(Question, question_id)
        if question is None:
            raise NotFoundError("Question not found")
        return question

    def create(self, values):
        question = Question()
        _apply(question, values)
        self.session.add(question)
        self._commit("Failed to create question")
        logger.info("Question %s created", question.id)
        return question

    def update(self, question_id, values):
        question = self.get(question_id)
        _apply(question, values)
        self._commit("Failed to update question")
        return question

    def delete(self, question_id):
        question = self.get(question_id)

        if self.reference_count(question_id):
            logger.warning("Refusing to delete question %s, it is a daily question", question_id)
            raise ConflictError(REFERENCED_MESSAGE)

        self.session.delete(question)
        try:
            self.session.commit()
        except IntegrityError as exc:
            # picked as a daily question between the check and the delete
            self.session.rollback()
            raise ConflictError(REFERENCED_MESSAGE) from exc
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Deleting question %s failed", question_id)
            raise UpstreamStorageError("Failed to delete question") from exc

    def reference_count(self, question_id):
        return self.session.query(func.count(DailyQuestion.date)) \
            .filter(DailyQuestion.question_id == question_id) \
            .scalar() or 0

    def references(self, question_id):
        daily_questions = self.reference_count(question_id)
        return {
            "questionId": question_id,
            "references": {
                "daily_questions": daily_questions,
                "total": daily_questions,
            },
            "canDelete": daily_questions == 0,
        }

    def _commit(self, failure_message):
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ConflictError(failure_message) from exc
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception(failure_message)
            raise UpstreamStorageError(failure_message) from exc
