import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from dailyquiz.errors import NoQuestionsAvailable, ResolutionFailed, UpstreamStorageError
from dailyquiz.models import DailyQuestion, DailyScore, Question

logger = logging.getLogger(__name__)


class DailyQuestionService:
    """
    Resolves the question of the day.

    The first request for a date picks a random active question and tries to
    insert it as that date's DailyQuestion. The date is the primary key, so
    when several requests race only one insert lands; the others roll back,
    drop their own pick and read the winner's row.
    """

    def __init__(self, session):
        self.session = session

    def resolve(self, day):
        try:
            assignment = self._find_assignment(day)
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Daily question lookup failed for %s", day)
            raise UpstreamStorageError() from exc

        if assignment is not None:
            return assignment.question

        try:
            candidate = self._pick_random_question()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Random question sampling failed for %s", day)
            raise UpstreamStorageError() from exc

        if candidate is None:
            raise NoQuestionsAvailable()

        self.session.add(DailyQuestion(date=day, question_id=candidate.id))
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            logger.info("Daily question for %s already chosen by another request", day)
            return self._read_winner(day)
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Saving daily question for %s failed", day)
            raise UpstreamStorageError() from exc

        logger.info("Question %s selected for %s", candidate.id, day)
        return candidate

    def participants_count(self, day):
        try:
            count = self.session.query(func.count(DailyScore.id)) \
                .filter(DailyScore.date == day) \
                .scalar()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Counting participants for %s failed", day)
            raise UpstreamStorageError() from exc
        return count or 0

    def _find_assignment(self, day):
        return self.session.query(DailyQuestion).filter(DailyQuestion.date == day).first()

    def _pick_random_question(self):
        # uniformity is whatever the database's random() gives us
        return self.session.query(Question) \
            .filter(Question.is_active.is_(True)) \
            .order_by(func.random()) \
            .limit(1) \
            .first()

    def _read_winner(self, day):
        try:
            assignment = self._find_assignment(day)
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Re-reading daily question for %s failed", day)
            raise ResolutionFailed() from exc

        if assignment is None or assignment.question is None:
            logger.error("Daily question for %s missing after a lost insert", day)
            raise ResolutionFailed()
        return assignment.question
