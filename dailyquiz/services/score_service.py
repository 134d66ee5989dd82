import logging
from collections import namedtuple

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from dailyquiz.errors import UpstreamStorageError
from dailyquiz.models import DailyScore
from dailyquiz.services.utils import utc_now

logger = logging.getLogger(__name__)

SubmitResult = namedtuple("SubmitResult", ["accepted", "effective_score", "first"], defaults=[False])


class ScoreLedger:
    """
    Best score per (username, date).

    A stored score is only ever replaced by a strictly higher one, so an
    equal score keeps the earlier submission time.
    """

    def __init__(self, session):
        self.session = session

    def submit(self, username, day, submission):
        try:
            return self._submit(username, day, submission)
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Saving score for %s on %s failed", username, day)
            raise UpstreamStorageError() from exc

    def best_score(self, username, day):
        return self.session.query(DailyScore.score) \
            .filter(DailyScore.username == username, DailyScore.date == day) \
            .scalar()

    def _submit(self, username, day, submission):
        existing = self.best_score(username, day)

        if existing is None:
            self.session.add(DailyScore(username=username, date=day, **submission.as_columns()))
            try:
                self.session.commit()
                logger.info("First score %s for %s on %s", submission.score, username, day)
                return SubmitResult(True, submission.score, first=True)
            except IntegrityError:
                # a concurrent first submission got there; compare against it
                self.session.rollback()

        return self._raise_if_higher(username, day, submission)

    def _raise_if_higher(self, username, day, submission):
        values = submission.as_columns()
        values["submitted_at"] = utc_now()

        updated = self.session.query(DailyScore) \
            .filter(
                DailyScore.username == username,
                DailyScore.date == day,
                DailyScore.score < submission.score,
            ) \
            .update(values, synchronize_session=False)
        self.session.commit()

        if updated:
            logger.info("New high score %s for %s on %s", submission.score, username, day)
            return SubmitResult(True, submission.score)

        return SubmitResult(False, self.best_score(username, day))
