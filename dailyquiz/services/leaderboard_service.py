import logging

from sqlalchemy.exc import SQLAlchemyError

from dailyquiz.errors import UpstreamStorageError
from dailyquiz.models import DailyScore
from dailyquiz.services.utils import isoformat_utc, utc_now

logger = logging.getLogger(__name__)


def accuracy_percentage(correct_answers, total_questions):
    if not total_questions:
        return 0.0
    return round(correct_answers / total_questions * 100, 1)


class LeaderboardService:
    def __init__(self, session):
        self.session = session

    def scores_for(self, day):
        """Higher score first; on equal score the faster response wins."""
        try:
            return self.session.query(DailyScore) \
                .filter(DailyScore.date == day) \
                .order_by(
                    DailyScore.score.desc(),
                    DailyScore.response_time_ms.asc(),
                    DailyScore.submitted_at.asc(),
                    DailyScore.id.asc(),
                ) \
                .all()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Loading leaderboard for %s failed", day)
            raise UpstreamStorageError() from exc

    def build(self, day):
        scores = self.scores_for(day)

        leaderboard = []
        for rank, s in enumerate(scores, start=1):
            leaderboard.append({
                "rank": rank,
                "username": s.username,
                "score": s.score,
                "correct_answers": s.correct_answers,
                "total_questions": s.total_questions,
                "accuracy_percentage": accuracy_percentage(s.correct_answers, s.total_questions),
                "response_time_ms": s.response_time_ms,
                "submitted_at": isoformat_utc(s.submitted_at),
            })

        if scores:
            average = round(sum(s.score for s in scores) / len(scores), 2)
            highest = scores[0].score
        else:
            average, highest = 0, 0

        return {
            "date": day.isoformat(),
            "leaderboard": leaderboard,
            "statistics": {
                "total_participants": len(scores),
                "average_score": average,
                "highest_score": highest,
                "updated_at": isoformat_utc(utc_now()),
            },
        }
