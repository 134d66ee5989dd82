from sqlalchemy import func

from dailyquiz.models import DailyScore, Question
from dailyquiz.services.utils import isoformat_utc, utc_now


def get_database_stats(session, day):
    total_questions = session.query(func.count(Question.id)).scalar() or 0
    active_questions = session.query(func.count(Question.id)) \
        .filter(Question.is_active.is_(True)) \
        .scalar() or 0

    total_users = session.query(func.count(func.distinct(DailyScore.username))).scalar() or 0
    total_scores = session.query(func.count(DailyScore.id)).scalar() or 0

    avg_today, top_today = session.query(func.avg(DailyScore.score), func.max(DailyScore.score)) \
        .filter(DailyScore.date == day) \
        .one()

    return {
        "totalQuestions": total_questions,
        "activeQuestions": active_questions,
        "totalUsers": total_users,
        "totalScores": total_scores,
        "avgScoreToday": round(float(avg_today or 0), 2),
        "topScoreToday": top_today or 0,
        "lastUpdated": isoformat_utc(utc_now()),
    }
