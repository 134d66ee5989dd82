from extensions import db
from dailyquiz.services.utils import utc_now


class DailyScore(db.Model):
    __tablename__ = "daily_scores"

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(20), nullable=False)
    date = db.Column(db.Date, nullable=False)
    score = db.Column(db.Integer, nullable=False, default=0)
    correct_answers = db.Column(db.Integer, nullable=False, default=0)
    total_questions = db.Column(db.Integer, nullable=False, default=1)
    response_time_ms = db.Column(db.Integer, nullable=False)
    submitted_at = db.Column(db.DateTime, nullable=False, default=utc_now)

    __table_args__ = (
        db.UniqueConstraint("username", "date", name="uq_daily_score_user_date"),
        db.CheckConstraint("score >= 0", name="ck_daily_score_non_negative"),
        db.CheckConstraint("correct_answers >= 0", name="ck_daily_score_correct_non_negative"),
        db.CheckConstraint("correct_answers <= total_questions", name="ck_daily_score_correct_le_total"),
        db.Index("ix_daily_scores_date", "date"),
    )
