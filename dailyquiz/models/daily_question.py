from extensions import db


class DailyQuestion(db.Model):
    """
    Binds a calendar date to the question everyone plays that day.
    The date is the primary key, so only the first insert for a day succeeds.
    """
    __tablename__ = "daily_questions"

    date = db.Column(db.Date, primary_key=True)
    question_id = db.Column(
        db.Integer,
        db.ForeignKey("questions_pool.id", ondelete="RESTRICT"),
        nullable=False,
    )
    created_at = db.Column(db.DateTime, server_default=db.func.now())

    question = db.relationship("Question", lazy="joined")

    __table_args__ = (
        db.Index("ix_daily_questions_question", "question_id"),
    )
