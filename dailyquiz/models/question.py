import json
from extensions import db


class Question(db.Model):
    """Multiple choice question in the pool the daily question is drawn from."""
    __tablename__ = "questions_pool"

    id = db.Column(db.Integer, primary_key=True)
    question_text = db.Column(db.String(500), nullable=False)
    answers = db.Column(db.String(2000), nullable=False, default="[]")  # JSON list of 4 strings
    correct_answer_index = db.Column(db.Integer, nullable=False, default=0)
    category = db.Column(db.String(50), nullable=False)
    difficulty = db.Column(db.String(20), nullable=False)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, server_default=db.func.now())

    __table_args__ = (
        db.CheckConstraint("correct_answer_index BETWEEN 0 AND 3", name="ck_question_correct_index"),
        db.Index("ix_questions_pool_active", "is_active"),
        db.Index("ix_questions_pool_category", "category"),
    )

    def get_answers(self):
        try:
            return json.loads(self.answers) if self.answers else []
        except ValueError:
            return []

    def set_answers(self, answers):
        self.answers = json.dumps(answers, ensure_ascii=False) if answers else "[]"
