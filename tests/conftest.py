import pytest

from app import create_app
from config import Config
from extensions import db
from dailyquiz.models import DailyScore, Question


@pytest.fixture
def app(tmp_path):
    class TestConfig(Config):
        TESTING = True
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{tmp_path / 'dailyquiz-test.db'}"
        SQLALCHEMY_ENGINE_OPTIONS = {}
        ADMIN_API_KEY = None

    app = create_app(TestConfig)
    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()
        db.engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def ctx(app):
    with app.app_context():
        yield


@pytest.fixture
def make_question(ctx):
    counter = {"n": 0}

    def _make(is_active=True, category="history", difficulty="easy", text=None):
        counter["n"] += 1
        q = Question(
            question_text=text or f"Question {counter['n']}?",
            correct_answer_index=counter["n"] % 4,
            category=category,
            difficulty=difficulty,
            is_active=is_active,
        )
        q.set_answers([f"A{counter['n']}", f"B{counter['n']}", f"C{counter['n']}", f"D{counter['n']}"])
        db.session.add(q)
        db.session.commit()
        return q

    return _make


@pytest.fixture
def make_score(ctx):
    def _make(username, day, score, response_time_ms=1000, correct_answers=1, total_questions=1):
        s = DailyScore(
            username=username,
            date=day,
            score=score,
            correct_answers=correct_answers,
            total_questions=total_questions,
            response_time_ms=response_time_ms,
        )
        db.session.add(s)
        db.session.commit()
        return s

    return _make
