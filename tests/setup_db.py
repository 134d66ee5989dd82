from app import create_app
from extensions import db
from dailyquiz.models import Question

SEED_QUESTIONS = [
    ("What is the capital of Australia?", ["Sydney", "Canberra", "Melbourne", "Perth"], 1, "geography", "easy"),
    ("Which element has the chemical symbol Fe?", ["Iron", "Lead", "Fluorine", "Gold"], 0, "science", "easy"),
    ("In which year did the Berlin Wall fall?", ["1987", "1991", "1989", "1985"], 2, "history", "medium"),
    ("Who composed the Four Seasons?", ["Bach", "Mozart", "Handel", "Vivaldi"], 3, "music", "medium"),
    ("What is the smallest prime number?", ["0", "1", "2", "3"], 2, "math", "easy"),
]

app = create_app()

with app.app_context():
    db.create_all()

    created = 0
    for text, answers, correct_idx, category, difficulty in SEED_QUESTIONS:
        if Question.query.filter_by(question_text=text).first():
            continue
        q = Question(
            question_text=text,
            correct_answer_index=correct_idx,
            category=category,
            difficulty=difficulty,
            is_active=True,
        )
        q.set_answers(answers)
        db.session.add(q)
        created += 1

    db.session.commit()

    print('DB initialized. New questions:', created, 'Active pool:', Question.query.filter_by(is_active=True).count())
