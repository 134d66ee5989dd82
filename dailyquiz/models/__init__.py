from .question import Question
from .daily_question import DailyQuestion
from .daily_score import DailyScore

__all__ = [
	"Question",
	"DailyQuestion",
	"DailyScore",
]
