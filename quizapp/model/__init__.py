from quizapp.model.quizzes import Quiz
from quizapp.model.results import Result

__all__ = ["Quiz", "Result"]
