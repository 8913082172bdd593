from quizapp.router.api.quizzes import router as quizzes_router
from quizapp.router.api.results import router as results_router
__all__ = [
    "quizzes_router",
    "results_router",
]
