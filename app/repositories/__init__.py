from .leaderboard_repository import LeaderboardRepository
from .question_repository import QuestionRepository, QuestionFilter

__all__ = [
    "LeaderboardRepository",
    "QuestionRepository",
    "QuestionFilter",
]
