from .leaderboard import LeaderboardEntry, LeaderboardScope, ScopedLeaderboardEntry
from .question import QuestionRecord
from .village import Village, TalukaInfo, DistrictInfo

__all__ = [
    "LeaderboardEntry",
    "LeaderboardScope",
    "ScopedLeaderboardEntry",
    "QuestionRecord",
    "Village",
    "TalukaInfo",
    "DistrictInfo",
]
