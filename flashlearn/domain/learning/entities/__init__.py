from .card import Card, CardEnrichment
from .learner_streak import LearnerStreak, StreakResult
from .study_queue import QueueSessionState, StudyQueue

__all__ = [
    "Card",
    "CardEnrichment",
    "LearnerStreak",
    "QueueSessionState",
    "StreakResult",
    "StudyQueue",
]
