from .card_mapper import CardMapper
from .streak_mapper import LearnerStreakMapper

__all__ = ["CardMapper", "LearnerStreakMapper"]
