from .card_repository import CardRepository
from .proficiency_repository import ProficiencyRepository
from .streak_repository import StreakRepository

__all__ = ["CardRepository", "ProficiencyRepository", "StreakRepository"]
