from .card_source import CardSourceProtocol
from .enrichment_service import EnrichmentServiceProtocol
from .proficiency_store import ProficiencyStoreProtocol
from .streak_repository import StreakRepositoryProtocol
from .timer_scheduler import TimerCallback, TimerHandle, TimerSchedulerProtocol

__all__ = [
    "CardSourceProtocol",
    "EnrichmentServiceProtocol",
    "ProficiencyStoreProtocol",
    "StreakRepositoryProtocol",
    "TimerCallback",
    "TimerHandle",
    "TimerSchedulerProtocol",
]
