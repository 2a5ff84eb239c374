"""Use case for updating a learner's day streak after a study session."""

from collections.abc import Callable
from datetime import date

import structlog

from flashlearn.application.learning.protocols.streak_repository import StreakRepositoryProtocol
from flashlearn.domain.common.value_objects import LearnerId
from flashlearn.domain.learning.entities.learner_streak import LearnerStreak, StreakResult

logger = structlog.get_logger(__name__)


class UpdateStreakOnSessionCompleteUseCase:
    """Registers a completed study session as a day of activity."""

    def __init__(
        self,
        streak_repository: StreakRepositoryProtocol,
        today: Callable[[], date] = date.today,
    ) -> None:
        """Initialize use case with the streak repository and a clock."""
        self.streak_repository = streak_repository
        self.today = today

    def execute(self, learner_id: LearnerId) -> StreakResult:
        """
        Update the streak of ``learner_id``.

        Args:
            learner_id: Learner who completed a session

        Returns:
            Whether the streak changed and its current length
        """
        streak = self.streak_repository.find_by_learner(learner_id)
        if streak is None:
            streak = LearnerStreak.create(learner_id)

        result = streak.register_activity(self.today())
        if result.did_increment:
            self.streak_repository.save(streak)

        logger.info(
            "learner_streak_updated",
            learner_id=str(learner_id),
            current_streak=result.current,
            did_increment=result.did_increment,
        )
        return result
