"""Protocol for LearnerStreak repository in learning context."""

from typing import Protocol

from flashlearn.domain.common.value_objects import LearnerId
from flashlearn.domain.learning.entities.learner_streak import LearnerStreak


class StreakRepositoryProtocol(Protocol):
    """Protocol for learner day-streak persistence."""

    def find_by_learner(self, learner_id: LearnerId) -> LearnerStreak | None:
        """
        Find the streak of a learner.

        Args:
            learner_id: The learner ID

        Returns:
            LearnerStreak entity if one was saved, None otherwise
        """
        ...

    def save(self, streak: LearnerStreak) -> LearnerStreak:
        """
        Save a streak (create or update).

        Args:
            streak: The streak entity to save

        Returns:
            Saved streak entity
        """
        ...
