"""
LearnerStreak entity: consecutive days with a completed study session.
"""

from dataclasses import dataclass
from datetime import date, timedelta

from flashlearn.domain.common.entity import Entity
from flashlearn.domain.common.exceptions import ValidationError
from flashlearn.domain.common.value_objects import LearnerId


@dataclass(frozen=True)
class StreakResult:
    """Outcome of registering a day of activity."""

    did_increment: bool
    current: int


@dataclass(eq=False)
class LearnerStreak(Entity[LearnerId]):
    """
    Day streak of a learner.

    Business Rules:
    - The first completed session starts a streak of 1
    - Further sessions on the same day do not change the streak
    - A session on the day after the last active day extends the streak
    - A gap of more than one day restarts the streak at 1
    """

    id: LearnerId
    current_streak: int = 0
    last_active_date: date | None = None

    def __post_init__(self) -> None:
        if self.current_streak < 0:
            raise ValidationError("Streak cannot be negative", field="current_streak")

    def register_activity(self, today: date) -> StreakResult:
        if self.last_active_date == today:
            return StreakResult(did_increment=False, current=self.current_streak)

        if self.last_active_date is not None and self.last_active_date == today - timedelta(days=1):
            self.current_streak += 1
        else:
            self.current_streak = 1
        self.last_active_date = today
        return StreakResult(did_increment=True, current=self.current_streak)

    @classmethod
    def create(cls, learner_id: LearnerId) -> "LearnerStreak":
        return cls(id=learner_id)
