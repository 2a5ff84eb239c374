"""Repository for LearnerStreak domain entities."""

from sqlalchemy.orm import Session

from flashlearn.domain.common.value_objects import LearnerId
from flashlearn.domain.learning.entities.learner_streak import LearnerStreak
from flashlearn.infrastructure.learning.mappers.streak_mapper import LearnerStreakMapper
from flashlearn.models import LearnerStreak as LearnerStreakORM


class StreakRepository:
    """Repository for LearnerStreak domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = LearnerStreakMapper()

    def find_by_learner(self, learner_id: LearnerId) -> LearnerStreak | None:
        orm_model = self.db.get(LearnerStreakORM, learner_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def save(self, streak: LearnerStreak) -> LearnerStreak:
        existing = self.db.get(LearnerStreakORM, streak.id.value)
        orm_model = self.mapper.to_orm(streak, existing)
        if existing is None:
            self.db.add(orm_model)
        self.db.commit()
        self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)
