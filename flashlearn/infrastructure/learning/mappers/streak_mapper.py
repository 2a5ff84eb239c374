"""Mapper for LearnerStreak ORM ↔ Domain conversion."""

from flashlearn.domain.common.value_objects import LearnerId
from flashlearn.domain.learning.entities.learner_streak import LearnerStreak
from flashlearn.models import LearnerStreak as LearnerStreakORM


class LearnerStreakMapper:
    """Mapper for LearnerStreak ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: LearnerStreakORM) -> LearnerStreak:
        return LearnerStreak(
            id=LearnerId(orm_model.learner_id),
            current_streak=orm_model.current_streak,
            last_active_date=orm_model.last_active_date,
        )

    def to_orm(
        self, domain_entity: LearnerStreak, orm_model: LearnerStreakORM | None = None
    ) -> LearnerStreakORM:
        if orm_model:
            orm_model.current_streak = domain_entity.current_streak
            orm_model.last_active_date = domain_entity.last_active_date
            return orm_model

        return LearnerStreakORM(
            learner_id=domain_entity.id.value,
            current_streak=domain_entity.current_streak,
            last_active_date=domain_entity.last_active_date,
        )
