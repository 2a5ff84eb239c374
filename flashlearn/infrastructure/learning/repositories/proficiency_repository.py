"""Repository for per-card proficiency scores."""

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from flashlearn.domain.common.value_objects import CardId, LearnerId
from flashlearn.models import ProficiencyScore as ProficiencyScoreORM


class ProficiencyRepository:
    """
    Proficiency store backed by the ``proficiency_scores`` table.

    The async ``get``/``set`` run the synchronous session inline, so the
    event loop (and any running quiz countdown) waits for each round trip.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def find_score(self, card_id: CardId, learner_id: LearnerId) -> int | None:
        stmt = select(ProficiencyScoreORM.score).where(
            ProficiencyScoreORM.card_id == card_id.value,
            ProficiencyScoreORM.learner_id == learner_id.value,
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def save_score(self, card_id: CardId, learner_id: LearnerId, score: int) -> None:
        orm_model = self.db.get(ProficiencyScoreORM, (card_id.value, learner_id.value))
        if orm_model is None:
            orm_model = ProficiencyScoreORM(
                card_id=card_id.value, learner_id=learner_id.value, score=score
            )
            self.db.add(orm_model)
        else:
            orm_model.score = score
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

    async def get(self, card_id: CardId, learner_id: LearnerId) -> int | None:
        return self.find_score(card_id, learner_id)

    async def set(self, card_id: CardId, learner_id: LearnerId, score: int) -> bool:
        if score < 0:
            return False
        self.save_score(card_id, learner_id, score)
        return True
