"""Application service for proficiency score reads and writes."""

from collections.abc import Callable

import structlog

from flashlearn.application.learning.protocols.proficiency_store import ProficiencyStoreProtocol
from flashlearn.domain.common.domain_event import DomainEvent
from flashlearn.domain.common.value_objects import CardId, LearnerId
from flashlearn.domain.learning.events import ProficiencyWriteFailed
from flashlearn.domain.learning.services.proficiency_rule import ProficiencyRule
from flashlearn.domain.learning.value_objects.proficiency import ScoreUpdate

logger = structlog.get_logger(__name__)

EventListener = Callable[[DomainEvent], None]


class ProficiencyModel:
    """
    Reads and writes per-card proficiency scores.

    Store failures never stop a session: a failed read counts as a score of
    0 and a failed write is reported on the returned ``ScoreUpdate`` and as
    a ``ProficiencyWriteFailed`` event.
    """

    def __init__(
        self,
        store: ProficiencyStoreProtocol,
        rule: ProficiencyRule | None = None,
        on_event: EventListener | None = None,
    ) -> None:
        self.store = store
        self.rule = rule or ProficiencyRule()
        self.on_event = on_event

    def next_score(self, current: int, was_correct: bool) -> int:
        return self.rule.next_score(current, was_correct)

    async def get(self, card_id: CardId, learner_id: LearnerId) -> int:
        """Stored score, or 0 when absent or unreadable."""
        try:
            score = await self.store.get(card_id, learner_id)
        except Exception as e:
            logger.warning(
                "proficiency_read_failed",
                card_id=str(card_id),
                learner_id=str(learner_id),
                error=str(e),
            )
            return 0
        if score is None or score < 0:
            return 0
        return score

    async def record_answer(
        self, card_id: CardId, learner_id: LearnerId, was_correct: bool
    ) -> ScoreUpdate:
        """
        Apply one answer to the stored score and write the result back.

        Returns:
            The computed update; ``persisted`` is False when the write failed
        """
        current = await self.get(card_id, learner_id)
        return await self.apply(card_id, learner_id, current, was_correct)

    async def apply(
        self, card_id: CardId, learner_id: LearnerId, current: int, was_correct: bool
    ) -> ScoreUpdate:
        """Like ``record_answer`` but starting from a score the caller already knows."""
        score = self.next_score(current, was_correct)
        persisted = await self.persist(card_id, learner_id, score)
        return ScoreUpdate(
            card_id=card_id,
            learner_id=learner_id,
            previous_score=current,
            score=score,
            persisted=persisted,
        )

    async def persist(self, card_id: CardId, learner_id: LearnerId, score: int) -> bool:
        """
        Write ``score`` once, without retrying.

        Returns:
            True if the store accepted the write
        """
        try:
            accepted = await self.store.set(card_id, learner_id, score)
        except Exception as e:
            logger.warning(
                "proficiency_write_failed",
                card_id=str(card_id),
                learner_id=str(learner_id),
                score=score,
                error=str(e),
            )
            accepted = False
        else:
            if not accepted:
                logger.warning(
                    "proficiency_write_failed",
                    card_id=str(card_id),
                    learner_id=str(learner_id),
                    score=score,
                    error="rejected by store",
                )

        if not accepted and self.on_event is not None:
            self.on_event(
                ProficiencyWriteFailed(learner_id=learner_id, card_id=card_id, score=score)
            )
        return accepted
