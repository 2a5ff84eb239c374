"""Protocol for the proficiency score store."""

from typing import Protocol

from flashlearn.domain.common.value_objects import CardId, LearnerId


class ProficiencyStoreProtocol(Protocol):
    """Key-value store of per-card proficiency scores."""

    async def get(self, card_id: CardId, learner_id: LearnerId) -> int | None:
        """
        Read a stored score.

        Returns:
            The score, or None when nothing was stored yet
        """
        ...

    async def set(self, card_id: CardId, learner_id: LearnerId, score: int) -> bool:
        """
        Write a score.

        Returns:
            True if the write was accepted
        """
        ...
