"""Protocol for the card source in learning context."""

from typing import Protocol

from flashlearn.domain.common.value_objects import TopicId
from flashlearn.domain.learning.entities.card import Card


class CardSourceProtocol(Protocol):
    """Protocol for loading the cards of a topic."""

    async def get_cards_for_topic(self, topic_id: TopicId) -> list[Card]:
        """
        Get all cards of a topic.

        Args:
            topic_id: The topic ID

        Returns:
            List of card entities in authoring order

        Raises:
            Exception: Any failure of the underlying source
        """
        ...
