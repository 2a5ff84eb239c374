"""Repository for Card domain entities."""

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from flashlearn.domain.common.value_objects import CardId, TopicId
from flashlearn.domain.learning.entities.card import Card
from flashlearn.infrastructure.learning.mappers.card_mapper import CardMapper
from flashlearn.models import Card as CardORM


class CardRepository:
    """Repository for Card domain entities; also serves as the card source of sessions."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = CardMapper()

    def find_by_id(self, card_id: CardId) -> Card | None:
        """
        Find a card by ID.

        Args:
            card_id: The card ID

        Returns:
            Card entity if found, None otherwise
        """
        orm_model = self.db.get(CardORM, card_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_topic(self, topic_id: TopicId) -> list[Card]:
        """
        Get all cards of a topic.

        Args:
            topic_id: The topic ID

        Returns:
            List of card entities in authoring order
        """
        stmt = (
            select(CardORM)
            .where(CardORM.topic_id == topic_id.value)
            .order_by(CardORM.position, CardORM.id)
        )
        orm_models = self.db.execute(stmt).scalars().all()
        return [self.mapper.to_domain(orm) for orm in orm_models]

    async def get_cards_for_topic(self, topic_id: TopicId) -> list[Card]:
        return self.find_by_topic(topic_id)

    def save(self, card: Card, position: int | None = None) -> Card:
        """
        Save a card entity (create or update).

        Args:
            card: The card entity to save
            position: Optional place of the card inside its topic

        Returns:
            Saved card entity
        """
        existing = self.db.get(CardORM, card.id.value)
        orm_model = self.mapper.to_orm(card, existing, position)
        if existing is None:
            self.db.add(orm_model)
        self.db.commit()
        self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)

    def save_all(self, cards: Sequence[Card]) -> list[Card]:
        """Save cards of a topic, keeping their order as authoring order."""
        return [self.save(card, position=index) for index, card in enumerate(cards)]
