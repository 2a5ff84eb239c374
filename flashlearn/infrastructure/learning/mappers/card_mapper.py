"""Mapper for Card ORM ↔ Domain conversion."""

from flashlearn.domain.common.value_objects import CardId, TopicId
from flashlearn.domain.learning.entities.card import Card
from flashlearn.models import Card as CardORM


class CardMapper:
    """Mapper for Card ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: CardORM) -> Card:
        """Convert ORM model to domain entity."""
        return Card(
            id=CardId(orm_model.id),
            word=orm_model.word,
            definition=orm_model.definition or "",
            example_sentence=orm_model.example_sentence or "",
            pronunciation_ipa=orm_model.pronunciation_ipa or "",
            part_of_speech=orm_model.part_of_speech or "",
            image_url=orm_model.image_url,
            level=orm_model.level or "",
            topic_id=TopicId(orm_model.topic_id) if orm_model.topic_id else None,
        )

    def to_orm(
        self, domain_entity: Card, orm_model: CardORM | None = None, position: int | None = None
    ) -> CardORM:
        """Convert domain entity to ORM model."""
        topic_id = domain_entity.topic_id.value if domain_entity.topic_id else None
        if orm_model:
            # Update existing
            orm_model.topic_id = topic_id
            orm_model.word = domain_entity.word
            orm_model.definition = domain_entity.definition
            orm_model.example_sentence = domain_entity.example_sentence
            orm_model.pronunciation_ipa = domain_entity.pronunciation_ipa
            orm_model.part_of_speech = domain_entity.part_of_speech
            orm_model.image_url = domain_entity.image_url
            orm_model.level = domain_entity.level
            if position is not None:
                orm_model.position = position
            return orm_model

        # Create new
        return CardORM(
            id=domain_entity.id.value,
            topic_id=topic_id,
            word=domain_entity.word,
            definition=domain_entity.definition,
            example_sentence=domain_entity.example_sentence,
            pronunciation_ipa=domain_entity.pronunciation_ipa,
            part_of_speech=domain_entity.part_of_speech,
            image_url=domain_entity.image_url,
            level=domain_entity.level,
            position=position or 0,
        )
