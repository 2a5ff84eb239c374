"""
Card entity: a single vocabulary unit being learned.
"""

from dataclasses import dataclass, replace

from flashlearn.domain.common.entity import Entity
from flashlearn.domain.common.exceptions import ValidationError
from flashlearn.domain.common.value_object import ValueObject
from flashlearn.domain.common.value_objects import CardId, TopicId


@dataclass(frozen=True)
class CardEnrichment(ValueObject):
    """Partial card update produced by the content enrichment service."""

    image_url: str | None = None
    pronunciation_ipa: str | None = None

    @property
    def is_empty(self) -> bool:
        return not (self.image_url or self.pronunciation_ipa)


@dataclass(frozen=True, eq=False)
class Card(Entity[CardId]):
    """
    Vocabulary card.

    Business Rules:
    - The word cannot be blank
    - A card is immutable for the length of a session; the only change
      allowed is filling in a missing image or phonetic transcription
    - Two cards are the same card when their ids match
    """

    id: CardId
    word: str
    definition: str = ""
    example_sentence: str = ""
    pronunciation_ipa: str = ""
    part_of_speech: str = ""
    image_url: str | None = None
    level: str = ""
    topic_id: TopicId | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.word or not self.word.strip():
            raise ValidationError("Card word cannot be empty", field="word")

    @property
    def needs_enrichment(self) -> bool:
        """Whether the card is missing its image or its IPA transcription."""
        return not self.image_url or not self.pronunciation_ipa.strip()

    def enrich(self, enrichment: CardEnrichment) -> "Card":
        """
        Return a copy with missing media fields filled in.

        Fields already present on the card are never overwritten.
        """
        changes: dict[str, str] = {}
        if enrichment.image_url and not self.image_url:
            changes["image_url"] = enrichment.image_url
        if enrichment.pronunciation_ipa and not self.pronunciation_ipa.strip():
            changes["pronunciation_ipa"] = enrichment.pronunciation_ipa
        if not changes:
            return self
        return replace(self, **changes)

    @classmethod
    def create(
        cls,
        id: str,
        word: str,
        definition: str = "",
        example_sentence: str = "",
        pronunciation_ipa: str = "",
        part_of_speech: str = "",
        image_url: str | None = None,
        level: str = "",
        topic_id: str | None = None,
    ) -> "Card":
        """Create a card from primitive values."""
        return cls(
            id=CardId(id),
            word=word.strip(),
            definition=definition.strip(),
            example_sentence=example_sentence.strip(),
            pronunciation_ipa=pronunciation_ipa.strip(),
            part_of_speech=part_of_speech.strip().upper(),
            image_url=image_url or None,
            level=level,
            topic_id=TopicId(topic_id) if topic_id else None,
        )
