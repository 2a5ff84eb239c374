"""
Base class for Entities.

Entities have an identity that runs through time. Two cards are the same
card when their ids match, even if one of them has been enriched with an
image the other lacks.

Example:
    @dataclass(frozen=True, eq=False)
    class Card(Entity[CardId]):
        id: CardId
        word: str
"""

from abc import ABC
from dataclasses import dataclass
from typing import Generic, Self, TypeVar
from uuid import UUID, uuid4

from .value_object import ValueObject


@dataclass(frozen=True)
class EntityId(ValueObject):
    """
    Base class for strongly-typed entity identifiers.

    Identifiers wrap an int, a non-empty string (document-store keys) or a
    UUID, so a CardId can never be passed where a LearnerId is expected.
    """

    value: int | str | UUID

    def __post_init__(self) -> None:
        if isinstance(self.value, str) and not self.value.strip():
            raise ValueError(f"{self.__class__.__name__} cannot be blank")
        if isinstance(self.value, int) and self.value < 0:
            raise ValueError(f"{self.__class__.__name__} must be non-negative")

    def __str__(self) -> str:
        return str(self.value)

    @classmethod
    def generate(cls) -> Self:
        """Create a fresh random identifier."""
        return cls(uuid4())

    def to_primitive(self) -> int | str:
        """Convert to primitive for logging and persistence."""
        if isinstance(self.value, int | str):
            return self.value
        return str(self.value)


IdType = TypeVar("IdType", bound=EntityId)


class Entity(ABC, Generic[IdType]):
    """
    Base class for Entities in the domain model.

    Subclasses must have an 'id' attribute of type IdType. Equality and
    hashing go through the id only.
    """

    id: IdType

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, self.__class__):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.id})"
