from dataclasses import dataclass
from uuid import UUID

from ..entity import EntityId


@dataclass(frozen=True)
class CardId(EntityId):
    """Strongly-typed card identifier (document key)."""

    value: str


@dataclass(frozen=True)
class LearnerId(EntityId):
    """Strongly-typed learner identifier."""

    value: str


@dataclass(frozen=True)
class TopicId(EntityId):
    """Strongly-typed topic identifier."""

    value: str


@dataclass(frozen=True)
class SessionId(EntityId):
    """Identifier of a single study or quiz session."""

    value: UUID
