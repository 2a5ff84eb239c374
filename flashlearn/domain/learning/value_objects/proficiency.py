"""Proficiency score and level value objects."""

from dataclasses import dataclass
from enum import Enum

from flashlearn.domain.common.exceptions import ValidationError
from flashlearn.domain.common.value_object import ValueObject
from flashlearn.domain.common.value_objects import CardId, LearnerId

DEFAULT_FAMILIAR_MIN_SCORE = 3
DEFAULT_MASTERED_MIN_SCORE = 6


class ProficiencyLevel(str, Enum):
    """Coarse mastery band derived from a proficiency score."""

    NEW = "new"
    FAMILIAR = "familiar"
    MASTERED = "mastered"

    @classmethod
    def from_score(
        cls,
        score: int,
        familiar_min: int = DEFAULT_FAMILIAR_MIN_SCORE,
        mastered_min: int = DEFAULT_MASTERED_MIN_SCORE,
    ) -> "ProficiencyLevel":
        if score >= mastered_min:
            return cls.MASTERED
        if score >= familiar_min:
            return cls.FAMILIAR
        return cls.NEW


@dataclass(frozen=True)
class ScoreUpdate(ValueObject):
    """
    Outcome of recording one answer.

    ``persisted`` is False when the store rejected or failed the write; the
    score is still the value the session continues with.
    """

    card_id: CardId
    learner_id: LearnerId
    previous_score: int
    score: int
    persisted: bool = True

    def __post_init__(self) -> None:
        if self.score < 0 or self.previous_score < 0:
            raise ValidationError("Proficiency score cannot be negative", field="score")
