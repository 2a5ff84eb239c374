"""
Question variant selection.

The variant for a card is a pure function of (card, score, mode):

    SPRINT       NEW (score below familiar_min)   MULTIPLE_CHOICE, or SCRAMBLE
                                                  when the card key is odd and
                                                  the word is short enough
    SPRINT       FAMILIAR                         CONTEXTUAL_GAP_FILL
    SPRINT       MASTERED                         EXACT_TYPING
    VSTEP_DRILL  any level                        key % 3 picks CONTEXTUAL_GAP_FILL,
                                                  SENTENCE_BUILDER or DICTATION

The card key is a CRC32 of the card id, so the same card always gets the
same variant for the same score, across processes.
"""

import zlib

from flashlearn.domain.learning.entities.card import Card
from flashlearn.domain.learning.value_objects.proficiency import (
    DEFAULT_FAMILIAR_MIN_SCORE,
    DEFAULT_MASTERED_MIN_SCORE,
    ProficiencyLevel,
)
from flashlearn.domain.learning.value_objects.questions import QuestionVariant, QuizMode

DEFAULT_SCRAMBLE_MAX_WORD_LENGTH = 7

_DRILL_ROTATION = (
    QuestionVariant.CONTEXTUAL_GAP_FILL,
    QuestionVariant.SENTENCE_BUILDER,
    QuestionVariant.DICTATION,
)


def card_key(card: Card) -> int:
    """Stable non-negative integer derived from the card id."""
    return zlib.crc32(str(card.id).encode("utf-8"))


class QuestionPolicy:
    """Maps a card and its proficiency score to a question variant."""

    def __init__(
        self,
        familiar_min: int = DEFAULT_FAMILIAR_MIN_SCORE,
        mastered_min: int = DEFAULT_MASTERED_MIN_SCORE,
        scramble_max_word_length: int = DEFAULT_SCRAMBLE_MAX_WORD_LENGTH,
    ) -> None:
        self.familiar_min = familiar_min
        self.mastered_min = mastered_min
        self.scramble_max_word_length = scramble_max_word_length

    def level_for(self, score: int) -> ProficiencyLevel:
        return ProficiencyLevel.from_score(score, self.familiar_min, self.mastered_min)

    def select(self, card: Card, score: int, mode: QuizMode = QuizMode.SPRINT) -> QuestionVariant:
        key = card_key(card)
        if mode is QuizMode.VSTEP_DRILL:
            return _DRILL_ROTATION[key % len(_DRILL_ROTATION)]

        match self.level_for(score):
            case ProficiencyLevel.MASTERED:
                return QuestionVariant.EXACT_TYPING
            case ProficiencyLevel.FAMILIAR:
                return QuestionVariant.CONTEXTUAL_GAP_FILL
            case _:
                if key % 2 == 1 and 1 < len(card.word) <= self.scramble_max_word_length:
                    return QuestionVariant.SCRAMBLE
                return QuestionVariant.MULTIPLE_CHOICE
