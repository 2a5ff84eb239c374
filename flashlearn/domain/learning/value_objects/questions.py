"""
Quiz question variants.

The six formats form a closed union (``Question``). Each variant is a
frozen dataclass holding the source card plus the material the learner
sees. Every variant's correct answer resolves to ``card.word``; the
sentence builder's answer is the original example sentence, which
contains the word.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, TypeAlias

from flashlearn.domain.learning.entities.card import Card

BLANK = "_______"


class QuestionVariant(str, Enum):
    """Discriminator for the question union."""

    MULTIPLE_CHOICE = "multiple_choice"
    SCRAMBLE = "scramble"
    EXACT_TYPING = "exact_typing"
    CONTEXTUAL_GAP_FILL = "contextual_gap_fill"
    SENTENCE_BUILDER = "sentence_builder"
    DICTATION = "dictation"


class QuizMode(str, Enum):
    """Generation strategy selected when a quiz starts."""

    SPRINT = "sprint"
    VSTEP_DRILL = "vstep_drill"


@dataclass(frozen=True)
class MultipleChoice:
    """Recognition: pick the word among four options."""

    card: Card
    options: tuple[str, ...]

    variant: ClassVar[QuestionVariant] = QuestionVariant.MULTIPLE_CHOICE

    @property
    def correct_option_index(self) -> int:
        return self.options.index(self.card.word)

    @property
    def expected_answer(self) -> str:
        return self.card.word


@dataclass(frozen=True)
class Scramble:
    """Construction: rebuild the word from its shuffled letters."""

    card: Card
    shuffled_letters: tuple[str, ...]

    variant: ClassVar[QuestionVariant] = QuestionVariant.SCRAMBLE

    @property
    def expected_answer(self) -> str:
        return self.card.word


@dataclass(frozen=True)
class ExactTyping:
    """Total recall: type the word from its definition."""

    card: Card
    hint: str | None = None

    variant: ClassVar[QuestionVariant] = QuestionVariant.EXACT_TYPING

    @property
    def expected_answer(self) -> str:
        return self.card.word


@dataclass(frozen=True)
class ContextualGapFill:
    """Reading: choose the word that fills the blank in a sentence."""

    card: Card
    sentence_with_blank: str
    options: tuple[str, ...]

    variant: ClassVar[QuestionVariant] = QuestionVariant.CONTEXTUAL_GAP_FILL

    @property
    def correct_option_index(self) -> int:
        return self.options.index(self.card.word)

    @property
    def expected_answer(self) -> str:
        return self.card.word


@dataclass(frozen=True)
class SentenceBuilder:
    """Writing: put the example sentence segments back in order."""

    card: Card
    scrambled_segments: tuple[str, ...]
    correct_sentence: str

    variant: ClassVar[QuestionVariant] = QuestionVariant.SENTENCE_BUILDER

    @property
    def expected_answer(self) -> str:
        return self.correct_sentence


@dataclass(frozen=True)
class Dictation:
    """Listening: type the word that is read aloud."""

    card: Card

    variant: ClassVar[QuestionVariant] = QuestionVariant.DICTATION

    @property
    def expected_answer(self) -> str:
        return self.card.word


Question: TypeAlias = (
    MultipleChoice | Scramble | ExactTyping | ContextualGapFill | SentenceBuilder | Dictation
)
