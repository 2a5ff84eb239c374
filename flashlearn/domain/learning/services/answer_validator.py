"""Domain service that judges a raw answer against a question."""

import structlog

from flashlearn.domain.learning.exceptions import UnsupportedVariantError
from flashlearn.domain.learning.value_objects.questions import (
    ContextualGapFill,
    Dictation,
    ExactTyping,
    MultipleChoice,
    Question,
    Scramble,
    SentenceBuilder,
)

logger = structlog.get_logger(__name__)


class AnswerValidator:
    """
    Per-variant correctness check.

    Case rules per variant:
    - multiple choice and gap fill compare options exactly
    - scramble ignores case
    - exact typing trims surrounding whitespace, then compares exactly
    - sentence builder compares against the single-space rejoined sentence
    - dictation trims and ignores case
    """

    def validate(self, question: Question, raw_input: str) -> bool:
        """
        Judge ``raw_input`` for ``question``.

        Raises:
            UnsupportedVariantError: If ``question`` is not one of the known variants
        """
        match question:
            case MultipleChoice(card=card) | ContextualGapFill(card=card):
                return raw_input == card.word
            case Scramble(card=card):
                return raw_input.casefold() == card.word.casefold()
            case ExactTyping(card=card):
                return raw_input.strip() == card.word
            case SentenceBuilder(correct_sentence=correct_sentence):
                return raw_input == correct_sentence
            case Dictation(card=card):
                return raw_input.strip().casefold() == card.word.casefold()
            case _:
                logger.error("unsupported_question_variant", variant=type(question).__name__)
                raise UnsupportedVariantError(question)
