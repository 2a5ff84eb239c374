"""
Domain service that builds quiz questions.

Variant selection is delegated to ``QuestionPolicy``; this module only
builds the material of the chosen variant (options, shuffled letters,
blanked sentence, shuffled segments). All randomness goes through the
``random.Random`` passed in, so a seeded instance reproduces a quiz.
"""

import random
import re
from collections.abc import Sequence

import structlog

from flashlearn.domain.learning.entities.card import Card
from flashlearn.domain.learning.exceptions import UnsupportedVariantError
from flashlearn.domain.learning.services.distractor_strategy import SmartDistractorGenerator
from flashlearn.domain.learning.services.question_policy import QuestionPolicy
from flashlearn.domain.learning.value_objects.questions import (
    BLANK,
    ContextualGapFill,
    Dictation,
    ExactTyping,
    MultipleChoice,
    Question,
    QuestionVariant,
    QuizMode,
    Scramble,
    SentenceBuilder,
)

logger = structlog.get_logger(__name__)

DISTRACTOR_COUNT = 3


def _shuffled_differently(items: Sequence[str], rng: random.Random) -> tuple[str, ...]:
    """
    Shuffle ``items``; if the result equals the input, rotate it by one.

    A rotation only fails to change the sequence when every item is equal,
    in which case no permutation can differ from the original.
    """
    shuffled = list(items)
    rng.shuffle(shuffled)
    if len(shuffled) > 1 and shuffled == list(items):
        shuffled = shuffled[1:] + shuffled[:1]
    return tuple(shuffled)


class QuestionGenerator:
    """Builds one question for a card from its proficiency score."""

    def __init__(
        self,
        rng: random.Random,
        policy: QuestionPolicy | None = None,
        distractor_generator: SmartDistractorGenerator | None = None,
        exact_typing_hint: bool = True,
    ) -> None:
        self.rng = rng
        self.policy = policy or QuestionPolicy()
        self.distractor_generator = distractor_generator or SmartDistractorGenerator()
        self.exact_typing_hint = exact_typing_hint

    def generate(
        self,
        card: Card,
        score: int,
        pool: Sequence[Card],
        mode: QuizMode = QuizMode.SPRINT,
    ) -> Question:
        """
        Generate the question for ``card``.

        Args:
            card: The card being asked
            score: Its current proficiency score
            pool: Cards of the session, used as the distractor source
            mode: Quiz mode selected at session start

        Returns:
            One of the six question variants
        """
        variant = self.policy.select(card, score, mode)
        logger.debug(
            "question_variant_selected",
            card_id=str(card.id),
            score=score,
            mode=mode.value,
            variant=variant.value,
        )
        return self.build(variant, card, pool)

    def build(self, variant: QuestionVariant, card: Card, pool: Sequence[Card]) -> Question:
        match variant:
            case QuestionVariant.MULTIPLE_CHOICE:
                return MultipleChoice(card=card, options=self._options(card, pool))
            case QuestionVariant.SCRAMBLE:
                letters = _shuffled_differently(card.word, self.rng)
                return Scramble(card=card, shuffled_letters=letters)
            case QuestionVariant.EXACT_TYPING:
                hint = card.word[0] if self.exact_typing_hint else None
                return ExactTyping(card=card, hint=hint)
            case QuestionVariant.CONTEXTUAL_GAP_FILL:
                return ContextualGapFill(
                    card=card,
                    sentence_with_blank=self.blank_sentence(card),
                    options=self._options(card, pool),
                )
            case QuestionVariant.SENTENCE_BUILDER:
                sentence = card.example_sentence.strip() or f"{card.word} is the answer."
                segments = sentence.split()
                return SentenceBuilder(
                    card=card,
                    scrambled_segments=_shuffled_differently(segments, self.rng),
                    correct_sentence=" ".join(segments),
                )
            case QuestionVariant.DICTATION:
                return Dictation(card=card)
            case _:
                raise UnsupportedVariantError(variant)

    @staticmethod
    def blank_sentence(card: Card) -> str:
        """
        Replace the word in the example sentence with a blank.

        Whole-word occurrences are blanked, ignoring case. When the sentence
        only contains the word inside a longer form ("crossed" for "cross"),
        that occurrence is blanked instead.
        """
        sentence = card.example_sentence.strip()
        if not sentence:
            return f"Definition: {card.definition}\nWord: {BLANK}"
        word = re.escape(card.word)
        blanked, replaced = re.subn(rf"(?<!\w){word}(?!\w)", BLANK, sentence, flags=re.IGNORECASE)
        if replaced:
            return blanked
        return re.sub(word, BLANK, sentence, flags=re.IGNORECASE)

    def _options(self, card: Card, pool: Sequence[Card]) -> tuple[str, ...]:
        distractors = self.distractor_generator.get_distractors(
            card, pool, self.rng, count=DISTRACTOR_COUNT
        )
        options = [card.word, *distractors]
        self.rng.shuffle(options)
        return tuple(options)
