"""
Distractor selection for choice-based questions.

Strategies are tried in priority order (visual similarity, same part of
speech, random pool word). When the pool cannot supply enough distinct
words, the generator relaxes the "drawn from the pool" rule and pads with
spelling variants of the target word, then with numbered forms of it, so
a question always gets the requested number of unique distractors.
"""

import random
from collections.abc import Iterable, Sequence
from typing import Protocol

from flashlearn.domain.learning.entities.card import Card

MAX_VISUAL_DISTANCE = 3


def levenshtein_distance(s1: str, s2: str) -> int:
    """Edit distance between two words (insert, delete, substitute)."""
    if len(s1) < len(s2):
        s1, s2 = s2, s1
    previous_row = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1, start=1):
        current_row = [i]
        for j, c2 in enumerate(s2, start=1):
            cost = 0 if c1 == c2 else 1
            current_row.append(
                min(previous_row[j] + 1, current_row[j - 1] + 1, previous_row[j - 1] + cost)
            )
        previous_row = current_row
    return previous_row[-1]


def _candidates(target: Card, pool: Iterable[Card]) -> list[Card]:
    return [card for card in pool if card.id != target.id and card.word != target.word]


class DistractorStrategy(Protocol):
    """Strategy for proposing wrong answers drawn from the card pool."""

    def generate(
        self, target: Card, pool: Sequence[Card], count: int, rng: random.Random
    ) -> list[str]: ...


class LevenshteinDistractorStrategy:
    """Words that look alike: edit distance below ``MAX_VISUAL_DISTANCE``."""

    def generate(
        self, target: Card, pool: Sequence[Card], count: int, rng: random.Random
    ) -> list[str]:
        words = [
            card.word
            for card in _candidates(target, pool)
            if levenshtein_distance(target.word, card.word) < MAX_VISUAL_DISTANCE
        ]
        rng.shuffle(words)
        return words[:count]


class SemanticDistractorStrategy:
    """Words sharing the target's part of speech."""

    def generate(
        self, target: Card, pool: Sequence[Card], count: int, rng: random.Random
    ) -> list[str]:
        if not target.part_of_speech:
            return []
        words = [
            card.word
            for card in _candidates(target, pool)
            if card.part_of_speech == target.part_of_speech
        ]
        rng.shuffle(words)
        return words[:count]


class RandomDistractorStrategy:
    """Any other word of the pool."""

    def generate(
        self, target: Card, pool: Sequence[Card], count: int, rng: random.Random
    ) -> list[str]:
        words = [card.word for card in _candidates(target, pool)]
        rng.shuffle(words)
        return words[:count]


def spelling_variants(word: str) -> list[str]:
    """
    Deterministic near-miss spellings of ``word``.

    Adjacent-letter swaps first, then single dropped letters, then doubled
    letters. The word itself and blank strings are never returned.
    """
    variants: list[str] = []
    for i in range(len(word) - 1):
        variants.append(word[:i] + word[i + 1] + word[i] + word[i + 2 :])
    for i in range(len(word)):
        variants.append(word[:i] + word[i + 1 :])
    for i in range(len(word)):
        variants.append(word[: i + 1] + word[i] + word[i + 1 :])

    seen: set[str] = {word}
    unique: list[str] = []
    for variant in variants:
        if variant.strip() and variant not in seen:
            seen.add(variant)
            unique.append(variant)
    return unique


class SmartDistractorGenerator:
    """Composite generator chaining the strategies in priority order."""

    def __init__(self, strategies: Sequence[DistractorStrategy] | None = None) -> None:
        self.strategies: list[DistractorStrategy] = list(
            strategies
            or (
                LevenshteinDistractorStrategy(),
                SemanticDistractorStrategy(),
                RandomDistractorStrategy(),
            )
        )

    def get_distractors(
        self, target: Card, pool: Sequence[Card], rng: random.Random, count: int = 3
    ) -> list[str]:
        """
        Return exactly ``count`` unique words different from ``target.word``.

        Pool words are preferred; synthetic words only fill what the pool
        could not.
        """
        distractors: list[str] = []
        for strategy in self.strategies:
            needed = count - len(distractors)
            if needed <= 0:
                break
            remaining = [card for card in pool if card.word not in distractors]
            for word in strategy.generate(target, remaining, needed, rng):
                if word != target.word and word not in distractors:
                    distractors.append(word)

        if len(distractors) < count:
            leftovers = list(
                dict.fromkeys(
                    card.word
                    for card in _candidates(target, pool)
                    if card.word not in distractors
                )
            )
            rng.shuffle(leftovers)
            distractors.extend(leftovers[: count - len(distractors)])

        if len(distractors) < count:
            self._pad(target.word, distractors, count)
        return distractors[:count]

    @staticmethod
    def _pad(word: str, distractors: list[str], count: int) -> None:
        for variant in spelling_variants(word):
            if len(distractors) >= count:
                return
            if variant not in distractors:
                distractors.append(variant)

        suffix = 1
        while len(distractors) < count:
            candidate = f"{word}{suffix}"
            if candidate not in distractors:
                distractors.append(candidate)
            suffix += 1
