"""Domain service for the proficiency scoring rule."""

from flashlearn.domain.common.exceptions import ValidationError


class ProficiencyRule:
    """
    Stateless scoring rule keyed by (card, learner).

    A correct answer adds one point. A wrong answer resets the score to 0
    regardless of how high it was: one miss fully resets progress on that
    card.
    """

    @staticmethod
    def next_score(current: int, was_correct: bool) -> int:
        """
        Compute the score after one answer.

        Args:
            current: Score before the answer (must be >= 0)
            was_correct: Whether the answer was judged correct

        Returns:
            The new score

        Raises:
            ValidationError: If ``current`` is negative
        """
        if current < 0:
            raise ValidationError(
                "Proficiency score cannot be negative", field="score", value=current
            )
        if was_correct:
            return current + 1
        return 0
