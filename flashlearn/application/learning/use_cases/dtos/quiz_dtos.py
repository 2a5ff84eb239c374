"""DTOs for quiz use cases."""

from dataclasses import dataclass

from flashlearn.domain.learning.entities.quiz_session import QuizResult
from flashlearn.domain.learning.value_objects.questions import QuizMode
from flashlearn.exceptions import ValidationError


@dataclass(frozen=True)
class QuizConfig:
    """
    Options fixed when a quiz starts.

    When ``question_count`` is set and the card set is larger, only the
    weakest cards (lowest score first) are kept.
    """

    mode: QuizMode = QuizMode.SPRINT
    question_count: int | None = None

    def __post_init__(self) -> None:
        if self.question_count is not None and self.question_count < 1:
            raise ValidationError(
                f"question_count must be at least 1, got {self.question_count}"
            )


@dataclass
class QuizSummary:
    """Result screen data of a finished quiz."""

    total_questions: int
    correct_count: int
    best_streak: int
    results: list[QuizResult]

    @property
    def score_percentage(self) -> int:
        if self.total_questions == 0:
            return 0
        return round(self.correct_count * 100 / self.total_questions)
