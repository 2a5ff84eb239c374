"""
QuizSession aggregate root.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from flashlearn.domain.common.aggregate_root import AggregateRoot
from flashlearn.domain.common.exceptions import ValidationError
from flashlearn.domain.common.value_objects import LearnerId, SessionId
from flashlearn.domain.learning.entities.card import Card
from flashlearn.domain.learning.events import QuizCompleted, QuizExited
from flashlearn.domain.learning.exceptions import SessionNotRunningError
from flashlearn.domain.learning.value_objects.questions import Question, QuestionVariant


class QuizPhase(str, Enum):
    """Lifecycle of a quiz: LOADING -> RUNNING -> FEEDBACK -> ... -> COMPLETED."""

    LOADING = "loading"
    RUNNING = "running"
    FEEDBACK = "feedback"
    COMPLETED = "completed"
    EXITED = "exited"


@dataclass(frozen=True)
class QuizResult:
    """One answered question, kept for the summary view."""

    card: Card
    variant: QuestionVariant
    answer: str
    is_correct: bool
    score: int
    timed_out: bool = False


@dataclass(eq=False)
class QuizSession(AggregateRoot[SessionId]):
    """
    Sequential adaptive quiz over a fixed play order.

    Business Rules:
    - The play order is fixed when the session starts
    - Each question accepts exactly one answer
    - A correct answer extends the streak, a wrong one resets it to 0
    - The session completes after the feedback of the last question
    """

    id: SessionId
    learner_id: LearnerId
    cards: tuple[Card, ...]
    pool: tuple[Card, ...]
    phase: QuizPhase = QuizPhase.LOADING
    current_index: int = 0
    current_question: Question | None = None
    current_score: int = 0
    is_answer_correct: bool | None = None
    current_streak: int = 0
    best_streak: int = 0
    results: list[QuizResult] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.cards:
            raise ValidationError("A quiz needs at least one card", field="cards")

    @property
    def total_questions(self) -> int:
        return len(self.cards)

    @property
    def current_card(self) -> Card | None:
        if self.current_index >= len(self.cards):
            return None
        return self.cards[self.current_index]

    @property
    def correct_count(self) -> int:
        return sum(1 for result in self.results if result.is_correct)

    @property
    def is_finished(self) -> bool:
        return self.phase in (QuizPhase.COMPLETED, QuizPhase.EXITED)

    def present(self, question: Question, score: int) -> None:
        """Enter RUNNING for the current index with a freshly generated question."""
        if self.phase is not QuizPhase.LOADING:
            raise SessionNotRunningError("present a question", self.phase.value)
        self.current_question = question
        self.current_score = score
        self.is_answer_correct = None
        self.phase = QuizPhase.RUNNING

    def answer(
        self, answer: str, is_correct: bool, new_score: int, timed_out: bool = False
    ) -> QuizResult:
        """
        Record the single answer of the current question and enter FEEDBACK.

        Raises:
            SessionNotRunningError: If no question is awaiting an answer
        """
        if self.phase is not QuizPhase.RUNNING or self.current_question is None:
            raise SessionNotRunningError("answer", self.phase.value)

        self.is_answer_correct = is_correct
        self.current_score = new_score
        self.current_streak = self.current_streak + 1 if is_correct else 0
        self.best_streak = max(self.best_streak, self.current_streak)

        result = QuizResult(
            card=self.current_question.card,
            variant=self.current_question.variant,
            answer=answer,
            is_correct=is_correct,
            score=new_score,
            timed_out=timed_out,
        )
        self.results.append(result)
        self.phase = QuizPhase.FEEDBACK
        return result

    def advance(self) -> bool:
        """
        Leave FEEDBACK for the next question.

        Returns:
            True if another question follows, False if the quiz completed
        """
        if self.phase is not QuizPhase.FEEDBACK:
            raise SessionNotRunningError("advance", self.phase.value)

        self.current_question = None
        self.is_answer_correct = None
        if self.current_index + 1 >= len(self.cards):
            self.current_index = len(self.cards)
            self.phase = QuizPhase.COMPLETED
            self._record_event(
                QuizCompleted(
                    session_id=self.id,
                    learner_id=self.learner_id,
                    total_questions=self.total_questions,
                    correct_count=self.correct_count,
                )
            )
            return False

        self.current_index += 1
        self.phase = QuizPhase.LOADING
        return True

    def exit(self) -> None:
        if self.is_finished:
            return
        self.phase = QuizPhase.EXITED
        self._record_event(
            QuizExited(
                session_id=self.id,
                learner_id=self.learner_id,
                answered_count=len(self.results),
            )
        )

    def restart(self) -> None:
        """Replay the same play order from the first card."""
        self.current_index = 0
        self.current_question = None
        self.current_score = 0
        self.is_answer_correct = None
        self.current_streak = 0
        self.best_streak = 0
        self.results = []
        self.phase = QuizPhase.LOADING

    @classmethod
    def start(
        cls, learner_id: LearnerId, cards: Sequence[Card], pool: Sequence[Card] | None = None
    ) -> "QuizSession":
        """Open a quiz over ``cards`` in the given (already shuffled) order."""
        return cls(
            id=SessionId.generate(),
            learner_id=learner_id,
            cards=tuple(cards),
            pool=tuple(pool if pool is not None else cards),
        )
