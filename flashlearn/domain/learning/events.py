"""Domain events raised by study and quiz sessions."""

from dataclasses import dataclass

from flashlearn.domain.common.domain_event import DomainEvent
from flashlearn.domain.common.value_objects import CardId, LearnerId, SessionId


@dataclass(frozen=True, kw_only=True)
class StudySessionCompleted(DomainEvent):
    """The retry queue ran dry: every card was remembered."""

    session_id: SessionId
    learner_id: LearnerId
    completed_count: int
    mastered_count: int


@dataclass(frozen=True, kw_only=True)
class StudySessionExited(DomainEvent):
    """The learner left the study session."""

    session_id: SessionId
    learner_id: LearnerId
    remaining_count: int


@dataclass(frozen=True, kw_only=True)
class QuizCompleted(DomainEvent):
    """The last quiz question was answered and its feedback shown."""

    session_id: SessionId
    learner_id: LearnerId
    total_questions: int
    correct_count: int


@dataclass(frozen=True, kw_only=True)
class QuizExited(DomainEvent):
    """The learner left the quiz before it completed."""

    session_id: SessionId
    learner_id: LearnerId
    answered_count: int


@dataclass(frozen=True, kw_only=True)
class ProficiencyWriteFailed(DomainEvent):
    """A new score could not be persisted; the session kept the value in memory."""

    learner_id: LearnerId
    card_id: CardId
    score: int
