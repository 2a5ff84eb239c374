"""Pytest configuration and fixtures."""

import asyncio
import random
from collections.abc import Callable, Generator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from flashlearn import models  # noqa: F401
from flashlearn.application.learning.protocols.timer_scheduler import TimerCallback
from flashlearn.application.learning.services.proficiency_model import ProficiencyModel
from flashlearn.application.learning.use_cases.quiz_session_controller import (
    QuizSessionController,
)
from flashlearn.database import Base
from flashlearn.domain.common.domain_event import DomainEvent
from flashlearn.domain.common.value_objects import CardId, LearnerId, TopicId
from flashlearn.domain.learning.entities.card import Card, CardEnrichment
from flashlearn.domain.learning.entities.learner_streak import LearnerStreak
from flashlearn.domain.learning.services.answer_validator import AnswerValidator
from flashlearn.domain.learning.services.question_generator import QuestionGenerator

# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite:///:memory:"

# Create test engine
test_engine = create_engine(
    TEST_DATABASE_URL, connect_args={"check_same_thread": False}, poolclass=StaticPool
)

# Create test session factory
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

LEARNER = LearnerId("learner-1")


def make_card(
    id: str,
    word: str,
    definition: str = "",
    example_sentence: str = "",
    part_of_speech: str = "",
    pronunciation_ipa: str = "/ipa/",
    image_url: str | None = "https://img.example/card.png",
    topic_id: str | None = None,
) -> Card:
    return Card.create(
        id=id,
        word=word,
        definition=definition or f"meaning of {word}",
        example_sentence=example_sentence,
        pronunciation_ipa=pronunciation_ipa,
        part_of_speech=part_of_speech,
        image_url=image_url,
        topic_id=topic_id,
    )


class InMemoryProficiencyStore:
    """
    Proficiency store keeping scores in a dict, with switchable failures.

    Writes can be held back with ``hold`` until ``release`` is called.
    """

    def __init__(self) -> None:
        self.scores: dict[tuple[CardId, LearnerId], int] = {}
        self.writes: list[tuple[CardId, int]] = []
        self.fail_reads = False
        self.fail_writes = False
        self.reject_writes = False
        self.gate: asyncio.Event | None = None

    def hold(self) -> None:
        self.gate = asyncio.Event()

    def release(self) -> None:
        if self.gate is not None:
            self.gate.set()

    async def get(self, card_id: CardId, learner_id: LearnerId) -> int | None:
        if self.fail_reads:
            raise ConnectionError("store offline")
        return self.scores.get((card_id, learner_id))

    async def set(self, card_id: CardId, learner_id: LearnerId, score: int) -> bool:
        if self.gate is not None:
            await self.gate.wait()
        if self.fail_writes:
            raise ConnectionError("store offline")
        if self.reject_writes:
            return False
        self.scores[(card_id, learner_id)] = score
        self.writes.append((card_id, score))
        return True


class InMemoryCardSource:
    def __init__(self, topics: dict[TopicId, list[Card]] | None = None) -> None:
        self.topics = topics or {}
        self.fail = False

    async def get_cards_for_topic(self, topic_id: TopicId) -> list[Card]:
        if self.fail:
            raise ConnectionError("card source offline")
        return list(self.topics.get(topic_id, []))


class FakeEnrichmentService:
    """
    Enrichment service whose responses can be held back with ``release``.

    Every call is recorded; cards listed in ``failing`` raise.
    """

    def __init__(self, enrichment: CardEnrichment | None = None) -> None:
        self.enrichment = enrichment or CardEnrichment(
            image_url="https://img.example/enriched.png", pronunciation_ipa="/enriched/"
        )
        self.calls: list[CardId] = []
        self.failing: set[CardId] = set()
        self.gate: asyncio.Event | None = None

    def hold(self) -> None:
        self.gate = asyncio.Event()

    def release(self) -> None:
        if self.gate is not None:
            self.gate.set()

    async def fetch_missing_fields(self, card: Card) -> CardEnrichment:
        self.calls.append(card.id)
        if self.gate is not None:
            await self.gate.wait()
        if card.id in self.failing:
            raise ConnectionError("dictionary offline")
        return self.enrichment


class FakeStreakRepository:
    def __init__(self) -> None:
        self.streaks: dict[LearnerId, LearnerStreak] = {}
        self.saved = 0

    def find_by_learner(self, learner_id: LearnerId) -> LearnerStreak | None:
        return self.streaks.get(learner_id)

    def save(self, streak: LearnerStreak) -> LearnerStreak:
        self.saved += 1
        self.streaks[streak.id] = streak
        return streak


class ManualTimer:
    def __init__(
        self, scheduler: "ManualTimerScheduler", deadline: float, callback: TimerCallback, seq: int
    ) -> None:
        self.scheduler = scheduler
        self.deadline = deadline
        self.callback = callback
        self.seq = seq
        self.fired = False
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        if not self.fired:
            self._cancelled = True

    def remaining(self) -> float:
        if self._cancelled or self.fired:
            return 0.0
        return max(0.0, self.deadline - self.scheduler.now)


class ManualTimerScheduler:
    """Timer scheduler driven by the test through ``advance``."""

    def __init__(self) -> None:
        self.now = 0.0
        self.timers: list[ManualTimer] = []

    def schedule(self, delay: float, callback: TimerCallback) -> ManualTimer:
        timer = ManualTimer(self, self.now + delay, callback, len(self.timers))
        self.timers.append(timer)
        return timer

    @property
    def active(self) -> list[ManualTimer]:
        return [timer for timer in self.timers if not timer.cancelled and not timer.fired]

    async def advance(self, seconds: float) -> None:
        """Move the clock forward, firing due timers in deadline order."""
        target = self.now + seconds
        while True:
            due = [timer for timer in self.active if timer.deadline <= target]
            if not due:
                break
            timer = min(due, key=lambda t: (t.deadline, t.seq))
            self.now = timer.deadline
            timer.fired = True
            await timer.callback()
        self.now = target


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    Base.metadata.create_all(bind=test_engine)

    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def store() -> InMemoryProficiencyStore:
    return InMemoryProficiencyStore()


@pytest.fixture
def scheduler() -> ManualTimerScheduler:
    return ManualTimerScheduler()


@pytest.fixture
def events() -> list[DomainEvent]:
    return []


@pytest.fixture
def vocabulary() -> list[Card]:
    return [
        make_card(
            "c1", "apple", example_sentence="She ate an Apple after lunch.", part_of_speech="noun"
        ),
        make_card("c2", "apply", example_sentence="Apply the rule twice.", part_of_speech="verb"),
        make_card(
            "c3", "ample", example_sentence="There was ample time.", part_of_speech="adjective"
        ),
        make_card("c4", "river", example_sentence="The river flooded.", part_of_speech="noun"),
        make_card(
            "c5", "bridge", example_sentence="They crossed the bridge.", part_of_speech="noun"
        ),
    ]


@pytest.fixture
def make_quiz_controller(
    store: InMemoryProficiencyStore,
    scheduler: ManualTimerScheduler,
    rng: random.Random,
    events: list[DomainEvent],
) -> Callable[..., QuizSessionController]:
    def factory(**overrides: object) -> QuizSessionController:
        kwargs: dict[str, object] = {
            "learner_id": LEARNER,
            "proficiency_model": ProficiencyModel(store),
            "question_generator": QuestionGenerator(rng),
            "answer_validator": AnswerValidator(),
            "timer_scheduler": scheduler,
            "rng": rng,
            "time_limit_seconds": 60.0,
            "feedback_delay_seconds": 1.5,
            "on_event": events.append,
        }
        kwargs.update(overrides)
        return QuizSessionController(**kwargs)  # type: ignore[arg-type]

    return factory
