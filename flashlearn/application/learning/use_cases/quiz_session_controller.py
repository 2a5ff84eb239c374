"""Use case driving an adaptive quiz session."""

import asyncio
import random
from collections.abc import Callable, Sequence
from functools import partial

import structlog

from flashlearn.application.learning.protocols.card_source import CardSourceProtocol
from flashlearn.application.learning.protocols.timer_scheduler import (
    TimerHandle,
    TimerSchedulerProtocol,
)
from flashlearn.application.learning.services.proficiency_model import ProficiencyModel
from flashlearn.application.learning.use_cases.dtos.quiz_dtos import QuizConfig, QuizSummary
from flashlearn.application.learning.use_cases.exceptions import CardLoadError, EmptyCardSetError
from flashlearn.domain.common.domain_event import DomainEvent
from flashlearn.domain.common.value_objects import CardId, LearnerId, TopicId
from flashlearn.domain.learning.entities.card import Card
from flashlearn.domain.learning.entities.quiz_session import QuizPhase, QuizResult, QuizSession
from flashlearn.domain.learning.events import ProficiencyWriteFailed
from flashlearn.domain.learning.services.answer_validator import AnswerValidator
from flashlearn.domain.learning.services.question_generator import QuestionGenerator
from flashlearn.domain.learning.value_objects.questions import Question, QuizMode

logger = structlog.get_logger(__name__)

EventListener = Callable[[DomainEvent], None]

DEFAULT_TIME_LIMIT_SECONDS = 60.0
DEFAULT_FEEDBACK_DELAY_SECONDS = 1.5


class QuizSessionController:
    """
    Question loop of a quiz: RUNNING(i) -> FEEDBACK(i) -> RUNNING(i+1) ... COMPLETED.

    Every operation and timer callback runs under one lock. Each question
    gets a new token; a timer whose token is no longer current does
    nothing, so a countdown that fires after an answer never records a
    second one. Score writes run in the background, one task per card,
    a newer write cancelling the older one.
    """

    def __init__(
        self,
        learner_id: LearnerId,
        proficiency_model: ProficiencyModel,
        question_generator: QuestionGenerator,
        answer_validator: AnswerValidator,
        timer_scheduler: TimerSchedulerProtocol,
        rng: random.Random,
        card_source: CardSourceProtocol | None = None,
        time_limit_seconds: float = DEFAULT_TIME_LIMIT_SECONDS,
        feedback_delay_seconds: float = DEFAULT_FEEDBACK_DELAY_SECONDS,
        sprint_size: int | None = None,
        on_event: EventListener | None = None,
    ) -> None:
        self.learner_id = learner_id
        self.proficiency_model = proficiency_model
        self.question_generator = question_generator
        self.answer_validator = answer_validator
        self.timer_scheduler = timer_scheduler
        self.rng = rng
        self.card_source = card_source
        self.time_limit_seconds = time_limit_seconds
        self.feedback_delay_seconds = feedback_delay_seconds
        self.sprint_size = sprint_size
        self.on_event = on_event

        self._session: QuizSession | None = None
        self._mode = QuizMode.SPRINT
        self._lock = asyncio.Lock()
        self._token = 0
        self._countdown: TimerHandle | None = None
        self._feedback_timer: TimerHandle | None = None
        self._known_scores: dict[CardId, int] = {}
        self._write_tasks: dict[CardId, asyncio.Task[None]] = {}

    @property
    def session(self) -> QuizSession | None:
        return self._session

    @property
    def phase(self) -> QuizPhase:
        if self._session is None:
            return QuizPhase.LOADING
        return self._session.phase

    @property
    def mode(self) -> QuizMode:
        return self._mode

    @property
    def current_question(self) -> Question | None:
        return self._session.current_question if self._session else None

    @property
    def current_index(self) -> int:
        return self._session.current_index if self._session else 0

    @property
    def current_score(self) -> int:
        return self._session.current_score if self._session else 0

    @property
    def is_answer_correct(self) -> bool | None:
        return self._session.is_answer_correct if self._session else None

    @property
    def current_streak(self) -> int:
        return self._session.current_streak if self._session else 0

    def remaining_time(self) -> float:
        """Seconds left on the countdown of the current question."""
        if self._countdown is None or self.phase is not QuizPhase.RUNNING:
            return 0.0
        return self._countdown.remaining()

    def known_score(self, card_id: CardId) -> int | None:
        """Score computed during this controller's lifetime, if any."""
        return self._known_scores.get(card_id)

    async def load_topic(self, topic_id: TopicId, config: QuizConfig | None = None) -> QuizSession:
        """
        Load the cards of a topic and start a quiz over them.

        Raises:
            CardLoadError: If the card source fails
            EmptyCardSetError: If the topic has no cards
        """
        if self.card_source is None:
            raise CardLoadError(topic_id, "no card source configured")
        try:
            cards = await self.card_source.get_cards_for_topic(topic_id)
        except Exception as e:
            logger.error("card_load_failed", topic_id=str(topic_id), error=str(e))
            raise CardLoadError(topic_id, str(e)) from e
        return await self.start(cards, config)

    async def start(self, cards: Sequence[Card], config: QuizConfig | None = None) -> QuizSession:
        """
        Fix the play order and present the first question.

        Raises:
            EmptyCardSetError: If ``cards`` is empty
        """
        if not cards:
            raise EmptyCardSetError()
        config = config or QuizConfig()

        async with self._lock:
            self._cancel_timers()
            self._mode = config.mode

            selected = await self._select_cards(cards, self._question_limit(config))
            order = list(selected)
            self.rng.shuffle(order)

            session = QuizSession.start(self.learner_id, order, pool=cards)
            self._session = session
            logger.info(
                "quiz_started",
                session_id=str(session.id),
                learner_id=str(self.learner_id),
                mode=config.mode.value,
                question_count=session.total_questions,
            )
            await self._enter_running()
            return session

    async def submit(self, raw_input: str) -> QuizResult | None:
        """
        Answer the current question.

        Returns:
            The recorded result, or None when no question is awaiting an
            answer (already answered, timed out, finished or exited)
        """
        async with self._lock:
            return self._answer(raw_input, timed_out=False)

    async def continue_to_next(self) -> bool:
        """
        Skip the rest of the feedback delay.

        Returns:
            True if the quiz moved on, False when it was not showing feedback
        """
        async with self._lock:
            if self._session is None or self._session.phase is not QuizPhase.FEEDBACK:
                return False
            await self._advance()
            return True

    async def exit(self) -> None:
        async with self._lock:
            self._cancel_timers()
            if self._session is None:
                return
            self._session.exit()
            self._dispatch_events()

    async def restart(self) -> QuizSession | None:
        """Replay the same play order from the first question."""
        async with self._lock:
            if self._session is None:
                return None
            self._cancel_timers()
            self._session.restart()
            logger.info("quiz_restarted", session_id=str(self._session.id))
            await self._enter_running()
            return self._session

    def summary(self) -> QuizSummary:
        if self._session is None:
            return QuizSummary(total_questions=0, correct_count=0, best_streak=0, results=[])
        return QuizSummary(
            total_questions=self._session.total_questions,
            correct_count=self._session.correct_count,
            best_streak=self._session.best_streak,
            results=list(self._session.results),
        )

    async def wait_for_pending_writes(self) -> None:
        """Wait until every scheduled score write has settled."""
        while True:
            pending = [task for task in self._write_tasks.values() if not task.done()]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)

    def _question_limit(self, config: QuizConfig) -> int | None:
        if config.question_count is not None:
            return config.question_count
        if config.mode is QuizMode.SPRINT:
            return self.sprint_size
        return None

    async def _select_cards(
        self, cards: Sequence[Card], question_count: int | None
    ) -> list[Card]:
        if question_count is None or len(cards) <= question_count:
            return list(cards)
        scores = {card.id: await self._score_for(card) for card in cards}
        weakest = sorted(cards, key=lambda card: scores[card.id])
        return weakest[:question_count]

    async def _score_for(self, card: Card) -> int:
        known = self._known_scores.get(card.id)
        if known is not None:
            return known
        return await self.proficiency_model.get(card.id, self.learner_id)

    async def _enter_running(self) -> None:
        session = self._session
        assert session is not None
        card = session.current_card
        assert card is not None

        score = await self._score_for(card)
        if session.phase is not QuizPhase.LOADING:
            return
        question = self.question_generator.generate(card, score, session.pool, self._mode)
        session.present(question, score)

        self._token += 1
        self._countdown = self.timer_scheduler.schedule(
            self.time_limit_seconds, partial(self._on_timeout, self._token)
        )
        logger.debug(
            "quiz_question_presented",
            session_id=str(session.id),
            index=session.current_index,
            card_id=str(card.id),
            variant=question.variant.value,
            score=score,
        )

    def _answer(self, raw_input: str, timed_out: bool) -> QuizResult | None:
        session = self._session
        if (
            session is None
            or session.phase is not QuizPhase.RUNNING
            or session.current_question is None
        ):
            logger.debug("quiz_answer_ignored", phase=self.phase.value)
            return None

        if self._countdown is not None:
            self._countdown.cancel()
            self._countdown = None

        question = session.current_question
        is_correct = self.answer_validator.validate(question, raw_input)
        new_score = self.proficiency_model.next_score(session.current_score, is_correct)
        card_id = question.card.id
        self._known_scores[card_id] = new_score
        self._schedule_write(card_id, new_score)

        result = session.answer(raw_input, is_correct, new_score, timed_out=timed_out)
        logger.info(
            "quiz_answer_recorded",
            session_id=str(session.id),
            card_id=str(card_id),
            is_correct=is_correct,
            timed_out=timed_out,
            score=new_score,
        )
        self._feedback_timer = self.timer_scheduler.schedule(
            self.feedback_delay_seconds, partial(self._on_feedback_elapsed, self._token)
        )
        return result

    async def _advance(self) -> None:
        session = self._session
        assert session is not None
        if self._feedback_timer is not None:
            self._feedback_timer.cancel()
            self._feedback_timer = None

        has_next = session.advance()
        self._dispatch_events()
        if has_next:
            await self._enter_running()

    async def _on_timeout(self, token: int) -> None:
        async with self._lock:
            if token != self._token:
                return
            if self._session is None or self._session.phase is not QuizPhase.RUNNING:
                return
            logger.info("quiz_question_timed_out", session_id=str(self._session.id))
            self._answer("", timed_out=True)

    async def _on_feedback_elapsed(self, token: int) -> None:
        async with self._lock:
            if token != self._token:
                return
            if self._session is None or self._session.phase is not QuizPhase.FEEDBACK:
                return
            await self._advance()

    def _schedule_write(self, card_id: CardId, score: int) -> None:
        previous = self._write_tasks.get(card_id)
        if previous is not None and not previous.done():
            previous.cancel()

        task = asyncio.get_running_loop().create_task(self._write(card_id, score))
        self._write_tasks[card_id] = task
        task.add_done_callback(lambda done, key=card_id: self._forget_write(key, done))

    def _forget_write(self, card_id: CardId, task: asyncio.Task[None]) -> None:
        if self._write_tasks.get(card_id) is task:
            del self._write_tasks[card_id]

    async def _write(self, card_id: CardId, score: int) -> None:
        persisted = await self.proficiency_model.persist(card_id, self.learner_id, score)
        if not persisted and self.on_event is not None:
            self.on_event(
                ProficiencyWriteFailed(learner_id=self.learner_id, card_id=card_id, score=score)
            )

    def _cancel_timers(self) -> None:
        for timer in (self._countdown, self._feedback_timer):
            if timer is not None:
                timer.cancel()
        self._countdown = None
        self._feedback_timer = None
        self._token += 1

    def _dispatch_events(self) -> None:
        if self._session is None:
            return
        for event in self._session.collect_events():
            logger.info("domain_event_dispatched", **event.to_dict())
            if self.on_event is not None:
                self.on_event(event)
