"""Tests for QuizSessionController use case."""

from collections.abc import Callable

import pytest

from flashlearn.application.learning.use_cases.dtos import QuizConfig
from flashlearn.application.learning.use_cases.exceptions import CardLoadError, EmptyCardSetError
from flashlearn.application.learning.use_cases.quiz_session_controller import (
    QuizSessionController,
)
from flashlearn.domain.common.domain_event import DomainEvent
from flashlearn.domain.common.value_objects import TopicId
from flashlearn.domain.learning.entities.card import Card
from flashlearn.domain.learning.entities.quiz_session import QuizPhase
from flashlearn.domain.learning.events import ProficiencyWriteFailed, QuizCompleted, QuizExited
from flashlearn.domain.learning.value_objects.questions import (
    ContextualGapFill,
    Dictation,
    QuizMode,
    SentenceBuilder,
)
from flashlearn.exceptions import ValidationError
from tests.conftest import (
    LEARNER,
    InMemoryCardSource,
    InMemoryProficiencyStore,
    ManualTimerScheduler,
    make_card,
)

ControllerFactory = Callable[..., QuizSessionController]


def _expected(controller: QuizSessionController) -> str:
    question = controller.current_question
    assert question is not None
    return question.expected_answer


class TestQuizStart:
    @pytest.mark.asyncio
    async def test_empty_card_set_is_rejected(self, make_quiz_controller: ControllerFactory) -> None:
        controller = make_quiz_controller()

        with pytest.raises(EmptyCardSetError):
            await controller.start([])

        assert controller.session is None

    @pytest.mark.asyncio
    async def test_start_presents_first_question(
        self,
        make_quiz_controller: ControllerFactory,
        vocabulary: list[Card],
        scheduler: ManualTimerScheduler,
    ) -> None:
        controller = make_quiz_controller()

        session = await controller.start(vocabulary)

        assert controller.phase is QuizPhase.RUNNING
        assert controller.current_index == 0
        assert controller.is_answer_correct is None
        assert sorted(card.word for card in session.cards) == sorted(c.word for c in vocabulary)
        assert controller.current_question is not None
        assert controller.current_question.card == session.cards[0]
        assert controller.remaining_time() == 60.0
        await scheduler.advance(10)
        assert controller.remaining_time() == 50.0

    @pytest.mark.asyncio
    async def test_stored_score_drives_first_question(
        self, make_quiz_controller: ControllerFactory, store: InMemoryProficiencyStore
    ) -> None:
        card = make_card("m", "harbor")
        store.scores[(card.id, LEARNER)] = 6
        controller = make_quiz_controller()

        await controller.start([card])

        assert controller.current_score == 6
        assert controller.current_question is not None
        assert controller.current_question.expected_answer == "harbor"

    @pytest.mark.asyncio
    async def test_read_failure_uses_zero(
        self, make_quiz_controller: ControllerFactory, store: InMemoryProficiencyStore
    ) -> None:
        store.fail_reads = True
        controller = make_quiz_controller()

        await controller.start([make_card("m", "harbor")])

        assert controller.phase is QuizPhase.RUNNING
        assert controller.current_score == 0

    @pytest.mark.asyncio
    async def test_load_topic_failure_raises(self, make_quiz_controller: ControllerFactory) -> None:
        source = InMemoryCardSource()
        source.fail = True
        controller = make_quiz_controller(card_source=source)

        with pytest.raises(CardLoadError):
            await controller.load_topic(TopicId("t"))

        assert controller.session is None

    @pytest.mark.asyncio
    async def test_load_topic_starts_quiz(
        self, make_quiz_controller: ControllerFactory, vocabulary: list[Card]
    ) -> None:
        topic = TopicId("fruit")
        controller = make_quiz_controller(card_source=InMemoryCardSource({topic: vocabulary}))

        session = await controller.load_topic(topic)

        assert session.total_questions == len(vocabulary)

    @pytest.mark.asyncio
    async def test_question_count_keeps_weakest_cards(
        self,
        make_quiz_controller: ControllerFactory,
        store: InMemoryProficiencyStore,
        vocabulary: list[Card],
    ) -> None:
        for score, card in zip((5, 0, 4, 1, 3), vocabulary, strict=True):
            store.scores[(card.id, LEARNER)] = score
        controller = make_quiz_controller()

        session = await controller.start(vocabulary, QuizConfig(question_count=2))

        assert sorted(card.word for card in session.cards) == ["apply", "river"]
        assert len(session.pool) == len(vocabulary)

    @pytest.mark.parametrize("question_count", [0, -1])
    def test_question_count_below_one_is_rejected(self, question_count: int) -> None:
        with pytest.raises(ValidationError):
            QuizConfig(question_count=question_count)

    @pytest.mark.asyncio
    async def test_sprint_size_limits_default_quiz(
        self, make_quiz_controller: ControllerFactory, vocabulary: list[Card]
    ) -> None:
        controller = make_quiz_controller(sprint_size=3)

        sprint = await controller.start(vocabulary)
        assert sprint.total_questions == 3

        drill = await controller.start(vocabulary, QuizConfig(mode=QuizMode.VSTEP_DRILL))
        assert drill.total_questions == len(vocabulary)

    @pytest.mark.asyncio
    async def test_drill_mode_uses_drill_variants(
        self, make_quiz_controller: ControllerFactory, vocabulary: list[Card]
    ) -> None:
        controller = make_quiz_controller()

        await controller.start(vocabulary, QuizConfig(mode=QuizMode.VSTEP_DRILL))

        assert controller.mode is QuizMode.VSTEP_DRILL
        assert isinstance(controller.current_question, ContextualGapFill | SentenceBuilder | Dictation)


class TestQuizAnswering:
    @pytest.mark.asyncio
    async def test_timeout_on_single_card_quiz(
        self,
        make_quiz_controller: ControllerFactory,
        store: InMemoryProficiencyStore,
        scheduler: ManualTimerScheduler,
        events: list[DomainEvent],
    ) -> None:
        card = make_card("only", "lantern")
        store.scores[(card.id, LEARNER)] = 2
        controller = make_quiz_controller()
        await controller.start([card])

        await scheduler.advance(60)

        assert controller.phase is QuizPhase.FEEDBACK
        assert controller.is_answer_correct is False
        assert controller.current_score == 0
        assert controller.current_streak == 0
        assert controller.summary().results[0].timed_out is True

        await scheduler.advance(1.5)
        await controller.wait_for_pending_writes()

        assert controller.phase is QuizPhase.COMPLETED
        assert store.scores[(card.id, LEARNER)] == 0
        assert isinstance(events[-1], QuizCompleted)

    @pytest.mark.asyncio
    async def test_correct_answer_increments_score_and_streak(
        self,
        make_quiz_controller: ControllerFactory,
        store: InMemoryProficiencyStore,
        vocabulary: list[Card],
    ) -> None:
        controller = make_quiz_controller()
        await controller.start(vocabulary)
        card = controller.current_question.card  # type: ignore[union-attr]

        result = await controller.submit(_expected(controller))
        await controller.wait_for_pending_writes()

        assert result is not None
        assert result.is_correct is True
        assert controller.is_answer_correct is True
        assert controller.current_streak == 1
        assert controller.current_score == 1
        assert store.scores[(card.id, LEARNER)] == 1

    @pytest.mark.asyncio
    async def test_second_submit_is_ignored(
        self, make_quiz_controller: ControllerFactory, vocabulary: list[Card]
    ) -> None:
        controller = make_quiz_controller()
        await controller.start(vocabulary)
        expected = _expected(controller)

        first = await controller.submit("definitely wrong")
        second = await controller.submit(expected)

        assert first is not None
        assert second is None
        assert controller.is_answer_correct is False
        assert len(controller.summary().results) == 1

    @pytest.mark.asyncio
    async def test_stale_countdown_never_answers_twice(
        self,
        make_quiz_controller: ControllerFactory,
        scheduler: ManualTimerScheduler,
        vocabulary: list[Card],
    ) -> None:
        controller = make_quiz_controller()
        await controller.start(vocabulary[:2])
        first_countdown = scheduler.timers[0]

        await controller.submit(_expected(controller))
        await first_countdown.callback()
        assert controller.phase is QuizPhase.FEEDBACK

        await controller.continue_to_next()
        await first_countdown.callback()

        assert controller.phase is QuizPhase.RUNNING
        assert controller.current_index == 1
        assert [result.is_correct for result in controller.summary().results] == [True]

    @pytest.mark.asyncio
    async def test_feedback_delay_advances(
        self,
        make_quiz_controller: ControllerFactory,
        scheduler: ManualTimerScheduler,
        vocabulary: list[Card],
    ) -> None:
        controller = make_quiz_controller()
        await controller.start(vocabulary[:2])
        await controller.submit(_expected(controller))

        await scheduler.advance(1.0)
        assert controller.phase is QuizPhase.FEEDBACK

        await scheduler.advance(0.5)
        assert controller.phase is QuizPhase.RUNNING
        assert controller.current_index == 1
        assert controller.is_answer_correct is None

    @pytest.mark.asyncio
    async def test_continue_outside_feedback_does_nothing(
        self, make_quiz_controller: ControllerFactory, vocabulary: list[Card]
    ) -> None:
        controller = make_quiz_controller()
        await controller.start(vocabulary)

        assert await controller.continue_to_next() is False
        assert controller.current_index == 0

    @pytest.mark.asyncio
    async def test_write_failure_keeps_session_going(
        self,
        make_quiz_controller: ControllerFactory,
        store: InMemoryProficiencyStore,
        events: list[DomainEvent],
        vocabulary: list[Card],
    ) -> None:
        store.fail_writes = True
        controller = make_quiz_controller()
        await controller.start(vocabulary[:2])

        await controller.submit(_expected(controller))
        await controller.wait_for_pending_writes()

        assert controller.current_score == 1
        assert any(isinstance(event, ProficiencyWriteFailed) for event in events)
        assert await controller.continue_to_next() is True
        assert controller.phase is QuizPhase.RUNNING

    @pytest.mark.asyncio
    async def test_latest_answer_for_a_card_wins(
        self,
        make_quiz_controller: ControllerFactory,
        store: InMemoryProficiencyStore,
        vocabulary: list[Card],
    ) -> None:
        card = vocabulary[0]
        store.hold()
        controller = make_quiz_controller()
        await controller.start([card])

        await controller.submit(_expected(controller))
        await controller.continue_to_next()
        await controller.restart()
        await controller.submit(_expected(controller))

        store.release()
        await controller.wait_for_pending_writes()

        assert store.writes == [(card.id, 2)]
        assert store.scores[(card.id, LEARNER)] == 2

    @pytest.mark.asyncio
    async def test_streak_resets_on_wrong_answer(
        self, make_quiz_controller: ControllerFactory, vocabulary: list[Card]
    ) -> None:
        controller = make_quiz_controller()
        await controller.start(vocabulary[:3])

        for answer_correctly in (True, True, False):
            await controller.submit(_expected(controller) if answer_correctly else "nope")
            await controller.continue_to_next()

        summary = controller.summary()
        assert controller.phase is QuizPhase.COMPLETED
        assert summary.correct_count == 2
        assert summary.best_streak == 2
        assert summary.score_percentage == 67
        assert controller.current_streak == 0


class TestQuizLifecycle:
    @pytest.mark.asyncio
    async def test_exit_cancels_timers(
        self,
        make_quiz_controller: ControllerFactory,
        scheduler: ManualTimerScheduler,
        events: list[DomainEvent],
        vocabulary: list[Card],
    ) -> None:
        controller = make_quiz_controller()
        await controller.start(vocabulary)

        await controller.exit()
        await scheduler.advance(120)

        assert controller.phase is QuizPhase.EXITED
        assert scheduler.active == []
        assert isinstance(events[-1], QuizExited)
        assert await controller.submit("apple") is None

    @pytest.mark.asyncio
    async def test_exit_during_feedback_keeps_the_recorded_score(
        self,
        make_quiz_controller: ControllerFactory,
        store: InMemoryProficiencyStore,
        vocabulary: list[Card],
    ) -> None:
        controller = make_quiz_controller()
        await controller.start(vocabulary)
        card = controller.current_question.card  # type: ignore[union-attr]
        await controller.submit(_expected(controller))

        await controller.exit()
        await controller.wait_for_pending_writes()

        assert store.scores[(card.id, LEARNER)] == 1

    @pytest.mark.asyncio
    async def test_restart_replays_order_with_known_scores(
        self, make_quiz_controller: ControllerFactory, vocabulary: list[Card]
    ) -> None:
        controller = make_quiz_controller()
        session = await controller.start(vocabulary[:2])
        order = list(session.cards)
        for _ in order:
            await controller.submit(_expected(controller))
            await controller.continue_to_next()
        assert controller.phase is QuizPhase.COMPLETED

        restarted = await controller.restart()

        assert restarted is session
        assert list(restarted.cards) == order
        assert controller.phase is QuizPhase.RUNNING
        assert controller.current_index == 0
        assert controller.current_score == 1
        assert controller.summary().results == []

    @pytest.mark.asyncio
    async def test_restart_without_session_returns_none(
        self, make_quiz_controller: ControllerFactory
    ) -> None:
        assert await make_quiz_controller().restart() is None
