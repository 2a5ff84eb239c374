"""Use case driving a flip-and-judge study session."""

import asyncio
from collections.abc import Callable, Sequence

import structlog

from flashlearn.application.learning.protocols.card_source import CardSourceProtocol
from flashlearn.application.learning.protocols.enrichment_service import (
    EnrichmentServiceProtocol,
)
from flashlearn.application.learning.use_cases.exceptions import CardLoadError
from flashlearn.application.learning.use_cases.update_streak_use_case import (
    UpdateStreakOnSessionCompleteUseCase,
)
from flashlearn.domain.common.domain_event import DomainEvent
from flashlearn.domain.common.value_objects import CardId, LearnerId, TopicId
from flashlearn.domain.learning.entities.card import Card
from flashlearn.domain.learning.entities.learner_streak import StreakResult
from flashlearn.domain.learning.entities.study_queue import QueueSessionState, StudyQueue
from flashlearn.domain.learning.events import StudySessionCompleted

logger = structlog.get_logger(__name__)

EventListener = Callable[[DomainEvent], None]


class StudyQueueController:
    """
    Retry queue over the cards of a topic.

    Queue operations are synchronous. Missing card media is fetched in
    background tasks (one per card) and patched into the queue when it
    arrives; results for cards that already left the queue, or for a
    session that was replaced, are dropped. Without a running event loop
    no fetch is started and the queue works on the cards as loaded.
    """

    def __init__(
        self,
        learner_id: LearnerId,
        card_source: CardSourceProtocol | None = None,
        enrichment_service: EnrichmentServiceProtocol | None = None,
        update_streak_use_case: UpdateStreakOnSessionCompleteUseCase | None = None,
        on_event: EventListener | None = None,
    ) -> None:
        self.learner_id = learner_id
        self.card_source = card_source
        self.enrichment_service = enrichment_service
        self.update_streak_use_case = update_streak_use_case
        self.on_event = on_event
        self.streak_result: StreakResult | None = None
        self._session: StudyQueue | None = None
        self._enrichment_tasks: dict[CardId, asyncio.Task[None]] = {}

    @property
    def session(self) -> StudyQueue | None:
        return self._session

    @property
    def state(self) -> QueueSessionState:
        if self._session is None:
            return QueueSessionState()
        return self._session.state

    @property
    def progress(self) -> float:
        return self.state.progress

    @property
    def progress_text(self) -> str:
        return self.state.progress_text

    @property
    def is_complete(self) -> bool:
        return self.state.is_complete

    def start(self, cards: Sequence[Card]) -> QueueSessionState:
        """Open a new session over ``cards``, keeping their order."""
        self._cancel_enrichment()
        self.streak_result = None
        self._session = StudyQueue.start(self.learner_id, cards)
        logger.info(
            "study_session_started",
            session_id=str(self._session.id),
            learner_id=str(self.learner_id),
            card_count=len(cards),
        )
        self._request_enrichment()
        return self.state

    async def load_topic(self, topic_id: TopicId) -> QueueSessionState:
        """
        Load the cards of a topic and start a session over them.

        Raises:
            CardLoadError: If the card source fails
        """
        if self.card_source is None:
            raise CardLoadError(topic_id, "no card source configured")
        try:
            cards = await self.card_source.get_cards_for_topic(topic_id)
        except Exception as e:
            logger.error("card_load_failed", topic_id=str(topic_id), error=str(e))
            raise CardLoadError(topic_id, str(e)) from e
        return self.start(cards)

    def current(self) -> Card | None:
        return self.state.current

    def flip(self) -> None:
        if self._session is None:
            return
        self._session.flip()

    def on_remembered(self) -> None:
        """Swipe right: the head card is done."""
        if self._session is None or not self._session.remember():
            return
        self._dispatch_events()
        self._request_enrichment()

    def on_not_remembered(self) -> None:
        """Swipe left: the head card goes to the back of the queue."""
        if self._session is None or not self._session.forget():
            return
        self._request_enrichment()

    def undo(self) -> None:
        if self._session is None or not self._session.undo():
            return
        logger.debug("study_swipe_undone", session_id=str(self._session.id))
        self._request_enrichment()

    def exit(self) -> None:
        """Leave the session; pending enrichment is abandoned."""
        self._cancel_enrichment()
        if self._session is None:
            return
        self._session.exit()
        self._dispatch_events()

    async def wait_idle(self) -> None:
        """Wait until every in-flight enrichment request has settled."""
        while True:
            pending = [task for task in self._enrichment_tasks.values() if not task.done()]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)

    def _dispatch_events(self) -> None:
        if self._session is None:
            return
        for event in self._session.collect_events():
            logger.info("domain_event_dispatched", **event.to_dict())
            if isinstance(event, StudySessionCompleted) and self.update_streak_use_case:
                self.streak_result = self.update_streak_use_case.execute(event.learner_id)
            if self.on_event is not None:
                self.on_event(event)

    def _request_enrichment(self) -> None:
        card = self.current()
        if (
            card is None
            or self.enrichment_service is None
            or self._session is None
            or not card.needs_enrichment
        ):
            return
        existing = self._enrichment_tasks.get(card.id)
        if existing is not None and not existing.done():
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning(
                "card_enrichment_skipped", card_id=str(card.id), reason="no running event loop"
            )
            return

        task = loop.create_task(self._enrich(self._session, card))
        self._enrichment_tasks[card.id] = task
        task.add_done_callback(lambda done, card_id=card.id: self._forget_task(card_id, done))

    def _forget_task(self, card_id: CardId, task: asyncio.Task[None]) -> None:
        if self._enrichment_tasks.get(card_id) is task:
            del self._enrichment_tasks[card_id]

    async def _enrich(self, session: StudyQueue, card: Card) -> None:
        assert self.enrichment_service is not None
        try:
            enrichment = await self.enrichment_service.fetch_missing_fields(card)
        except Exception as e:
            logger.warning("card_enrichment_failed", card_id=str(card.id), error=str(e))
            return

        if session is not self._session or enrichment.is_empty:
            return
        if not session.apply_enrichment(card.id, enrichment):
            logger.debug("stale_enrichment_dropped", card_id=str(card.id))
            return
        logger.debug("card_enriched", card_id=str(card.id))

    def _cancel_enrichment(self) -> None:
        for task in self._enrichment_tasks.values():
            task.cancel()
        self._enrichment_tasks.clear()
