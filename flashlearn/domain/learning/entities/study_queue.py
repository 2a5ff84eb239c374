"""
StudyQueue aggregate root: the flip-and-judge retry queue.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field, replace

from flashlearn.domain.common.aggregate_root import AggregateRoot
from flashlearn.domain.common.exceptions import InvariantViolationError
from flashlearn.domain.common.value_objects import CardId, LearnerId, SessionId
from flashlearn.domain.learning.entities.card import Card, CardEnrichment
from flashlearn.domain.learning.events import StudySessionCompleted, StudySessionExited


@dataclass(frozen=True)
class QueueSessionState:
    """
    Immutable snapshot of a study session.

    Each mutating transition returns a new snapshot that keeps the state
    it came from in ``previous``. That retained snapshot never keeps its
    own ``previous``, so undo is exactly one level deep.
    """

    queue: tuple[Card, ...] = ()
    initial_count: int = 0
    completed_count: int = 0
    mastered_count: int = 0
    is_flipped: bool = False
    previous: "QueueSessionState | None" = None

    def __post_init__(self) -> None:
        if self.completed_count > self.initial_count:
            raise InvariantViolationError(
                "QueueSessionState", "completed_count cannot exceed initial_count"
            )
        if self.previous is not None and self.previous.previous is not None:
            raise InvariantViolationError("QueueSessionState", "undo depth is limited to one")

    @classmethod
    def start(cls, cards: Sequence[Card]) -> "QueueSessionState":
        return cls(queue=tuple(cards), initial_count=len(cards))

    @property
    def current(self) -> Card | None:
        return self.queue[0] if self.queue else None

    @property
    def progress(self) -> float:
        if self.initial_count == 0:
            return 0.0
        return self.completed_count / self.initial_count

    @property
    def progress_text(self) -> str:
        return f"{self.completed_count} OF {self.initial_count}"

    @property
    def is_complete(self) -> bool:
        return not self.queue and self.initial_count > 0

    def contains(self, card_id: CardId) -> bool:
        return any(card.id == card_id for card in self.queue)

    def flipped(self) -> "QueueSessionState":
        return replace(self, is_flipped=not self.is_flipped)

    def remembered(self) -> "QueueSessionState":
        """Drop the head card: it counts as completed and mastered."""
        if not self.queue:
            return self
        return replace(
            self,
            queue=self.queue[1:],
            completed_count=self.completed_count + 1,
            mastered_count=self.mastered_count + 1,
            is_flipped=False,
            previous=self._snapshot(),
        )

    def not_remembered(self) -> "QueueSessionState":
        """Send the head card to the back of the queue."""
        if not self.queue:
            return self
        head, *rest = self.queue
        return replace(
            self,
            queue=(*rest, head),
            is_flipped=False,
            previous=self._snapshot(),
        )

    def undone(self) -> "QueueSessionState":
        if self.previous is None:
            return self
        return self.previous

    def with_enrichment(self, card_id: CardId, enrichment: CardEnrichment) -> "QueueSessionState":
        """Patch the matching card in place, in this snapshot and the undo snapshot."""
        queue = tuple(
            card.enrich(enrichment) if card.id == card_id else card for card in self.queue
        )
        previous = None
        if self.previous is not None:
            previous = self.previous.with_enrichment(card_id, enrichment)
        return replace(self, queue=queue, previous=previous)

    def _snapshot(self) -> "QueueSessionState":
        return replace(self, previous=None)


@dataclass(eq=False)
class StudyQueue(AggregateRoot[SessionId]):
    """
    Study session aggregate.

    Business Rules:
    - Swiping right removes the head card and counts it as completed
    - Swiping left re-queues the head card at the tail
    - Swipes on an empty queue are ignored (duplicate triggers)
    - Only the last swipe can be undone
    - Enrichment never reorders cards or touches the counters, and never
      brings back a card that already left the queue
    """

    id: SessionId
    learner_id: LearnerId
    state: QueueSessionState = field(default_factory=QueueSessionState)

    @property
    def current(self) -> Card | None:
        return self.state.current

    def flip(self) -> None:
        self.state = self.state.flipped()

    def remember(self) -> bool:
        """
        Swipe right.

        Returns:
            True if a card was consumed, False on an empty queue
        """
        if not self.state.queue:
            return False
        self.state = self.state.remembered()
        if self.state.is_complete:
            self._record_event(
                StudySessionCompleted(
                    session_id=self.id,
                    learner_id=self.learner_id,
                    completed_count=self.state.completed_count,
                    mastered_count=self.state.mastered_count,
                )
            )
        return True

    def forget(self) -> bool:
        """Swipe left. Returns False on an empty queue."""
        if not self.state.queue:
            return False
        self.state = self.state.not_remembered()
        return True

    def undo(self) -> bool:
        if self.state.previous is None:
            return False
        self.state = self.state.undone()
        return True

    def apply_enrichment(self, card_id: CardId, enrichment: CardEnrichment) -> bool:
        """
        Patch a card that is still queued.

        Returns:
            False when the card already left the queue and the result is stale
        """
        if not self.state.contains(card_id):
            return False
        self.state = self.state.with_enrichment(card_id, enrichment)
        return True

    def exit(self) -> None:
        self._record_event(
            StudySessionExited(
                session_id=self.id,
                learner_id=self.learner_id,
                remaining_count=len(self.state.queue),
            )
        )

    @classmethod
    def start(cls, learner_id: LearnerId, cards: Sequence[Card]) -> "StudyQueue":
        """Open a study session over ``cards`` in the given order."""
        return cls(
            id=SessionId.generate(),
            learner_id=learner_id,
            state=QueueSessionState.start(cards),
        )
