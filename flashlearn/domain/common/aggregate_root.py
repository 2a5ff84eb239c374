"""
Base class for Aggregate Roots.

An aggregate root is the single entry point to a cluster of domain
objects. Study sessions and quiz sessions are aggregates: every state
change goes through them and they record the events that a controller
later dispatches.

Example:
    @dataclass(eq=False)
    class QuizSession(AggregateRoot[SessionId]):
        id: SessionId

        def complete(self) -> None:
            self._record_event(QuizCompleted(session_id=self.id))
"""

from dataclasses import dataclass, field
from typing import Generic

from .domain_event import DomainEvent
from .entity import Entity, IdType


@dataclass(eq=False)
class AggregateRoot(Entity[IdType], Generic[IdType]):
    """
    Base class for Aggregate Roots in the domain model.

    Events are collected while the aggregate mutates and drained by the
    owner once the operation finishes.
    """

    _events: list[DomainEvent] = field(
        default_factory=list, repr=False, compare=False, kw_only=True
    )

    def _record_event(self, event: DomainEvent) -> None:
        """Record a domain event to be dispatched later."""
        self._events.append(event)

    def collect_events(self) -> list[DomainEvent]:
        """Collect and clear all recorded domain events."""
        events = self._events.copy()
        self._events.clear()
        return events

    @property
    def pending_events(self) -> list[DomainEvent]:
        """Return pending events without clearing them."""
        return self._events.copy()
