"""Exceptions for learning use cases."""

from flashlearn.domain.common.value_objects import TopicId
from flashlearn.exceptions import ServiceError, ValidationError


class CardLoadError(ServiceError):
    """The card source failed; no session was started."""

    def __init__(self, topic_id: TopicId, reason: str) -> None:
        self.topic_id = topic_id
        self.reason = reason
        super().__init__(f"Could not load cards for topic {topic_id}: {reason}")


class EmptyCardSetError(ValidationError):
    """A quiz was started without any card."""

    def __init__(self) -> None:
        super().__init__("Cannot start a quiz without cards")
