from .ids import CardId, LearnerId, SessionId, TopicId

__all__ = [
    "CardId",
    "LearnerId",
    "SessionId",
    "TopicId",
]
