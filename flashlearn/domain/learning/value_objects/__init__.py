from .proficiency import ProficiencyLevel, ScoreUpdate
from .questions import (
    BLANK,
    ContextualGapFill,
    Dictation,
    ExactTyping,
    MultipleChoice,
    Question,
    QuestionVariant,
    QuizMode,
    Scramble,
    SentenceBuilder,
)

__all__ = [
    "BLANK",
    "ContextualGapFill",
    "Dictation",
    "ExactTyping",
    "MultipleChoice",
    "ProficiencyLevel",
    "Question",
    "QuestionVariant",
    "QuizMode",
    "Scramble",
    "ScoreUpdate",
    "SentenceBuilder",
]
