"""DTOs for learning use cases."""

from flashlearn.application.learning.use_cases.dtos.quiz_dtos import QuizConfig, QuizSummary

__all__ = ["QuizConfig", "QuizSummary"]
