"""Engine configuration."""

import logging
import sys
from collections.abc import Callable
from functools import lru_cache
from typing import Any, Literal

import structlog
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Database
    DATABASE_URL: str = "sqlite:///./flashlearn.db"

    # Environment
    ENVIRONMENT: Literal["development", "production", "test"] = "development"

    # Quiz timing
    QUIZ_TIME_LIMIT_SECONDS: float = 60.0
    QUIZ_FEEDBACK_DELAY_SECONDS: float = 1.5

    # Sprint quizzes keep the weakest cards of a topic
    QUIZ_SPRINT_SIZE: int = 15

    # Proficiency tiers
    FAMILIAR_MIN_SCORE: int = 3
    MASTERED_MIN_SCORE: int = 6

    # Question generation
    SCRAMBLE_MAX_WORD_LENGTH: int = 7
    EXACT_TYPING_HINT: bool = True

    # Fixed seed makes shuffles and distractors reproducible
    RANDOM_SEED: int | None = None

    @field_validator("QUIZ_TIME_LIMIT_SECONDS", "QUIZ_FEEDBACK_DELAY_SECONDS", mode="after")
    @classmethod
    def validate_positive_duration(cls, value: float) -> float:
        """Durations must be strictly positive."""
        if value <= 0:
            msg = "Quiz durations must be positive"
            raise ValueError(msg)
        return value

    @field_validator("QUIZ_SPRINT_SIZE", "SCRAMBLE_MAX_WORD_LENGTH", mode="after")
    @classmethod
    def validate_positive_count(cls, value: int) -> int:
        """Counts must be at least 1."""
        if value < 1:
            msg = "Value must be at least 1"
            raise ValueError(msg)
        return value

    @model_validator(mode="after")
    def validate_score_thresholds(self) -> "Settings":
        """Validate proficiency tier thresholds."""
        if self.FAMILIAR_MIN_SCORE < 1:
            msg = "FAMILIAR_MIN_SCORE must be at least 1"
            raise ValueError(msg)
        if self.MASTERED_MIN_SCORE <= self.FAMILIAR_MIN_SCORE:
            msg = "MASTERED_MIN_SCORE must be greater than FAMILIAR_MIN_SCORE"
            raise ValueError(msg)
        return self


def configure_logging(environment: str = "development") -> None:
    """Configure structured logging with structlog."""
    # JSON output in production, console output otherwise
    use_json = environment == "production"

    # Configure stdlib logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if environment == "development" else logging.INFO,
    )

    processors: list[Callable[..., Any]] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if use_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
