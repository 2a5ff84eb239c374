"""Tests for engine settings."""

import pytest
from pydantic import ValidationError

from flashlearn.config import Settings


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings(_env_file=None)

        assert settings.QUIZ_TIME_LIMIT_SECONDS == 60.0
        assert settings.QUIZ_FEEDBACK_DELAY_SECONDS == 1.5
        assert settings.QUIZ_SPRINT_SIZE == 15
        assert settings.FAMILIAR_MIN_SCORE == 3
        assert settings.MASTERED_MIN_SCORE == 6
        assert settings.RANDOM_SEED is None

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("QUIZ_TIME_LIMIT_SECONDS", "30")
        monkeypatch.setenv("RANDOM_SEED", "42")

        settings = Settings(_env_file=None)

        assert settings.QUIZ_TIME_LIMIT_SECONDS == 30.0
        assert settings.RANDOM_SEED == 42

    def test_non_positive_duration_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, QUIZ_FEEDBACK_DELAY_SECONDS=0)

    def test_thresholds_must_be_ordered(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, FAMILIAR_MIN_SCORE=4, MASTERED_MIN_SCORE=4)
