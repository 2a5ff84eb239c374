"""Database models."""

from datetime import date, datetime

from sqlalchemy import Date, DateTime, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from flashlearn.database import Base


class Card(Base):
    """Vocabulary card of a topic."""

    __tablename__ = "cards"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    topic_id: Mapped[str | None] = mapped_column(String(64), index=True, nullable=True)
    word: Mapped[str] = mapped_column(String(255), nullable=False)
    definition: Mapped[str] = mapped_column(Text, nullable=False, default="")
    example_sentence: Mapped[str] = mapped_column(Text, nullable=False, default="")
    pronunciation_ipa: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    part_of_speech: Mapped[str] = mapped_column(String(32), nullable=False, default="")
    image_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    level: Mapped[str] = mapped_column(String(32), nullable=False, default="")
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    def __repr__(self) -> str:
        """String representation of Card."""
        return f"<Card(id={self.id}, word='{self.word}')>"


class ProficiencyScore(Base):
    """Per-card proficiency score of a learner."""

    __tablename__ = "proficiency_scores"

    card_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    learner_id: Mapped[str] = mapped_column(String(64), primary_key=True, index=True)
    score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation of ProficiencyScore."""
        return f"<ProficiencyScore(card_id={self.card_id}, score={self.score})>"


class LearnerStreak(Base):
    """Day streak of a learner."""

    __tablename__ = "learner_streaks"

    learner_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    current_streak: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_active_date: Mapped[date | None] = mapped_column(Date, nullable=True)
