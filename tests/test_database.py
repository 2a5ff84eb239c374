"""Tests for database engine lifecycle and session helpers."""

from collections.abc import Generator

import pytest

from flashlearn import database
from flashlearn.config import Settings
from flashlearn.domain.common.value_objects import CardId, TopicId
from flashlearn.infrastructure.learning.repositories import CardRepository
from tests.conftest import make_card


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, DATABASE_URL="sqlite://")


@pytest.fixture(autouse=True)
def fresh_engine() -> Generator[None, None, None]:
    database.dispose_engine()
    yield
    database.dispose_engine()


class TestDatabaseLifecycle:
    def test_engine_requires_initialization(self) -> None:
        with pytest.raises(RuntimeError):
            database.get_engine()

    def test_session_factory_initializes_lazily(self, settings: Settings) -> None:
        factory = database.get_session_factory(settings)

        assert database.get_session_factory() is factory
        assert str(database.get_engine().url) == "sqlite://"

    def test_get_db_sessions_share_created_tables(self, settings: Settings) -> None:
        database.initialize_database(settings)
        database.create_tables()

        sessions = database.get_db()
        db = next(sessions)
        CardRepository(db).save_all([make_card("k1", "kite", topic_id="toys")])
        sessions.close()

        other = database.get_db()
        cards = CardRepository(next(other)).find_by_topic(TopicId("toys"))
        other.close()

        assert [card.id for card in cards] == [CardId("k1")]

    def test_dispose_resets_the_engine(self, settings: Settings) -> None:
        database.initialize_database(settings)

        database.dispose_engine()

        with pytest.raises(RuntimeError):
            database.get_engine()
