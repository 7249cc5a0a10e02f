"""Unit tests for movie_explorer_discovery_service.models.base."""
from datetime import UTC, datetime, timedelta, timezone

from sqlalchemy.ext.declarative import DeclarativeMeta

from movie_explorer_discovery_service.models.base import Base, as_utc, utc_now


class TestBase:
    """Tests for Base declarative base."""

    def test_base_is_declarative_base(self):
        """Test that Base is a declarative base."""
        # Assert
        assert hasattr(Base, 'metadata')
        assert hasattr(Base, 'registry')
        assert isinstance(Base, DeclarativeMeta)

    def test_all_tables_registered(self):
        """Test that importing the models package registers every table."""
        # Arrange
        import movie_explorer_discovery_service.models  # noqa: F401

        # Assert
        assert {
            'movie_cache',
            'director_cache',
            'studio_cache',
            'users',
            'favorite_movies',
            'watchlist',
            'discovery_sessions',
        } <= set(Base.metadata.tables)


class TestTimestampHelpers:
    """Tests for utc_now and as_utc."""

    def test_utc_now_is_aware(self):
        # Act
        now = utc_now()

        # Assert
        assert now.tzinfo is not None
        assert now.utcoffset() == timedelta(0)

    def test_as_utc_attaches_utc_to_naive(self):
        # Arrange
        naive = datetime(2024, 1, 1, 12, 0)

        # Act
        result = as_utc(naive)

        # Assert
        assert result == datetime(2024, 1, 1, 12, 0, tzinfo=UTC)

    def test_as_utc_keeps_aware_values(self):
        # Arrange
        aware = datetime(2024, 1, 1, 12, 0, tzinfo=timezone(timedelta(hours=2)))

        # Act & Assert
        assert as_utc(aware) is aware

    def test_as_utc_none(self):
        assert as_utc(None) is None
