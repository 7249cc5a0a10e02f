"""Unit tests for User, FavoriteMovie and WatchlistItem models."""
from datetime import UTC, datetime

import pytest
from sqlalchemy.exc import IntegrityError

from movie_explorer_discovery_service.models import FavoriteMovie, User, WatchlistItem


class TestUser:
    """Tests for User model."""

    def test_defaults(self, test_db_session):
        # Arrange
        user = User(clerk_id='user_1', email='a@example.com')

        # Act
        test_db_session.add(user)
        test_db_session.commit()
        test_db_session.refresh(user)

        # Assert
        assert user.is_premium is False
        assert user.stripe_customer_id is None
        assert user.created_at is not None

    def test_clerk_id_is_unique(self, test_db_session):
        # Arrange
        test_db_session.add(User(clerk_id='user_1', email='a@example.com'))
        test_db_session.commit()
        test_db_session.add(User(clerk_id='user_1', email='b@example.com'))

        # Act & Assert
        with pytest.raises(IntegrityError):
            test_db_session.commit()

    def test_to_dict(self):
        # Arrange
        user = User(
            id=3,
            clerk_id='user_1',
            email='a@example.com',
            name='Ada',
            is_premium=True,
            created_at=datetime(2024, 1, 1, 12, 0),
        )

        # Act
        result = user.to_dict()

        # Assert
        assert result['id'] == 3
        assert result['clerk_id'] == 'user_1'
        assert result['is_premium'] is True
        assert result['created_at'] == '2024-01-01T12:00:00+00:00'


class TestFavoriteMovie:
    """Tests for FavoriteMovie model."""

    def test_user_movie_pair_is_unique(self, test_db_session, sample_user):
        # Arrange
        test_db_session.add(FavoriteMovie(user_id=sample_user.id, tmdb_id=155, title='The Dark Knight'))
        test_db_session.commit()
        test_db_session.add(FavoriteMovie(user_id=sample_user.id, tmdb_id=155, title='The Dark Knight'))

        # Act & Assert
        with pytest.raises(IntegrityError):
            test_db_session.commit()

    def test_same_movie_for_different_users(self, test_db_session):
        # Arrange
        test_db_session.add(FavoriteMovie(user_id=1, tmdb_id=155, title='The Dark Knight'))
        test_db_session.add(FavoriteMovie(user_id=2, tmdb_id=155, title='The Dark Knight'))

        # Act
        test_db_session.commit()

        # Assert
        assert test_db_session.query(FavoriteMovie).count() == 2

    def test_to_dict(self):
        # Arrange
        favorite = FavoriteMovie(
            id=1,
            user_id=7,
            tmdb_id=155,
            title='The Dark Knight',
            poster_path='/tdk.jpg',
            release_year=2008,
            added_at=datetime(2024, 3, 1, tzinfo=UTC),
        )

        # Act
        result = favorite.to_dict()

        # Assert
        assert result == {
            'id': 1,
            'user_id': 7,
            'tmdb_id': 155,
            'title': 'The Dark Knight',
            'poster_path': '/tdk.jpg',
            'release_year': 2008,
            'added_at': '2024-03-01T00:00:00+00:00',
        }


class TestWatchlistItem:
    """Tests for WatchlistItem model."""

    def test_defaults_to_unwatched(self, test_db_session, sample_user):
        # Arrange
        item = WatchlistItem(user_id=sample_user.id, tmdb_id=155, title='The Dark Knight')

        # Act
        test_db_session.add(item)
        test_db_session.commit()
        test_db_session.refresh(item)

        # Assert
        assert item.watched is False
        assert item.watched_at is None
        assert item.release_year == 0

    def test_to_dict_without_watched_at(self):
        # Arrange
        item = WatchlistItem(
            id=1, user_id=7, tmdb_id=155, title='The Dark Knight', watched=False, notes='with popcorn'
        )

        # Act
        result = item.to_dict()

        # Assert
        assert result['watched'] is False
        assert result['watched_at'] is None
        assert result['added_at'] is None
        assert result['notes'] == 'with popcorn'
