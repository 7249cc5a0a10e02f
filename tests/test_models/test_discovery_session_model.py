"""Unit tests for DiscoverySession model."""
from datetime import datetime

from movie_explorer_discovery_service.models import DiscoverySession
from movie_explorer_discovery_service.models.discovery_session import DISCOVERY_MODES


class TestDiscoverySession:
    """Tests for DiscoverySession model."""

    def test_modes(self):
        assert DISCOVERY_MODES == ("director", "studio")

    def test_create_session(self, test_db_session, sample_user):
        # Arrange
        session = DiscoverySession(
            user_id=sample_user.id,
            seed_movie_tmdb_id=27205,
            seed_movie_title='Inception',
            mode='director',
            director_id=525,
            director_name='Christopher Nolan',
            recommended_movie_ids=[155, 11660],
        )

        # Act
        test_db_session.add(session)
        test_db_session.commit()
        test_db_session.refresh(session)

        # Assert
        assert session.id is not None
        assert session.recommended_movie_ids == [155, 11660]
        assert session.studio_id is None
        assert session.created_at is not None

    def test_to_dict(self):
        # Arrange
        session = DiscoverySession(
            id=4,
            user_id=1,
            seed_movie_tmdb_id=27205,
            seed_movie_title='Inception',
            mode='studio',
            studio_id=923,
            studio_name='Legendary Pictures',
            recommended_movie_ids=[124905],
            created_at=datetime(2024, 5, 1, 8, 30),
        )

        # Act
        result = session.to_dict()

        # Assert
        assert result['mode'] == 'studio'
        assert result['studio_name'] == 'Legendary Pictures'
        assert result['director_id'] is None
        assert result['recommended_movie_ids'] == [124905]
        assert result['created_at'] == '2024-05-01T08:30:00+00:00'

    def test_repr(self):
        session = DiscoverySession(id=4, user_id=1, seed_movie_tmdb_id=27205, mode='director')
        assert repr(session) == "<DiscoverySession(id=4, user_id=1, seed=27205, mode='director')>"
