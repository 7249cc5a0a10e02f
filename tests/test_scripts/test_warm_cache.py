"""
Tests for scripts/warm_cache.py
"""

from unittest.mock import Mock, patch

import pandas as pd
import pytest

from movie_explorer_discovery_service.exceptions import ConfigurationError, FetchError
from scripts.warm_cache import load_seed_ids, main, warm_cache


class TestLoadSeedIds:
    """Tests for load_seed_ids function."""

    def test_ids_only(self):
        assert load_seed_ids([3, 1, 3]) == [3, 1]

    def test_ids_from_csv(self, tmp_path):
        # Arrange
        seeds_file = tmp_path / 'seeds.csv'
        pd.DataFrame({'tmdb_id': [27205, 155, None], 'title': ['Inception', 'The Dark Knight', 'blank']}).to_csv(
            seeds_file, index=False
        )

        # Act
        result = load_seed_ids([550, 155], seeds_file)

        # Assert
        assert result == [550, 155, 27205]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_seed_ids(ids_file=tmp_path / 'missing.csv')

    def test_missing_column(self, tmp_path):
        # Arrange
        seeds_file = tmp_path / 'seeds.csv'
        pd.DataFrame({'id': [1]}).to_csv(seeds_file, index=False)

        # Act & Assert
        with pytest.raises(ValueError, match="tmdb_id"):
            load_seed_ids(ids_file=seeds_file)


class TestWarmCache:
    """Tests for warm_cache function."""

    def test_warms_movie_director_and_studio(self, sample_movie_details):
        # Arrange
        service = Mock()
        service.get_movie_details.return_value = sample_movie_details

        # Act
        stats = warm_cache(service, [27205])

        # Assert
        assert stats == {'movies': 1, 'directors': 1, 'studios': 1, 'failed': 0}
        service.get_director_details.assert_called_once_with(525)
        service.get_studio_details.assert_called_once_with(923)

    def test_director_mode_only(self, sample_movie_details):
        # Arrange
        service = Mock()
        service.get_movie_details.return_value = sample_movie_details

        # Act
        stats = warm_cache(service, [27205], modes=['director'])

        # Assert
        assert stats['studios'] == 0
        service.get_studio_details.assert_not_called()

    def test_movie_without_attribution(self, sample_movie_details):
        # Arrange
        service = Mock()
        service.get_movie_details.return_value = sample_movie_details.model_copy(
            update={'director_id': None, 'production_companies': []}
        )

        # Act
        stats = warm_cache(service, [27205])

        # Assert
        assert stats == {'movies': 1, 'directors': 0, 'studios': 0, 'failed': 0}

    def test_fetch_error_skips_seed(self, sample_movie_details):
        # Arrange
        service = Mock()
        service.get_movie_details.side_effect = [FetchError("TMDB API error: 404", status_code=404), sample_movie_details]

        # Act
        stats = warm_cache(service, [1, 27205])

        # Assert
        assert stats['failed'] == 1
        assert stats['movies'] == 1

    def test_configuration_error_stops_run(self):
        # Arrange
        service = Mock()
        service.get_movie_details.side_effect = ConfigurationError("TMDB_API_KEY not configured")

        # Act & Assert
        with pytest.raises(ConfigurationError):
            warm_cache(service, [1, 2])
        assert service.get_movie_details.call_count == 1


class TestMain:
    """Tests for main function."""

    @patch('scripts.warm_cache.warm_cache')
    @patch('movie_explorer_discovery_service.blueprints.discovery_bp._build_discovery_service')
    @patch('movie_explorer_discovery_service.models.database.SessionLocal')
    def test_main_success(self, mock_session_local, mock_build, mock_warm, mock_sys_argv):
        # Arrange
        mock_sys_argv(['warm_cache.py', '--ids', '27205', '155', '--modes', 'director'])
        mock_warm.return_value = {'movies': 2, 'directors': 2, 'studios': 0, 'failed': 0}

        # Act
        main()

        # Assert
        mock_warm.assert_called_once_with(mock_build.return_value, [27205, 155], ['director'])
        mock_session_local.return_value.close.assert_called_once()

    @patch('scripts.warm_cache.warm_cache')
    @patch('movie_explorer_discovery_service.blueprints.discovery_bp._build_discovery_service')
    @patch('movie_explorer_discovery_service.models.database.SessionLocal')
    def test_main_exits_on_error(self, mock_session_local, mock_build, mock_warm, mock_sys_argv):
        # Arrange
        mock_sys_argv(['warm_cache.py', '--ids', '27205'])
        mock_warm.side_effect = ConfigurationError("TMDB_API_KEY not configured")

        # Act & Assert
        with pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code == 1
        mock_session_local.return_value.close.assert_called_once()

    def test_main_rejects_unknown_mode(self, mock_sys_argv):
        # Arrange
        mock_sys_argv(['warm_cache.py', '--ids', '1', '--modes', 'genre'])

        # Act & Assert
        with pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code == 2

    def test_main_requires_seeds(self, mock_sys_argv):
        # Arrange
        mock_sys_argv(['warm_cache.py'])

        # Act & Assert
        with pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code == 2
