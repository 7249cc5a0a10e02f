"""Shared test fixtures and configuration for pytest."""
import pytest
from datetime import UTC, datetime, timedelta
from typing import Dict
from unittest.mock import Mock
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session

from movie_explorer_discovery_service.models.base import Base
from movie_explorer_discovery_service.models import User
from movie_explorer_discovery_service.schemas import (
    DirectorDetails,
    FilmographyEntry,
    Genre,
    MovieDetails,
    ProductionCompany,
    StudioDetails,
)


# ===== Database Fixtures =====

@pytest.fixture(scope="function")
def test_db_engine():
    """Create an in-memory SQLite database engine for testing."""
    engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(scope="function")
def test_db_session(test_db_engine):
    """Create a database session for testing."""
    SessionLocal = sessionmaker(bind=test_db_engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def mock_database_session():
    """Mock database session."""
    mock_session = Mock(spec=Session)
    mock_session.query.return_value = mock_session
    mock_session.filter = Mock(return_value=mock_session)
    mock_session.first = Mock(return_value=None)
    mock_session.all = Mock(return_value=[])
    mock_session.count = Mock(return_value=0)
    return mock_session


# ===== Clock Fixtures =====

class FakeClock:
    """Controllable clock for TTL tests."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 1, 1, 12, 0, tzinfo=UTC))


# ===== Repository Fixtures =====

@pytest.fixture
def movie_cache(test_db_session, clock):
    from movie_explorer_discovery_service.repos import MovieCacheRepository
    return MovieCacheRepository(test_db_session, ttl=timedelta(days=7), clock=clock)


@pytest.fixture
def director_cache(test_db_session, clock):
    from movie_explorer_discovery_service.repos import DirectorCacheRepository
    return DirectorCacheRepository(test_db_session, ttl=timedelta(days=7), clock=clock)


@pytest.fixture
def studio_cache(test_db_session, clock):
    from movie_explorer_discovery_service.repos import StudioCacheRepository
    return StudioCacheRepository(test_db_session, ttl=timedelta(days=7), clock=clock)


@pytest.fixture
def session_repository(test_db_session):
    from movie_explorer_discovery_service.repos import DiscoverySessionRepository
    return DiscoverySessionRepository(test_db_session)


@pytest.fixture
def favorites_repository(test_db_session):
    from movie_explorer_discovery_service.repos import FavoritesRepository
    return FavoritesRepository(test_db_session)


@pytest.fixture
def watchlist_repository(test_db_session):
    from movie_explorer_discovery_service.repos import WatchlistRepository
    return WatchlistRepository(test_db_session)


@pytest.fixture
def user_repository(test_db_session):
    from movie_explorer_discovery_service.repos import UserRepository
    return UserRepository(test_db_session)


@pytest.fixture
def sample_user(test_db_session) -> User:
    """Create a user in the test database."""
    user = User(clerk_id='user_abc', email='ada@example.com', name='Ada')
    test_db_session.add(user)
    test_db_session.commit()
    test_db_session.refresh(user)
    return user


# ===== Normalized Sample Data =====

@pytest.fixture
def sample_movie_details() -> MovieDetails:
    """Inception, as produced by the normalizer."""
    return MovieDetails(
        tmdb_id=27205,
        title='Inception',
        original_title='Inception',
        overview='A thief who steals corporate secrets through dream-sharing.',
        poster_path='/inception.jpg',
        release_date='2010-07-15',
        release_year=2010,
        runtime=148,
        vote_average=8.4,
        vote_count=35000,
        genres=[Genre(id=28, name='Action'), Genre(id=878, name='Science Fiction')],
        director_id=525,
        director_name='Christopher Nolan',
        production_companies=[
            ProductionCompany(id=923, name='Legendary Pictures', logo_path='/legendary.png'),
            ProductionCompany(id=9996, name='Syncopy'),
        ],
    )


@pytest.fixture
def sample_director_details() -> DirectorDetails:
    return DirectorDetails(
        id=525,
        name='Christopher Nolan',
        profile_path='/nolan.jpg',
        biography='British-American filmmaker.',
        birthday='1970-07-30',
        place_of_birth='London, England, UK',
        filmography=[
            FilmographyEntry(tmdb_id=27205, title='Inception', release_year=2010,
                             vote_average=8.4, vote_count=35000, job='Director'),
            FilmographyEntry(tmdb_id=155, title='The Dark Knight', release_year=2008,
                             vote_average=8.5, vote_count=32000, job='Director'),
            FilmographyEntry(tmdb_id=11660, title='Following', release_year=1998,
                             vote_average=7.1, vote_count=900, job='Director'),
        ],
    )


@pytest.fixture
def sample_studio_details() -> StudioDetails:
    return StudioDetails(
        id=923,
        name='Legendary Pictures',
        logo_path='/legendary.png',
        headquarters='Burbank, California',
        filmography=[
            FilmographyEntry(tmdb_id=27205, title='Inception', release_year=2010,
                             vote_average=8.4, vote_count=35000),
            FilmographyEntry(tmdb_id=124905, title='Godzilla', release_year=2014,
                             vote_average=6.3, vote_count=9000),
        ],
    )


# ===== Raw TMDB Payloads =====

@pytest.fixture
def tmdb_movie_payload() -> Dict:
    """``/movie/27205?append_to_response=credits`` trimmed to the fields we read."""
    return {
        'id': 27205,
        'title': 'Inception',
        'original_title': 'Inception',
        'overview': 'A thief who steals corporate secrets through dream-sharing.',
        'poster_path': '/inception.jpg',
        'backdrop_path': None,
        'release_date': '2010-07-15',
        'runtime': 148,
        'vote_average': 8.4,
        'vote_count': 35000,
        'popularity': 120.5,
        'genres': [{'id': 28, 'name': 'Action'}, {'id': 878, 'name': 'Science Fiction'}],
        'production_companies': [
            {'id': 923, 'name': 'Legendary Pictures', 'logo_path': '/legendary.png', 'origin_country': 'US'},
            {'id': 9996, 'name': 'Syncopy', 'logo_path': None, 'origin_country': 'GB'},
        ],
        'credits': {
            'cast': [{'id': 6193, 'name': 'Leonardo DiCaprio', 'character': 'Cobb'}],
            'crew': [
                {'id': 947, 'name': 'Hans Zimmer', 'job': 'Original Music Composer'},
                {'id': 525, 'name': 'Christopher Nolan', 'job': 'Director'},
                {'id': 525, 'name': 'Christopher Nolan', 'job': 'Screenplay'},
            ],
        },
    }


@pytest.fixture
def tmdb_person_payload() -> Dict:
    """``/person/525?append_to_response=movie_credits``"""
    return {
        'id': 525,
        'name': 'Christopher Nolan',
        'profile_path': '/nolan.jpg',
        'biography': 'British-American filmmaker.',
        'birthday': '1970-07-30',
        'place_of_birth': 'London, England, UK',
        'movie_credits': {
            'cast': [],
            'crew': [
                {'id': 27205, 'title': 'Inception', 'release_date': '2010-07-15',
                 'vote_average': 8.4, 'vote_count': 35000, 'job': 'Director'},
                {'id': 27205, 'title': 'Inception', 'release_date': '2010-07-15',
                 'vote_average': 8.4, 'vote_count': 35000, 'job': 'Writer'},
                {'id': 155, 'title': 'The Dark Knight', 'release_date': '2008-07-16',
                 'poster_path': '/tdk.jpg', 'vote_average': 8.5, 'vote_count': 32000, 'job': 'Director'},
                {'id': 9999, 'title': 'Untitled Project', 'release_date': '',
                 'vote_average': 0.0, 'vote_count': 0, 'job': 'Director'},
            ],
        },
    }


@pytest.fixture
def tmdb_company_payload() -> Dict:
    return {
        'id': 923,
        'name': 'Legendary Pictures',
        'logo_path': '/legendary.png',
        'description': '',
        'headquarters': 'Burbank, California',
        'homepage': 'https://www.legendary.com',
        'origin_country': 'US',
    }


@pytest.fixture
def tmdb_discover_page() -> Dict:
    """Single-page ``/discover/movie?with_companies=923`` result."""
    return {
        'page': 1,
        'total_pages': 1,
        'total_results': 2,
        'results': [
            {'id': 27205, 'title': 'Inception', 'release_date': '2010-07-15',
             'vote_average': 8.4, 'vote_count': 35000, 'genre_ids': [28, 878]},
            {'id': 124905, 'title': 'Godzilla', 'release_date': '2014-05-14',
             'vote_average': 6.3, 'vote_count': 9000, 'genre_ids': [28, 878]},
        ],
    }


# ===== Configuration Fixtures =====

@pytest.fixture
def mock_config(monkeypatch):
    """Mock configuration values."""
    monkeypatch.setenv('DATABASE_URL', 'sqlite:///:memory:')
    monkeypatch.setenv('TMDB_API_KEY', 'test-key')
    monkeypatch.setenv('TMDB_BASE_URL', 'https://tmdb.test/3')


# ===== Azure Functions Fixtures =====

@pytest.fixture
def mock_http_request():
    """Mock Azure Functions HttpRequest."""
    mock_req = Mock()
    mock_req.route_params = {}
    mock_req.params = {}
    mock_req.get_json.return_value = {}
    return mock_req


# ===== Script Fixtures =====

@pytest.fixture
def mock_sys_argv(monkeypatch):
    """Mock sys.argv for script testing."""
    def _mock_argv(args):
        monkeypatch.setattr('sys.argv', args)
    return _mock_argv
