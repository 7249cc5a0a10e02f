"""Repository classes"""

from movie_explorer_discovery_service.repos.cache_repository import (
    CacheRepository,
    DirectorCacheRepository,
    MovieCacheRepository,
    StudioCacheRepository,
)
from movie_explorer_discovery_service.repos.favorites_repository import FavoritesRepository
from movie_explorer_discovery_service.repos.session_repository import DiscoverySessionRepository
from movie_explorer_discovery_service.repos.user_repository import UserRepository
from movie_explorer_discovery_service.repos.watchlist_repository import WatchlistRepository

__all__ = [
    "CacheRepository",
    "DirectorCacheRepository",
    "DiscoverySessionRepository",
    "FavoritesRepository",
    "MovieCacheRepository",
    "StudioCacheRepository",
    "UserRepository",
    "WatchlistRepository",
]
