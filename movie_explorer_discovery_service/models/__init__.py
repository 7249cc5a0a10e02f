"""SQLAlchemy models"""

from movie_explorer_discovery_service.models.base import Base
from movie_explorer_discovery_service.models.director_cache import CachedDirector
from movie_explorer_discovery_service.models.discovery_session import DiscoverySession
from movie_explorer_discovery_service.models.favorite_movie import FavoriteMovie
from movie_explorer_discovery_service.models.movie_cache import CachedMovie
from movie_explorer_discovery_service.models.studio_cache import CachedStudio
from movie_explorer_discovery_service.models.user import User
from movie_explorer_discovery_service.models.watchlist_item import WatchlistItem

__all__ = [
    "Base",
    "CachedDirector",
    "CachedMovie",
    "CachedStudio",
    "DiscoverySession",
    "FavoriteMovie",
    "User",
    "WatchlistItem",
]
