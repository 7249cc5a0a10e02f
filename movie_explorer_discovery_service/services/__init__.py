"""Service classes"""

from .discovery_service import DiscoveryService
from .tmdb_client import TMDbClient

__all__ = ["DiscoveryService", "TMDbClient"]
