"""Repository for a user's favorite movies."""

import logging
from typing import Dict, List, Optional

from sqlalchemy import desc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from movie_explorer_discovery_service.models import FavoriteMovie
from movie_explorer_discovery_service.models.base import utc_now

logger = logging.getLogger(__name__)


class FavoritesRepository:
    """
    Repository for favorite movies; one entry per (user, movie) pair.
    """

    def __init__(self, db: Session):
        self.db = db

    def _find(self, user_id: int, tmdb_id: int) -> FavoriteMovie | None:
        return (
            self.db.query(FavoriteMovie)
            .filter(FavoriteMovie.user_id == user_id, FavoriteMovie.tmdb_id == tmdb_id)
            .first()
        )

    # noinspection PyTypeChecker
    def list_favorites(self, user_id: int) -> List[FavoriteMovie]:
        """Get a user's favorites, most recently added first."""
        return (
            self.db.query(FavoriteMovie)
            .filter(FavoriteMovie.user_id == user_id)
            .order_by(desc(FavoriteMovie.added_at), desc(FavoriteMovie.id))
            .all()
        )

    def is_favorite(self, user_id: int, tmdb_id: int) -> bool:
        return self._find(user_id, tmdb_id) is not None

    def add_favorite(
            self,
            user_id: int,
            tmdb_id: int,
            title: str,
            release_year: int,
            poster_path: Optional[str] = None
    ) -> FavoriteMovie:
        """
        Add a movie to a user's favorites.

        Adding a movie that is already a favorite returns the existing entry.
        """
        existing = self._find(user_id, tmdb_id)
        if existing:
            return existing

        favorite = FavoriteMovie(
            user_id=user_id,
            tmdb_id=tmdb_id,
            title=title,
            poster_path=poster_path,
            release_year=release_year,
            added_at=utc_now(),
        )
        self.db.add(favorite)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            return self._find(user_id, tmdb_id)

        self.db.refresh(favorite)
        return favorite

    def remove_favorite(self, user_id: int, tmdb_id: int) -> bool:
        """
        Remove a favorite. Removing a movie that is not a favorite is a no-op.

        Returns:
            True if deleted, False if not found
        """
        count = (
            self.db.query(FavoriteMovie)
            .filter(FavoriteMovie.user_id == user_id, FavoriteMovie.tmdb_id == tmdb_id)
            .delete()
        )
        self.db.commit()

        return count > 0

    def toggle_favorite(
            self,
            user_id: int,
            tmdb_id: int,
            title: str,
            release_year: int,
            poster_path: Optional[str] = None
    ) -> Dict[str, bool]:
        """
        Add the movie if it is not a favorite, remove it otherwise.

        Returns:
            {"added": True} when added, {"added": False} when removed
        """
        if self.remove_favorite(user_id, tmdb_id):
            return {"added": False}

        self.add_favorite(user_id, tmdb_id, title, release_year, poster_path=poster_path)
        return {"added": True}

