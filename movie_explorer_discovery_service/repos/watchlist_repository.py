"""Repository for a user's watchlist."""

import logging
from typing import Dict, List, Optional

from sqlalchemy import desc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from movie_explorer_discovery_service.models import WatchlistItem
from movie_explorer_discovery_service.models.base import utc_now

logger = logging.getLogger(__name__)


class WatchlistRepository:
    """
    Repository for watchlist items; one item per (user, movie) pair.

    Mutations on a movie that is not in the watchlist are silent no-ops.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_item(self, user_id: int, tmdb_id: int) -> WatchlistItem | None:
        return (
            self.db.query(WatchlistItem)
            .filter(WatchlistItem.user_id == user_id, WatchlistItem.tmdb_id == tmdb_id)
            .first()
        )

    # noinspection PyTypeChecker
    def list_items(self, user_id: int, watched: Optional[bool] = None) -> List[WatchlistItem]:
        """
        Get a user's watchlist, most recently added first.

        Args:
            user_id: Owning user
            watched: If provided, only items with this watched state

        Returns:
            List of WatchlistItem objects
        """
        query = self.db.query(WatchlistItem).filter(WatchlistItem.user_id == user_id)

        if watched is not None:
            query = query.filter(WatchlistItem.watched == watched)

        return query.order_by(desc(WatchlistItem.added_at), desc(WatchlistItem.id)).all()

    def list_unwatched(self, user_id: int) -> List[WatchlistItem]:
        return self.list_items(user_id, watched=False)

    def list_watched(self, user_id: int) -> List[WatchlistItem]:
        return self.list_items(user_id, watched=True)

    def is_in_watchlist(self, user_id: int, tmdb_id: int) -> bool:
        return self.get_item(user_id, tmdb_id) is not None

    def add_item(
            self,
            user_id: int,
            tmdb_id: int,
            title: str,
            release_year: int,
            poster_path: Optional[str] = None,
            priority: Optional[int] = None,
            notes: Optional[str] = None
    ) -> WatchlistItem:
        """
        Add a movie to the watchlist as unwatched.

        Adding a movie that is already listed returns the existing item unchanged.
        """
        existing = self.get_item(user_id, tmdb_id)
        if existing:
            return existing

        item = WatchlistItem(
            user_id=user_id,
            tmdb_id=tmdb_id,
            title=title,
            poster_path=poster_path,
            release_year=release_year,
            added_at=utc_now(),
            watched=False,
            priority=priority,
            notes=notes,
        )
        self.db.add(item)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            return self.get_item(user_id, tmdb_id)

        self.db.refresh(item)
        return item

    def remove_item(self, user_id: int, tmdb_id: int) -> bool:
        """
        Remove a movie from the watchlist.

        Returns:
            True if deleted, False if not found
        """
        count = (
            self.db.query(WatchlistItem)
            .filter(WatchlistItem.user_id == user_id, WatchlistItem.tmdb_id == tmdb_id)
            .delete()
        )
        self.db.commit()

        return count > 0

    def toggle_item(
            self,
            user_id: int,
            tmdb_id: int,
            title: str,
            release_year: int,
            poster_path: Optional[str] = None
    ) -> Dict[str, bool]:
        """Add the movie if absent, remove it otherwise."""
        if self.remove_item(user_id, tmdb_id):
            return {"added": False}

        self.add_item(user_id, tmdb_id, title, release_year, poster_path=poster_path)
        return {"added": True}

    def mark_watched(self, user_id: int, tmdb_id: int) -> WatchlistItem | None:
        """Mark an item watched; watched_at is stamped only on the unwatched -> watched transition."""
        item = self.get_item(user_id, tmdb_id)
        if item is None:
            return None

        if not item.watched:
            item.watched = True  # type: ignore[assignment]
            item.watched_at = utc_now()  # type: ignore[assignment]
            self.db.commit()
            self.db.refresh(item)

        return item

    def mark_unwatched(self, user_id: int, tmdb_id: int) -> WatchlistItem | None:
        """Mark an item unwatched and clear watched_at."""
        item = self.get_item(user_id, tmdb_id)
        if item is None:
            return None

        item.watched = False  # type: ignore[assignment]
        item.watched_at = None  # type: ignore[assignment]
        self.db.commit()
        self.db.refresh(item)

        return item

    def update_notes(
            self,
            user_id: int,
            tmdb_id: int,
            notes: Optional[str] = None,
            priority: Optional[int] = None
    ) -> WatchlistItem | None:
        """Replace an item's notes and priority."""
        item = self.get_item(user_id, tmdb_id)
        if item is None:
            return None

        item.notes = notes  # type: ignore[assignment]
        item.priority = priority  # type: ignore[assignment]
        self.db.commit()
        self.db.refresh(item)

        return item

