"""Repository for users synced from the identity provider."""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from movie_explorer_discovery_service.exceptions import NotFoundError
from movie_explorer_discovery_service.models import DiscoverySession, FavoriteMovie, User, WatchlistItem
from movie_explorer_discovery_service.models.base import utc_now

logger = logging.getLogger(__name__)


class UserRepository:
    """
    Repository for user records keyed by external auth (Clerk) id.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_by_clerk_id(self, clerk_id: str) -> User | None:
        return self.db.query(User).filter(User.clerk_id == clerk_id).first()

    def get_by_id(self, user_id: int) -> User | None:
        return self.db.query(User).filter(User.id == user_id).first()

    def _require(self, clerk_id: str) -> User:
        user = self.get_by_clerk_id(clerk_id)
        if user is None:
            raise NotFoundError(f"User not found: {clerk_id}")
        return user

    def create_user(
            self,
            clerk_id: str,
            email: str,
            name: Optional[str] = None,
            image_url: Optional[str] = None
    ) -> User:
        """
        Create a user on first sight.

        Returns:
            The new user, or the existing one when the clerk id is already known
        """
        existing = self.get_by_clerk_id(clerk_id)
        if existing:
            return existing

        user = User(
            clerk_id=clerk_id,
            email=email,
            name=name,
            image_url=image_url,
            is_premium=False,
            created_at=utc_now(),
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)

        logger.info(f"Created user {user.id} for {clerk_id}")
        return user

    def update_user(
            self,
            clerk_id: str,
            name: Optional[str] = None,
            image_url: Optional[str] = None
    ) -> User:
        """
        Update profile fields.

        Raises:
            NotFoundError: if no user has this clerk id
        """
        user = self._require(clerk_id)

        user.name = name  # type: ignore[assignment]
        user.image_url = image_url  # type: ignore[assignment]
        self.db.commit()
        self.db.refresh(user)

        return user

    def delete_user(self, clerk_id: str) -> bool:
        """
        Delete a user together with their favorites, watchlist and discovery sessions.

        Returns:
            True if deleted, False if the user did not exist
        """
        user = self.get_by_clerk_id(clerk_id)
        if user is None:
            return False

        user_id = user.id
        favorites = self.db.query(FavoriteMovie).filter(FavoriteMovie.user_id == user_id).delete()
        watchlist = self.db.query(WatchlistItem).filter(WatchlistItem.user_id == user_id).delete()
        sessions = self.db.query(DiscoverySession).filter(DiscoverySession.user_id == user_id).delete()
        self.db.delete(user)
        self.db.commit()

        logger.info(
            f"Deleted user {user_id} ({favorites} favorites, {watchlist} watchlist items, "
            f"{sessions} discovery sessions)"
        )
        return True

    def set_stripe_customer_id(self, clerk_id: str, stripe_customer_id: str) -> User:
        """Attach a billing customer id to a user."""
        user = self._require(clerk_id)

        user.stripe_customer_id = stripe_customer_id  # type: ignore[assignment]
        self.db.commit()
        self.db.refresh(user)

        return user

    def set_premium_status(
            self,
            stripe_customer_id: str,
            stripe_subscription_id: Optional[str],
            is_premium: bool
    ) -> User:
        """
        Apply a subscription change from the billing collaborator.

        Idempotent: replaying the same change leaves the user unchanged.

        Raises:
            NotFoundError: if no user has this customer id
        """
        user = self.db.query(User).filter(User.stripe_customer_id == stripe_customer_id).first()
        if user is None:
            raise NotFoundError(f"User not found for customer {stripe_customer_id}")

        user.stripe_subscription_id = stripe_subscription_id  # type: ignore[assignment]
        user.is_premium = is_premium  # type: ignore[assignment]
        self.db.commit()
        self.db.refresh(user)

        logger.info(f"User {user.id} premium={is_premium}")
        return user
