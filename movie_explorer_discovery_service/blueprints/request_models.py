"""Request bodies accepted by the HTTP blueprints."""
from typing import Optional

from pydantic import BaseModel


class LibraryMovieRequest(BaseModel):
    """Movie being added to favorites or the watchlist."""
    tmdb_id: int
    title: str
    release_year: int = 0
    poster_path: Optional[str] = None


class WatchlistAddRequest(LibraryMovieRequest):
    priority: Optional[int] = None
    notes: Optional[str] = None


class WatchlistUpdateRequest(BaseModel):
    """Partial update; only fields present in the body are applied."""
    watched: Optional[bool] = None
    priority: Optional[int] = None
    notes: Optional[str] = None


class UserSyncRequest(BaseModel):
    clerk_id: str
    email: str
    name: Optional[str] = None
    image_url: Optional[str] = None


class StripeCustomerRequest(BaseModel):
    stripe_customer_id: str


class SubscriptionUpdateRequest(BaseModel):
    stripe_customer_id: str
    stripe_subscription_id: Optional[str] = None
    is_premium: bool
