"""User profile synced from the identity provider"""
from sqlalchemy import Boolean, Column, DateTime, Index, Integer, String

from movie_explorer_discovery_service.models.base import Base, as_utc, utc_now


class User(Base):
    """Internal user record mapped 1:1 to an external auth (Clerk) id."""
    __tablename__ = 'users'

    id = Column(Integer, primary_key=True, autoincrement=True)
    clerk_id = Column(String(255), nullable=False, unique=True)
    email = Column(String(320), nullable=False)
    name = Column(String(255), nullable=True)
    image_url = Column(String(1000), nullable=True)

    is_premium = Column(Boolean, nullable=False, default=False)
    stripe_customer_id = Column(String(255), nullable=True)
    stripe_subscription_id = Column(String(255), nullable=True)

    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    __table_args__ = (
        Index("idx_users_email", "email"),
        Index("idx_users_stripe_customer_id", "stripe_customer_id"),
    )

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'clerk_id': self.clerk_id,
            'email': self.email,
            'name': self.name,
            'image_url': self.image_url,
            'is_premium': self.is_premium,
            'stripe_customer_id': self.stripe_customer_id,
            'stripe_subscription_id': self.stripe_subscription_id,
            'created_at': as_utc(self.created_at).isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f"<User(id={self.id}, clerk_id='{self.clerk_id}')>"
