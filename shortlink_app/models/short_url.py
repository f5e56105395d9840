from sqlalchemy import Column, Integer, String, DateTime, Boolean, ForeignKey
from sqlalchemy.sql import func
from shortlink_app.database.connection import Base


class ShortURL(Base):
    """
    One short endpoint pointing at one original URL.

    ``short_endpoint`` holds the scoped key (``alias`` for root,
    ``category/alias`` for a category). The unique index on it is what
    settles two requests racing for the same alias.
    """
    __tablename__ = "short_urls"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    email = Column(String, nullable=True)
    name = Column(String, nullable=True)
    # NULL means the root scope
    category = Column(String, nullable=True, index=True)
    short_endpoint = Column(String, unique=True, nullable=False, index=True)
    original_url = Column(String, nullable=False)
    hits = Column(Integer, nullable=False, default=0)
    last_hit_at = Column(DateTime(timezone=True), nullable=True)
    blacklisted = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    @property
    def alias(self) -> str:
        """Endpoint without its category prefix"""
        return self.short_endpoint.rsplit("/", 1)[-1]
