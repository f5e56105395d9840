"""
Per-user and per-category URL counters.

Each call is one ``UPDATE ... SET url_count = url_count +/- 1`` statement,
so concurrent requests never lose updates. Nothing here commits: the
caller runs these inside the same transaction as the record mutation.
"""

import logging

from sqlalchemy import update
from sqlalchemy.orm import Session

from shortlink_app.models.category import Category
from shortlink_app.models.user import User

logger = logging.getLogger(__name__)


class CounterService:
    def __init__(self, db: Session):
        self.db = db

    def increment_user(self, user_id: int) -> None:
        self._bump_user(user_id, 1)

    def decrement_user(self, user_id: int) -> None:
        self._bump_user(user_id, -1)

    def increment_category(self, name: str) -> None:
        self._bump_category(name, 1)

    def decrement_category(self, name: str) -> None:
        self._bump_category(name, -1)

    def _bump_user(self, user_id: int, delta: int) -> None:
        stmt = update(User).where(User.id == user_id)
        if delta < 0:
            stmt = stmt.where(User.url_count > 0)
        result = self.db.execute(stmt.values(url_count=User.url_count + delta))
        if result.rowcount == 0:
            logger.warning("User counter for %s not updated (delta %+d)", user_id, delta)

    def _bump_category(self, name: str, delta: int) -> None:
        stmt = update(Category).where(Category.name == name)
        if delta < 0:
            stmt = stmt.where(Category.url_count > 0)
        result = self.db.execute(stmt.values(url_count=Category.url_count + delta))
        if result.rowcount == 0:
            logger.warning("Category counter for %s not updated (delta %+d)", name, delta)
