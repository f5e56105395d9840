"""
Database models for the shortlink service.

Counters (`User.url_count`, `Category.url_count`) are only ever changed
through `CounterService`.
"""

from .user import User
from .category import Category
from .short_url import ShortURL

__all__ = ["User", "Category", "ShortURL"]
