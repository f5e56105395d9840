"""
FastAPI dependencies for dependency injection.

Provides singleton cache and liveness instances, per-request services, and
the caller's identity.

Identity is resolved upstream: the gateway authenticates the user and
forwards its id in ``X-User-Id``. This layer only loads the row; it never
verifies credentials.
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from shortlink_app.cache.factory import CacheFactory, CacheBackend
from shortlink_app.cache.strategies import CacheStrategy
from shortlink_app.config import settings
from shortlink_app.database.connection import get_db
from shortlink_app.liveness.factory import LivenessFactory, LivenessBackend
from shortlink_app.liveness.strategies import LivenessStrategy
from shortlink_app.models.user import User
from shortlink_app.services.category_service import CategoryService
from shortlink_app.services.url_service import URLService


@lru_cache()
def get_cache() -> CacheStrategy:
    """Cache singleton, backend chosen by settings"""
    backend = CacheBackend(settings.cache_backend)
    return CacheFactory.create(backend)


@lru_cache()
def get_liveness() -> LivenessStrategy:
    """Liveness checker singleton, backend chosen by settings"""
    backend = LivenessBackend(settings.liveness_backend)
    return LivenessFactory.create(backend)


def get_url_service(
    db: Session = Depends(get_db),
    cache: CacheStrategy = Depends(get_cache),
    liveness: LivenessStrategy = Depends(get_liveness),
) -> URLService:
    """
    Get URLService with all dependencies injected.

    Routes depend on the service; the service depends on infrastructure.
    Tests override ``get_db``/``get_cache``/``get_liveness`` individually.
    """
    return URLService(db=db, cache=cache, liveness=liveness)


def get_category_service(db: Session = Depends(get_db)) -> CategoryService:
    return CategoryService(db=db)


def get_current_user(
    x_user_id: Optional[int] = Header(None),
    db: Session = Depends(get_db),
) -> User:
    if x_user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-User-Id header"
        )
    user = db.get(User, x_user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unknown user"
        )
    return user


def get_admin_user(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin only"
        )
    return user
