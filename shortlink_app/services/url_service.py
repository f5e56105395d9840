import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import delete, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from shortlink_app.cache.strategies import CacheStrategy, redirect_key
from shortlink_app.config import settings
from shortlink_app.exceptions import (
    AliasAlreadyExists,
    AllocationExhausted,
    Forbidden,
    InvalidAlias,
    NotFound,
    ReservedAlias,
    StorageError,
)
from shortlink_app.liveness.strategies import LivenessStrategy
from shortlink_app.models.short_url import ShortURL
from shortlink_app.models.user import User
from shortlink_app.services.alias_validator import AliasStatus, AliasValidator
from shortlink_app.services.category_service import CategoryService
from shortlink_app.services.counter_service import CounterService
from shortlink_app.services.destination import DestinationNormalizer
from shortlink_app.services.endpoint_generator import EndpointGenerator, default_generator
from shortlink_app.services.scope import (
    CategoryScope,
    Scope,
    category_name,
    scope_for,
    scoped_endpoint,
)

logger = logging.getLogger(__name__)


def _raise_for_alias_status(status: AliasStatus, alias: str) -> None:
    if status is AliasStatus.INVALID:
        raise InvalidAlias(
            f"Invalid alias {alias!r}: use 1-{settings.alias_max_length} "
            f"letters, digits, '-' or '_'"
        )
    if status is AliasStatus.RESERVED:
        raise ReservedAlias()
    if status is AliasStatus.ALREADY_EXISTS:
        raise AliasAlreadyExists()


class URLService:
    """
    Allocation and resolution of short URLs.

    Cache and liveness strategies are injected, as are the generator and
    validator so tests can swap them. Every method handles one request;
    the service keeps no state between calls besides its session.

    A record insert/delete and its counter updates always commit together,
    so a failed counter update rolls the record back instead of leaving
    the counters drifted.
    """

    def __init__(
        self,
        db: Session,
        cache: Optional[CacheStrategy] = None,
        liveness: Optional[LivenessStrategy] = None,
        generator: Optional[EndpointGenerator] = None,
        validator: Optional[AliasValidator] = None,
    ):
        self.db = db
        self.cache = cache
        self.normalizer = DestinationNormalizer(liveness)
        self.generator = generator or default_generator()
        self.validator = validator or AliasValidator()
        self.counters = CounterService(db)
        self.categories = CategoryService(db, self.validator)

    async def create_short_url(
        self,
        owner: User,
        original_url: str,
        want_custom: bool = False,
        custom_alias: Optional[str] = None,
        category: Optional[str] = None,
    ) -> ShortURL:
        """Create a new short URL in the root scope or in one of the owner's categories

        Raises:
            Forbidden: owner is blacklisted
            NotFound: category missing or not owned by ``owner``
            InvalidDestination: URL has no host or failed the liveness check
            InvalidAlias / ReservedAlias / AliasAlreadyExists: custom alias rejected
            AllocationExhausted: no free random endpoint found
            StorageError: the record or counter write failed (nothing persisted)
        """
        if owner.blacklisted:
            raise Forbidden()

        if category is not None:
            self.categories.get_owned_category(owner, category)
        scope = scope_for(category)

        url = await self.normalizer.normalize(original_url)

        if want_custom:
            if not custom_alias:
                raise InvalidAlias("A custom alias is required")
            _raise_for_alias_status(
                self.validator.validate(custom_alias, scope, self.db), custom_alias
            )
            record = self._insert(owner, scope, custom_alias, url)
            if record is None:
                # Lost the race to a concurrent request for the same alias
                raise AliasAlreadyExists()
        else:
            # Pre-check collisions and insert-time conflicts share one retry budget
            record = None
            for _ in range(self.generator.max_retries):
                alias = self.generator.sample(scope, self.db)
                if alias is None:
                    continue
                record = self._insert(owner, scope, alias, url)
                if record is not None:
                    break
            if record is None:
                logger.error("Endpoint allocation exhausted after %d attempts", self.generator.max_retries)
                raise AllocationExhausted(
                    f"Could not generate unique short endpoint after "
                    f"{self.generator.max_retries} attempts"
                )

        if self.cache:
            await self.cache.set(
                redirect_key(record.short_endpoint), record.original_url, ttl=settings.cache_ttl
            )

        logger.info("Created %s -> %s for user %s", record.short_endpoint, url, record.owner_id)
        return record

    def _insert(self, owner: User, scope: Scope, alias: str, url: str) -> Optional[ShortURL]:
        """
        Insert the record and bump counters in one transaction.

        Returns None when the endpoint's unique index rejected the insert.
        """
        owner_id = owner.id
        category = category_name(scope)
        record = ShortURL(
            owner_id=owner_id,
            email=owner.email,
            name=owner.name,
            category=category,
            short_endpoint=scoped_endpoint(scope, alias),
            original_url=url,
        )

        try:
            self.db.add(record)
            self.db.flush()
        except IntegrityError:
            self.db.rollback()
            logger.info("Endpoint %s already taken at insert", record.short_endpoint)
            return None
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Failed to insert %s: %s", record.short_endpoint, e)
            raise StorageError("Failed to create. Please try again")

        try:
            self.counters.increment_user(owner_id)
            if category is not None:
                self.counters.increment_category(category)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Counter update failed for %s, record rolled back: %s", record.short_endpoint, e)
            raise StorageError("Failed to create. Please try again")

        self.db.refresh(record)
        return record

    async def list_urls(self, owner: User, category: Optional[str] = None) -> List[ShortURL]:
        """All of the owner's records in one scope, newest first (blacklisted included)"""
        return (
            self.db.query(ShortURL)
            .filter(ShortURL.owner_id == owner.id, self._category_filter(category))
            .order_by(ShortURL.id.desc())
            .all()
        )

    async def delete_url(self, url_id: int, owner: User, category: Optional[str] = None) -> bool:
        """
        Delete the record matching id, owner and category.

        The three-way match keeps a guessed id from deleting another user's
        (or another category's) record. Returns False if nothing matched.
        """
        criteria = (
            ShortURL.id == url_id,
            ShortURL.owner_id == owner.id,
            self._category_filter(category),
        )
        owner_id = owner.id

        endpoint = self.db.query(ShortURL.short_endpoint).filter(*criteria).scalar()
        if endpoint is None:
            return False

        try:
            result = self.db.execute(delete(ShortURL).where(*criteria))
            if result.rowcount == 0:
                # Deleted by a concurrent request between the read and the delete
                self.db.rollback()
                return False
            self.counters.decrement_user(owner_id)
            if category is not None:
                self.counters.decrement_category(category)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Failed to delete url %s: %s", url_id, e)
            raise StorageError("Failed to delete. Please try again")

        if self.cache:
            await self.cache.delete(redirect_key(endpoint))

        logger.info("Deleted url %s (%s)", url_id, endpoint)
        return True

    async def resolve(self, endpoint: str) -> Optional[str]:
        """
        Original URL for a scoped endpoint, or None.

        Cache-aside: only non-blacklisted records are ever cached, so a
        cache hit is always safe to redirect to. A miss is not an error.
        Does not count a hit; see ``record_hit``.
        """
        cache_key = redirect_key(endpoint)

        if self.cache:
            cached_url = await self.cache.get(cache_key)
            if cached_url:
                return cached_url

        original_url = self.db.query(ShortURL.original_url).filter(
            ShortURL.short_endpoint == endpoint,
            ShortURL.blacklisted.is_(False),
        ).scalar()

        if original_url is None:
            return None

        if self.cache:
            await self.cache.set(cache_key, original_url, ttl=settings.cache_ttl)

        return original_url

    async def record_hit(self, endpoint: str) -> None:
        """Atomically count a visit and stamp ``last_hit_at``"""
        try:
            result = self.db.execute(
                update(ShortURL)
                .where(ShortURL.short_endpoint == endpoint)
                .values(hits=ShortURL.hits + 1, last_hit_at=datetime.now(timezone.utc))
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Failed to record hit for %s: %s", endpoint, e)
            raise StorageError("Failed to record hit")

        if result.rowcount == 0:
            logger.warning("Hit for unknown endpoint %s", endpoint)

    async def list_all_urls(self) -> List[ShortURL]:
        """Every record in the store (admin view)"""
        return self.db.query(ShortURL).order_by(ShortURL.id.desc()).all()

    async def blacklist_url(self, url_id: int) -> ShortURL:
        record = await self._set_blacklisted(url_id, True)
        if self.cache:
            await self.cache.delete(redirect_key(record.short_endpoint))
        return record

    async def whitelist_url(self, url_id: int) -> ShortURL:
        return await self._set_blacklisted(url_id, False)

    async def _set_blacklisted(self, url_id: int, value: bool) -> ShortURL:
        record = self.db.get(ShortURL, url_id)
        if not record:
            raise NotFound(f"No short URL with id {url_id}")

        record.blacklisted = value
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Failed to update blacklist flag on %s: %s", url_id, e)
            raise StorageError("Failed to update. Please try again")

        self.db.refresh(record)
        logger.info("Set blacklisted=%s on %s", value, record.short_endpoint)
        return record

    async def update_category_alias(self, url_id: int, owner: User, new_alias: str) -> ShortURL:
        """
        Rename the alias of a category-scoped record; the category stays.

        Root records can't be renamed.
        """
        record = self.db.query(ShortURL).filter(
            ShortURL.id == url_id,
            ShortURL.owner_id == owner.id,
        ).first()
        if not record:
            raise NotFound(f"No short URL with id {url_id}")
        if record.category is None:
            raise InvalidAlias("Only category URLs can change their alias")

        scope = CategoryScope(record.category)
        _raise_for_alias_status(self.validator.validate(new_alias, scope, self.db), new_alias)

        old_endpoint = record.short_endpoint
        record.short_endpoint = scoped_endpoint(scope, new_alias)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise AliasAlreadyExists()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Failed to rename %s: %s", old_endpoint, e)
            raise StorageError("Failed to update. Please try again")

        self.db.refresh(record)
        if self.cache:
            await self.cache.delete(redirect_key(old_endpoint))

        logger.info("Renamed %s -> %s", old_endpoint, record.short_endpoint)
        return record

    @staticmethod
    def _category_filter(category: Optional[str]):
        if category is None:
            return ShortURL.category.is_(None)
        return ShortURL.category == category
