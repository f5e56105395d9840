import logging
from typing import List

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from shortlink_app.exceptions import (
    AliasAlreadyExists,
    Forbidden,
    InvalidAlias,
    NotFound,
    ReservedAlias,
    StorageError,
)
from shortlink_app.models.category import Category
from shortlink_app.models.user import User
from shortlink_app.services.alias_validator import AliasStatus, AliasValidator

logger = logging.getLogger(__name__)


class CategoryService:
    """
    Categories ("suborgs") owned by a single user.

    Category names share the alias rules, since they form the first path
    segment of every endpoint inside them.
    """

    def __init__(self, db: Session, validator: AliasValidator = None):
        self.db = db
        self.validator = validator or AliasValidator()

    def create_category(self, owner: User, name: str) -> Category:
        if owner.blacklisted:
            raise Forbidden()

        status = self.validator.check_format(name)
        if status is AliasStatus.INVALID:
            raise InvalidAlias(f"Invalid category name: {name!r}")
        if status is AliasStatus.RESERVED:
            raise ReservedAlias(f"The category name '{name}' is reserved")

        if self.db.query(Category.id).filter(Category.name == name).first():
            raise AliasAlreadyExists(f"The category '{name}' already exists")

        category = Category(name=name, owner_id=owner.id, url_count=0)
        try:
            self.db.add(category)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise AliasAlreadyExists(f"The category '{name}' already exists")
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Failed to create category %s: %s", name, e)
            raise StorageError("Failed to create. Please try again")

        self.db.refresh(category)
        logger.info("Created category %s for user %s", name, category.owner_id)
        return category

    def list_categories(self, owner: User) -> List[Category]:
        return (
            self.db.query(Category)
            .filter(Category.owner_id == owner.id)
            .order_by(Category.name)
            .all()
        )

    def get_owned_category(self, owner: User, name: str) -> Category:
        """Raises NotFound for a missing category or one owned by someone else"""
        category = self.db.query(Category).filter(
            Category.name == name,
            Category.owner_id == owner.id,
        ).first()
        if not category:
            raise NotFound(f"No category named '{name}'")
        return category
