"""Category domain service."""

from decimal import Decimal
from typing import Optional

import structlog

from finledger.database.base import Database
from finledger.domain.entities import Category as CategoryEntity
from finledger.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    category_not_found,
    category_name_not_found,
)
from finledger.domain.defaults import DEFAULT_CATEGORIES
from finledger.utils.money import quantize_money

logger = structlog.get_logger(__name__)


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(
        self, name: str, user_id: Optional[str] = None, budget: Optional[Decimal] = None
    ) -> int:
        """Create a category.

        Args:
            name: Category name
            user_id: Owner, or None for a global category
            budget: Optional monthly budget limit

        Returns:
            Category ID

        Raises:
            ValidationError: If the name is blank or the budget negative
            ConflictError: If the name is already used in the same owner scope
        """
        name = name.strip()
        if not name:
            raise ValidationError("Category name cannot be empty")
        if self.db.get_category_by_name(name, user_id=user_id) is not None:
            scope = "global categories" if user_id is None else f"user '{user_id}'"
            raise ConflictError(f"Category '{name}' already exists for {scope}")

        return self.db.create_category(name=name, user_id=user_id, budget=self._normalize_budget(budget))

    def get_category(self, category_id: int) -> Optional[CategoryEntity]:
        """Get category by ID."""
        return self.db.get_category(category_id)

    def find_category(self, name: str, user_id: str) -> Optional[CategoryEntity]:
        """Find a category visible to the user, preferring the user's own over a global one."""
        own = self.db.get_category_by_name(name, user_id=user_id)
        if own is not None:
            return own
        return self.db.get_category_by_name(name, user_id=None)

    def require_category(self, name: str, user_id: str) -> CategoryEntity:
        """Like find_category, but raise NotFoundError when missing."""
        category = self.find_category(name, user_id)
        if category is None:
            raise NotFoundError(category_name_not_found(name))
        return category

    def list_categories(self, user_id: str) -> list[CategoryEntity]:
        """List the categories visible to a user."""
        return self.db.list_categories(user_id)

    def set_budget(self, user_id: str, category_id: int, budget: Optional[Decimal]) -> None:
        """Set or clear (None) a category's monthly budget.

        Global categories are shared, so only categories owned by the user can
        carry a budget.

        Raises:
            NotFoundError: If the category does not exist
            ValidationError: If the category is global or the budget negative
        """
        category = self.db.get_category(category_id)
        if category is None or (category.user_id is not None and category.user_id != user_id):
            raise NotFoundError(category_not_found(category_id))
        if category.is_global:
            raise ValidationError(
                f"Category '{category.name}' is shared; create your own category to budget it"
            )
        self.db.update_category_budget(category_id, self._normalize_budget(budget))
        logger.info("category.budget_set", category_id=category_id, budget=str(budget))

    def seed_defaults(self) -> list[str]:
        """Create any missing default global categories. Returns the names created."""
        created = []
        for name in DEFAULT_CATEGORIES:
            if self.db.get_category_by_name(name, user_id=None) is None:
                self.db.create_category(name=name, user_id=None)
                created.append(name)
        return created

    @staticmethod
    def _normalize_budget(budget: Optional[Decimal]) -> Optional[Decimal]:
        if budget is None:
            return None
        if budget < 0:
            raise ValidationError(f"Budget cannot be negative (got {budget})")
        return quantize_money(budget)
