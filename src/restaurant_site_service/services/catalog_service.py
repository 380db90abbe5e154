"""Catalog service for browsing and maintaining the restaurant menu."""

import logging
from datetime import UTC, datetime

from restaurant_site_service.exceptions import CategoryNotFoundError
from restaurant_site_service.models.menu_models import (
    MenuCategory,
    MenuCategoryCreate,
    MenuItem,
    MenuItemCreate,
    MenuItemUpdate,
)
from restaurant_site_service.observability import traced
from restaurant_site_service.repositories.counter_repository import IdCounterRepository
from restaurant_site_service.repositories.menu_repositories import (
    MenuCategoryRepository,
    MenuItemRepository,
)

logger = logging.getLogger(__name__)

CATEGORY_COUNTER = "menu_categories"
ITEM_COUNTER = "menu_items"


class CatalogService:
    """Service for menu categories, menu items, and the chef's specials.

    Reads are projections over the stored catalog: filtering and ordering
    happen here so the display rules live in one place. Writes check that an
    item's category exists before anything is stored.
    """

    def __init__(
        self,
        category_repository: MenuCategoryRepository,
        item_repository: MenuItemRepository,
        id_counter: IdCounterRepository,
    ) -> None:
        """Initialize the CatalogService.

        Args:
            category_repository: Repository for menu categories
            item_repository: Repository for menu items
            id_counter: Allocator for new record ids
        """
        self.category_repository = category_repository
        self.item_repository = item_repository
        self.id_counter = id_counter

    @traced("catalog.list_active_categories")
    async def list_active_categories(self) -> list[MenuCategory]:
        """List active categories by ascending display order.

        Returns:
            List of active categories, ties broken by id; empty if none exist
        """
        categories = self.category_repository.list_active_categories()
        return sorted(categories, key=lambda c: (c.display_order, c.id))

    @traced("catalog.create_menu_category")
    async def create_menu_category(self, category_input: MenuCategoryCreate) -> MenuCategory:
        """Create a new active menu category.

        Args:
            category_input: Validated category fields

        Returns:
            The stored category
        """
        category = MenuCategory(
            id=self.id_counter.next_id(CATEGORY_COUNTER),
            name=category_input.name,
            description=category_input.description,
            display_order=category_input.display_order,
            is_active=True,
            created_at=datetime.now(UTC),
        )
        self.category_repository.save_category(category)

        logger.info(f"Created menu category {category.id} ({category.name})")
        return category

    @traced("catalog.list_items_by_category")
    async def list_items_by_category(self, category_id: int) -> list[MenuItem]:
        """List available items in a category by ascending display order.

        The category is not looked up first, so an unknown id simply yields
        no items.

        Args:
            category_id: Category to list

        Returns:
            Available items in the category; empty if none match
        """
        items = self.item_repository.list_available_items_for_category(category_id)
        return sorted(items, key=lambda i: (i.display_order, i.id))

    @traced("catalog.get_item_details")
    async def get_item_details(self, item_id: int) -> MenuItem | None:
        """Get a single menu item, whether or not it is available.

        Args:
            item_id: Menu item identifier

        Returns:
            MenuItem if found, None otherwise
        """
        return self.item_repository.get_item(item_id)

    @traced("catalog.create_menu_item")
    async def create_menu_item(self, item_input: MenuItemCreate) -> MenuItem:
        """Create a menu item in an existing category.

        Args:
            item_input: Validated item fields

        Returns:
            The stored item

        Raises:
            CategoryNotFoundError: If the category does not exist; nothing is written
        """
        self._require_category(item_input.category_id)

        now = datetime.now(UTC)
        item = MenuItem(
            id=self.id_counter.next_id(ITEM_COUNTER),
            category_id=item_input.category_id,
            name=item_input.name,
            description=item_input.description,
            ingredients=item_input.ingredients,
            preparation_info=item_input.preparation_info,
            price=item_input.price,
            image_url=item_input.image_url,
            is_chefs_special=item_input.is_chefs_special,
            is_available=True,
            dietary_info=item_input.dietary_info,
            display_order=item_input.display_order,
            created_at=now,
            updated_at=now,
        )
        self.item_repository.save_item(item)

        logger.info(f"Created menu item {item.id} ({item.name}) in category {item.category_id}")
        return item

    @traced("catalog.update_menu_item")
    async def update_menu_item(self, item_id: int, update: MenuItemUpdate) -> MenuItem | None:
        """Apply a partial update to a menu item.

        Only fields present in ``update`` replace stored values. Moving the
        item to another category requires that category to exist.

        Args:
            item_id: Menu item identifier
            update: Sparse set of new field values

        Returns:
            The updated item, or None if no item has this id

        Raises:
            CategoryNotFoundError: If the new category does not exist; nothing is written
        """
        existing = self.item_repository.get_item(item_id)
        if existing is None:
            return None

        changes = update.changes()
        if "category_id" in changes:
            self._require_category(changes["category_id"])

        merged = existing.model_dump(exclude={"dietary_tags"})
        merged.update(changes)
        merged["updated_at"] = datetime.now(UTC)
        item = MenuItem.model_validate(merged)

        self.item_repository.save_item(item)

        logger.info(f"Updated menu item {item_id}: {', '.join(sorted(changes)) or 'no fields'}")
        return item

    @traced("catalog.list_chefs_specials")
    async def list_chefs_specials(self) -> list[MenuItem]:
        """List chef's specials whose category is active.

        Ordered by descending display order, then newest first. Unavailable
        specials are included.

        Returns:
            List of chef's specials; empty if none match
        """
        specials = self.item_repository.list_chefs_specials()
        if not specials:
            return []

        active_ids = {c.id for c in self.category_repository.list_active_categories()}
        visible = [item for item in specials if item.category_id in active_ids]
        return sorted(visible, key=lambda i: (i.display_order, i.created_at), reverse=True)

    def _require_category(self, category_id: int) -> None:
        """Raise CategoryNotFoundError unless the category exists.

        Args:
            category_id: Category identifier to check
        """
        if self.category_repository.get_category(category_id) is None:
            logger.warning(f"Rejected reference to missing menu category {category_id}")
            raise CategoryNotFoundError(category_id)
