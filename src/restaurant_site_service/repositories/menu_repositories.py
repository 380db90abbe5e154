"""DynamoDB repository classes for the menu catalog.

These repositories provide create, read and update operations for menu
categories and menu items. Lookups by id return None when nothing matches;
DynamoDB failures are logged and raised as StoreError.
"""

import logging

from botocore.exceptions import BotoCoreError, ClientError

from restaurant_site_service.exceptions import StoreError
from restaurant_site_service.models.menu_models import MenuCategory, MenuItem
from restaurant_site_service.repositories.base_repository import (
    DynamoDBRepository,
    collect_pages,
)

logger = logging.getLogger(__name__)


class MenuCategoryRepository(DynamoDBRepository):
    """Repository for menu category records.

    Manages menu categories in DynamoDB with id as partition key.
    """

    def save_category(self, category: MenuCategory) -> None:
        """Save a menu category.

        Args:
            category: MenuCategory to save

        Raises:
            StoreError: If DynamoDB rejects the write
        """
        try:
            self.table.put_item(Item=category.to_dynamodb_item())

        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to save menu category {category.id}: {e}")
            raise StoreError(f"Failed to save menu category {category.id}") from e

    def get_category(self, category_id: int) -> MenuCategory | None:
        """Retrieve a menu category by id.

        Args:
            category_id: Category identifier

        Returns:
            MenuCategory if found, None otherwise

        Raises:
            StoreError: If DynamoDB rejects the read
        """
        try:
            response = self.table.get_item(Key={"id": category_id})

        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to get menu category {category_id}: {e}")
            raise StoreError(f"Failed to get menu category {category_id}") from e

        if "Item" not in response:
            return None

        return MenuCategory.from_dynamodb_item(response["Item"])

    def list_active_categories(self) -> list[MenuCategory]:
        """List every active category, in no particular order.

        Returns:
            list: Active MenuCategory objects (empty list if none found)

        Raises:
            StoreError: If DynamoDB rejects the scan
        """
        try:
            items = collect_pages(
                self.table.scan,
                FilterExpression="is_active = :active",
                ExpressionAttributeValues={":active": True},
            )

        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to list active menu categories: {e}")
            raise StoreError("Failed to list active menu categories") from e

        return [MenuCategory.from_dynamodb_item(item) for item in items]


class MenuItemRepository(DynamoDBRepository):
    """Repository for menu item records.

    Manages menu items in DynamoDB with id as partition key. Items are queried
    by category through the ``category_id-index`` Global Secondary Index.
    """

    CATEGORY_INDEX = "category_id-index"

    def save_item(self, item: MenuItem) -> None:
        """Save or replace a menu item.

        Args:
            item: MenuItem to save

        Raises:
            StoreError: If DynamoDB rejects the write
        """
        try:
            self.table.put_item(Item=item.to_dynamodb_item())

        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to save menu item {item.id}: {e}")
            raise StoreError(f"Failed to save menu item {item.id}") from e

    def get_item(self, item_id: int) -> MenuItem | None:
        """Retrieve a menu item by id.

        Args:
            item_id: Menu item identifier

        Returns:
            MenuItem if found, None otherwise

        Raises:
            StoreError: If DynamoDB rejects the read
        """
        try:
            response = self.table.get_item(Key={"id": item_id})

        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to get menu item {item_id}: {e}")
            raise StoreError(f"Failed to get menu item {item_id}") from e

        if "Item" not in response:
            return None

        return MenuItem.from_dynamodb_item(response["Item"])

    def list_available_items_for_category(self, category_id: int) -> list[MenuItem]:
        """List available items in a category, in no particular order.

        Args:
            category_id: Category identifier

        Returns:
            list: Available MenuItem objects (empty list if none found)

        Raises:
            StoreError: If DynamoDB rejects the query
        """
        try:
            items = collect_pages(
                self.table.query,
                IndexName=self.CATEGORY_INDEX,
                KeyConditionExpression="category_id = :cid",
                FilterExpression="is_available = :available",
                ExpressionAttributeValues={":cid": category_id, ":available": True},
            )

        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to list menu items for category {category_id}: {e}")
            raise StoreError(f"Failed to list menu items for category {category_id}") from e

        return [MenuItem.from_dynamodb_item(item) for item in items]

    def list_chefs_specials(self) -> list[MenuItem]:
        """List every item flagged as a chef's special, available or not.

        Returns:
            list: MenuItem objects (empty list if none found)

        Raises:
            StoreError: If DynamoDB rejects the scan
        """
        try:
            items = collect_pages(
                self.table.scan,
                FilterExpression="is_chefs_special = :special",
                ExpressionAttributeValues={":special": True},
            )

        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to list chef's specials: {e}")
            raise StoreError("Failed to list chef's specials") from e

        return [MenuItem.from_dynamodb_item(item) for item in items]
