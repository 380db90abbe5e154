"""Exceptions raised by the restaurant site service."""


class RestaurantServiceError(Exception):
    """Base class for service errors."""


class CategoryNotFoundError(RestaurantServiceError):
    """A menu item references a category that does not exist."""

    def __init__(self, category_id: int) -> None:
        self.category_id = category_id
        super().__init__(f"Menu category with id {category_id} does not exist")


class StoreError(RestaurantServiceError):
    """The record store failed to complete an operation."""
