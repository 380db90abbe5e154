"""Shared pytest fixtures and configuration for all tests."""

import os
from datetime import UTC, date, datetime, timedelta
from decimal import Decimal

import pytest

# Keep module-level app factories from reaching for AWS during collection
os.environ.setdefault("ENVIRONMENT", "test")

from restaurant_site_service.models.menu_models import MenuCategory, MenuItem  # noqa: E402
from restaurant_site_service.models.reservation_models import (  # noqa: E402
    Reservation,
    ReservationStatusEnum,
)


@pytest.fixture
def now() -> datetime:
    """Fixture providing a fixed creation timestamp."""
    return datetime(2024, 2, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def tomorrow() -> date:
    """Fixture providing a date that is always bookable."""
    return date.today() + timedelta(days=1)


@pytest.fixture
def make_category(now: datetime):
    """Factory fixture for menu categories."""

    def _make(category_id: int = 1, **overrides) -> MenuCategory:
        data = {
            "id": category_id,
            "name": f"Category {category_id}",
            "description": None,
            "display_order": 0,
            "is_active": True,
            "created_at": now,
        }
        data.update(overrides)
        return MenuCategory(**data)

    return _make


@pytest.fixture
def make_item(now: datetime):
    """Factory fixture for menu items."""

    def _make(item_id: int = 1, **overrides) -> MenuItem:
        data = {
            "id": item_id,
            "category_id": 1,
            "name": f"Dish {item_id}",
            "description": "Seasonal plate",
            "ingredients": "Tomato, basil",
            "preparation_info": "Slow roasted",
            "price": Decimal("24.50"),
            "image_url": None,
            "is_chefs_special": False,
            "is_available": True,
            "dietary_info": None,
            "display_order": 0,
            "created_at": now,
            "updated_at": now,
        }
        data.update(overrides)
        return MenuItem(**data)

    return _make


@pytest.fixture
def make_reservation(now: datetime):
    """Factory fixture for reservations."""

    def _make(reservation_id: int = 1, **overrides) -> Reservation:
        data = {
            "id": reservation_id,
            "customer_name": "Jane Smith",
            "customer_email": "jane@example.com",
            "customer_phone": "0987654321",
            "party_size": 2,
            "reservation_date": date(2024, 2, 15),
            "reservation_time": "19:00",
            "special_requests": None,
            "status": ReservationStatusEnum.CONFIRMED,
            "created_at": now,
            "updated_at": now,
        }
        data.update(overrides)
        return Reservation(**data)

    return _make


@pytest.fixture
def reservation_payload(tomorrow: date) -> dict:
    """Fixture providing a valid booking request body."""
    return {
        "customer_name": "John Doe",
        "customer_email": "john@example.com",
        "customer_phone": "1234567890",
        "party_size": 4,
        "reservation_date": tomorrow.isoformat(),
        "reservation_time": "19:00",
        "special_requests": "Window seat",
    }
