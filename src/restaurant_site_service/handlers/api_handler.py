"""FastAPI application exposing the menu and reservation endpoints."""

import logging
from datetime import UTC, date, datetime

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from restaurant_site_service.exceptions import CategoryNotFoundError, StoreError
from restaurant_site_service.models.menu_models import (
    MenuCategory,
    MenuCategoryCreate,
    MenuItem,
    MenuItemCreate,
    MenuItemUpdate,
)
from restaurant_site_service.models.reservation_models import (
    Reservation,
    ReservationCreate,
    ReservationStatusUpdate,
    TimeSlot,
)
from restaurant_site_service.services.catalog_service import CatalogService
from restaurant_site_service.services.reservation_service import ReservationService

logger = logging.getLogger(__name__)

STORE_FAILURE_MESSAGE = "Service temporarily unavailable, please try again"


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    timestamp: datetime


def create_app(
    catalog_service: CatalogService,
    reservation_service: ReservationService,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        catalog_service: Service for the menu catalog
        reservation_service: Service for reservations and availability

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Restaurant Site API",
        description="Menu browsing, chef's specials, and table reservations",
        version="1.0.0",
    )

    # Store services in app state for access in route handlers
    app.state.catalog_service = catalog_service
    app.state.reservation_service = reservation_service

    @app.exception_handler(CategoryNotFoundError)
    async def handle_missing_category(
        request: Request, exc: CategoryNotFoundError
    ) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(StoreError)
    async def handle_store_failure(request: Request, exc: StoreError) -> JSONResponse:
        logger.exception(f"Store failure on {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=503, content={"detail": STORE_FAILURE_MESSAGE})

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check() -> HealthResponse:
        """Health check endpoint.

        Returns:
            Static status token with the current server time
        """
        return HealthResponse(status="ok", timestamp=datetime.now(UTC))

    @app.get("/categories", response_model=list[MenuCategory], tags=["Menu"])
    async def list_active_categories() -> list[MenuCategory]:
        """List active menu categories in display order."""
        categories: list[MenuCategory] = await app.state.catalog_service.list_active_categories()
        return categories

    @app.post("/categories", response_model=MenuCategory, status_code=201, tags=["Menu"])
    async def create_menu_category(category_input: MenuCategoryCreate) -> MenuCategory:
        """Create a menu category."""
        category: MenuCategory = await app.state.catalog_service.create_menu_category(
            category_input
        )
        return category

    @app.get(
        "/categories/{category_id}/items",
        response_model=list[MenuItem],
        tags=["Menu"],
    )
    async def list_items_by_category(category_id: int) -> list[MenuItem]:
        """List available items in a category in display order.

        Args:
            category_id: The category to list
        """
        items: list[MenuItem] = await app.state.catalog_service.list_items_by_category(
            category_id
        )
        return items

    @app.get("/items/{item_id}", response_model=MenuItem, tags=["Menu"])
    async def get_item_details(item_id: int) -> MenuItem:
        """Get a single menu item.

        Args:
            item_id: The menu item to fetch

        Raises:
            HTTPException: If the item does not exist
        """
        item = await app.state.catalog_service.get_item_details(item_id)
        if item is None:
            raise HTTPException(status_code=404, detail=f"Menu item {item_id} not found")
        return item

    @app.post("/items", response_model=MenuItem, status_code=201, tags=["Menu"])
    async def create_menu_item(item_input: MenuItemCreate) -> MenuItem:
        """Create a menu item in an existing category."""
        item: MenuItem = await app.state.catalog_service.create_menu_item(item_input)
        return item

    @app.patch("/items/{item_id}", response_model=MenuItem, tags=["Menu"])
    async def update_menu_item(item_id: int, update: MenuItemUpdate) -> MenuItem:
        """Update the supplied fields of a menu item.

        Args:
            item_id: The menu item to update

        Raises:
            HTTPException: If the item does not exist
        """
        item = await app.state.catalog_service.update_menu_item(item_id, update)
        if item is None:
            raise HTTPException(status_code=404, detail=f"Menu item {item_id} not found")
        return item

    @app.get("/chefs-specials", response_model=list[MenuItem], tags=["Menu"])
    async def list_chefs_specials() -> list[MenuItem]:
        """List chef's specials from active categories."""
        specials: list[MenuItem] = await app.state.catalog_service.list_chefs_specials()
        return specials

    @app.post("/reservations", response_model=Reservation, status_code=201, tags=["Reservations"])
    async def create_reservation(reservation_input: ReservationCreate) -> Reservation:
        """Book a table. New reservations start as pending."""
        reservation: Reservation = await app.state.reservation_service.create_reservation(
            reservation_input
        )
        return reservation

    @app.get("/reservations", response_model=list[Reservation], tags=["Reservations"])
    async def list_reservations_for_date(
        reservation_date: date = Query(..., alias="date"),
    ) -> list[Reservation]:
        """List all reservations on a date, earliest first.

        Args:
            reservation_date: Day to list, as YYYY-MM-DD
        """
        reservations: list[Reservation] = (
            await app.state.reservation_service.list_reservations_for_date(reservation_date)
        )
        return reservations

    @app.get(
        "/reservations/availability",
        response_model=list[TimeSlot],
        tags=["Reservations"],
    )
    async def get_available_time_slots(
        reservation_date: date = Query(..., alias="date"),
    ) -> list[TimeSlot]:
        """Report remaining seats for each reservation slot on a date.

        Args:
            reservation_date: Day to report on, as YYYY-MM-DD
        """
        slots: list[TimeSlot] = await app.state.reservation_service.get_available_time_slots(
            reservation_date
        )
        return slots

    @app.patch(
        "/reservations/{reservation_id}/status",
        response_model=Reservation,
        tags=["Reservations"],
    )
    async def update_reservation_status(
        reservation_id: int,
        status_update: ReservationStatusUpdate,
    ) -> Reservation:
        """Change a reservation's status.

        Args:
            reservation_id: The reservation to update

        Raises:
            HTTPException: If the reservation does not exist
        """
        reservation = await app.state.reservation_service.update_reservation_status(
            reservation_id, status_update.status
        )
        if reservation is None:
            raise HTTPException(
                status_code=404, detail=f"Reservation {reservation_id} not found"
            )
        return reservation

    return app
