"""Main application entry point for the restaurant site service.

This module provides the FastAPI application factory and configuration
for running the service locally or in production.
"""

import logging
import os
from typing import Any

import boto3
from fastapi import FastAPI

from restaurant_site_service.handlers.api_handler import create_app
from restaurant_site_service.models.reservation_models import ReservationSettings
from restaurant_site_service.observability import configure_logging, setup_observability
from restaurant_site_service.repositories.counter_repository import IdCounterRepository
from restaurant_site_service.repositories.menu_repositories import (
    MenuCategoryRepository,
    MenuItemRepository,
)
from restaurant_site_service.repositories.reservation_repositories import ReservationRepository
from restaurant_site_service.services.catalog_service import CatalogService
from restaurant_site_service.services.reservation_service import ReservationService

logger = logging.getLogger(__name__)


def get_dynamodb_resource() -> Any:
    """Create DynamoDB resource with appropriate configuration.

    Returns:
        Boto3 DynamoDB resource configured for environment
    """
    endpoint_url = os.getenv("DYNAMODB_ENDPOINT")
    region = os.getenv("AWS_REGION", "us-east-1")

    if endpoint_url:
        # Local DynamoDB
        logger.info(f"Using local DynamoDB at {endpoint_url}")
        return boto3.resource(
            "dynamodb",
            endpoint_url=endpoint_url,
            region_name=region,
            aws_access_key_id=os.getenv("AWS_ACCESS_KEY_ID"),
            aws_secret_access_key=os.getenv("AWS_SECRET_ACCESS_KEY"),
        )

    logger.info(f"Using AWS DynamoDB in region {region}")
    return boto3.resource("dynamodb", region_name=region)


def create_services(dynamodb_resource: Any) -> tuple[CatalogService, ReservationService]:
    """Wire repositories and services against a DynamoDB resource.

    Args:
        dynamodb_resource: Boto3 DynamoDB resource

    Returns:
        Tuple of (catalog_service, reservation_service)
    """
    categories_table = os.getenv("DYNAMODB_CATEGORIES_TABLE", "restaurant-menu-categories")
    items_table = os.getenv("DYNAMODB_ITEMS_TABLE", "restaurant-menu-items")
    reservations_table = os.getenv("DYNAMODB_RESERVATIONS_TABLE", "restaurant-reservations")
    counters_table = os.getenv("DYNAMODB_COUNTERS_TABLE", "restaurant-counters")

    id_counter = IdCounterRepository(dynamodb_resource=dynamodb_resource, table_name=counters_table)

    catalog_service = CatalogService(
        category_repository=MenuCategoryRepository(
            dynamodb_resource=dynamodb_resource, table_name=categories_table
        ),
        item_repository=MenuItemRepository(
            dynamodb_resource=dynamodb_resource, table_name=items_table
        ),
        id_counter=id_counter,
    )

    settings = ReservationSettings.from_env()
    reservation_service = ReservationService(
        reservation_repository=ReservationRepository(
            dynamodb_resource=dynamodb_resource, table_name=reservations_table
        ),
        id_counter=id_counter,
        settings=settings,
    )

    logger.info(
        f"Services configured - tables: {categories_table}, {items_table}, "
        f"{reservations_table}, {counters_table}; capacity {settings.total_capacity} "
        f"across {len(settings.time_slots)} slots"
    )
    return catalog_service, reservation_service


def create_application() -> FastAPI:
    """Create and configure the FastAPI application with all dependencies.

    Returns:
        Configured FastAPI application instance
    """
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))

    logger.info("Initializing restaurant site service...")

    catalog_service, reservation_service = create_services(get_dynamodb_resource())

    app = create_app(catalog_service=catalog_service, reservation_service=reservation_service)
    setup_observability(app)

    logger.info("Restaurant site service initialized successfully")
    return app


# Only build the real application outside of test runs so that importing this
# module during test collection does not reach for AWS
if os.getenv("ENVIRONMENT") != "test":  # noqa: SIM108
    app = create_application()
else:
    app = FastAPI()


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", "8000"))
    host = os.getenv("HOST", "0.0.0.0")

    logger.info(f"Starting development server on {host}:{port}")
    logger.info(f"API documentation available at http://{host}:{port}/docs")

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=True,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )
