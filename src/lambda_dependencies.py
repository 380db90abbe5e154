"""Shared dependency factory for the Lambda handler.

Dependencies are created once per Lambda container and reused across
invocations to keep warm starts fast.
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

# Module-level caches for Lambda container reuse
_dynamodb_resource: Any | None = None
_id_counter: IdCounterRepository | None = None
_catalog_service: CatalogService | None = None
_reservation_service: ReservationService | None = None
_fastapi_app: FastAPI | None = None


def get_dynamodb_resource() -> Any:
    """Create or retrieve cached DynamoDB resource.

    Returns:
        Boto3 DynamoDB resource configured for environment
    """
    global _dynamodb_resource

    if _dynamodb_resource is not None:
        return _dynamodb_resource

    endpoint_url = os.getenv("DYNAMODB_ENDPOINT")
    region = os.getenv("AWS_REGION", "us-east-1")

    if endpoint_url:
        logger.info(f"Using local DynamoDB at {endpoint_url}")
        _dynamodb_resource = boto3.resource(
            "dynamodb",
            endpoint_url=endpoint_url,
            region_name=region,
            aws_access_key_id=os.getenv("AWS_ACCESS_KEY_ID"),
            aws_secret_access_key=os.getenv("AWS_SECRET_ACCESS_KEY"),
        )
    else:
        logger.info(f"Using AWS DynamoDB in region {region}")
        _dynamodb_resource = boto3.resource("dynamodb", region_name=region)

    return _dynamodb_resource


def get_id_counter() -> IdCounterRepository:
    """Create or retrieve the cached id counter repository."""
    global _id_counter

    if _id_counter is not None:
        return _id_counter

    _id_counter = IdCounterRepository(
        dynamodb_resource=get_dynamodb_resource(),
        table_name=os.getenv("DYNAMODB_COUNTERS_TABLE", "restaurant-counters"),
    )
    return _id_counter


def get_catalog_service() -> CatalogService:
    """Create or retrieve cached catalog service.

    Returns:
        Configured CatalogService instance
    """
    global _catalog_service

    if _catalog_service is not None:
        return _catalog_service

    dynamodb_resource = get_dynamodb_resource()

    _catalog_service = CatalogService(
        category_repository=MenuCategoryRepository(
            dynamodb_resource=dynamodb_resource,
            table_name=os.getenv("DYNAMODB_CATEGORIES_TABLE", "restaurant-menu-categories"),
        ),
        item_repository=MenuItemRepository(
            dynamodb_resource=dynamodb_resource,
            table_name=os.getenv("DYNAMODB_ITEMS_TABLE", "restaurant-menu-items"),
        ),
        id_counter=get_id_counter(),
    )

    logger.info("Catalog service initialized")
    return _catalog_service


def get_reservation_service() -> ReservationService:
    """Create or retrieve cached reservation service.

    Returns:
        Configured ReservationService instance
    """
    global _reservation_service

    if _reservation_service is not None:
        return _reservation_service

    _reservation_service = ReservationService(
        reservation_repository=ReservationRepository(
            dynamodb_resource=get_dynamodb_resource(),
            table_name=os.getenv("DYNAMODB_RESERVATIONS_TABLE", "restaurant-reservations"),
        ),
        id_counter=get_id_counter(),
        settings=ReservationSettings.from_env(),
    )

    logger.info("Reservation service initialized")
    return _reservation_service


def get_fastapi_app() -> FastAPI:
    """Create or retrieve cached FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    global _fastapi_app

    if _fastapi_app is not None:
        return _fastapi_app

    _fastapi_app = create_app(
        catalog_service=get_catalog_service(),
        reservation_service=get_reservation_service(),
    )
    setup_observability(_fastapi_app)

    logger.info("FastAPI application initialized")
    return _fastapi_app


def initialize_lambda_environment() -> None:
    """Initialize Lambda environment with structured logging.

    Should be called once during Lambda cold start.
    """
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))

    logger.info("Lambda environment initialized")
