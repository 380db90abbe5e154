"""Unit tests for Lambda dependency factory."""

import os
from unittest.mock import MagicMock, Mock, patch

import pytest

import lambda_dependencies as deps
from restaurant_site_service.services.catalog_service import CatalogService
from restaurant_site_service.services.reservation_service import ReservationService


@pytest.fixture(autouse=True)
def clear_caches():
    """Clear cached dependencies around each test."""
    deps._dynamodb_resource = None
    deps._id_counter = None
    deps._catalog_service = None
    deps._reservation_service = None
    deps._fastapi_app = None
    yield
    deps._dynamodb_resource = None
    deps._id_counter = None
    deps._catalog_service = None
    deps._reservation_service = None
    deps._fastapi_app = None


@pytest.mark.unit
class TestGetDynamoDBResource:
    """Tests for get_dynamodb_resource function."""

    @patch.dict(os.environ, {"AWS_REGION": "us-west-2"}, clear=True)
    @patch("lambda_dependencies.boto3.resource")
    def test_creates_aws_resource_when_no_endpoint(self, mock_boto3_resource: Mock) -> None:
        """Test that AWS DynamoDB resource is created when no local endpoint configured."""
        result = deps.get_dynamodb_resource()

        mock_boto3_resource.assert_called_once_with("dynamodb", region_name="us-west-2")
        assert result == mock_boto3_resource.return_value

    @patch.dict(
        os.environ,
        {
            "DYNAMODB_ENDPOINT": "http://localhost:8000",
            "AWS_ACCESS_KEY_ID": "test-key",
            "AWS_SECRET_ACCESS_KEY": "test-secret",
        },
        clear=True,
    )
    @patch("lambda_dependencies.boto3.resource")
    def test_creates_local_resource_when_endpoint_provided(self, mock_boto3_resource: Mock) -> None:
        """Test that local DynamoDB resource is created when endpoint configured."""
        deps.get_dynamodb_resource()

        mock_boto3_resource.assert_called_once_with(
            "dynamodb",
            endpoint_url="http://localhost:8000",
            region_name="us-east-1",
            aws_access_key_id="test-key",
            aws_secret_access_key="test-secret",
        )

    @patch.dict(os.environ, {}, clear=True)
    @patch("lambda_dependencies.boto3.resource")
    def test_resource_is_cached(self, mock_boto3_resource: Mock) -> None:
        """Test that the resource is created once per container."""
        first = deps.get_dynamodb_resource()
        second = deps.get_dynamodb_resource()

        assert first is second
        mock_boto3_resource.assert_called_once()


@pytest.mark.unit
class TestServiceFactories:
    """Tests for the cached service factories."""

    @patch.dict(os.environ, {"RESTAURANT_CAPACITY": "60"}, clear=True)
    @patch("lambda_dependencies.boto3.resource")
    def test_services_share_counter_and_are_cached(self, mock_boto3_resource: Mock) -> None:
        """Test that both services are built once and share the id counter."""
        catalog_service = deps.get_catalog_service()
        reservation_service = deps.get_reservation_service()

        assert isinstance(catalog_service, CatalogService)
        assert isinstance(reservation_service, ReservationService)
        assert catalog_service.id_counter is reservation_service.id_counter
        assert reservation_service.settings.total_capacity == 60
        assert deps.get_catalog_service() is catalog_service
        assert deps.get_reservation_service() is reservation_service

    @patch.dict(os.environ, {"ENVIRONMENT": "test"}, clear=True)
    @patch("lambda_dependencies.setup_observability")
    @patch("lambda_dependencies.boto3.resource")
    def test_fastapi_app_is_cached(
        self, mock_boto3_resource: Mock, mock_setup_observability: Mock
    ) -> None:
        """Test that the FastAPI app is created and instrumented once."""
        app = deps.get_fastapi_app()

        assert deps.get_fastapi_app() is app
        mock_setup_observability.assert_called_once_with(app)


@pytest.mark.unit
class TestInitializeLambdaEnvironment:
    """Tests for initialize_lambda_environment function."""

    @patch.dict(os.environ, {"LOG_LEVEL": "WARNING"}, clear=True)
    @patch("lambda_dependencies.configure_logging")
    def test_configures_logging(self, mock_configure_logging: MagicMock) -> None:
        """Test that logging is configured from LOG_LEVEL."""
        deps.initialize_lambda_environment()

        mock_configure_logging.assert_called_once_with("WARNING")
