"""Shared DynamoDB plumbing for the record store repositories.

Repositories return None for records that do not exist and raise StoreError
when DynamoDB itself fails, so callers can tell "absent" from "broken".
"""

import logging
from collections.abc import Callable
from typing import Any

from mypy_boto3_dynamodb.service_resource import DynamoDBServiceResource, Table

logger = logging.getLogger(__name__)


class DynamoDBRepository:
    """Base class holding the table handle for a single DynamoDB table."""

    def __init__(self, dynamodb_resource: DynamoDBServiceResource, table_name: str) -> None:
        """Initialize repository.

        Args:
            dynamodb_resource: Boto3 DynamoDB resource
            table_name: Name of the DynamoDB table
        """
        self.dynamodb = dynamodb_resource
        self.table_name = table_name
        self.table: Table = dynamodb_resource.Table(table_name)


def collect_pages(operation: Callable[..., Any], **kwargs: Any) -> list[dict[str, Any]]:
    """Run a scan or query until DynamoDB stops returning a continuation key.

    Args:
        operation: Bound ``table.scan`` or ``table.query``
        **kwargs: Arguments passed through to the operation

    Returns:
        list: Every item from every page
    """
    items: list[dict[str, Any]] = []
    while True:
        response = operation(**kwargs)
        items.extend(response.get("Items", []))

        last_key = response.get("LastEvaluatedKey")
        if not last_key:
            return items

        logger.debug(f"Fetching next page after {last_key}")
        kwargs["ExclusiveStartKey"] = last_key
