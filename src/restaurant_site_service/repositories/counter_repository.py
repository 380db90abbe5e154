"""Atomic id counters backed by DynamoDB."""

import logging

from botocore.exceptions import BotoCoreError, ClientError

from restaurant_site_service.exceptions import StoreError
from restaurant_site_service.repositories.base_repository import DynamoDBRepository

logger = logging.getLogger(__name__)


class IdCounterRepository(DynamoDBRepository):
    """Hands out increasing integer ids, one counter per entity kind.

    Each counter is a single item keyed by counter_name whose current_value is
    incremented with an atomic ADD update.
    """

    def next_id(self, counter_name: str) -> int:
        """Reserve the next id for a counter.

        Args:
            counter_name: Counter to increment (e.g., 'menu_items')

        Returns:
            int: The newly reserved id, starting at 1

        Raises:
            StoreError: If DynamoDB rejects the update
        """
        try:
            response = self.table.update_item(
                Key={"counter_name": counter_name},
                UpdateExpression="ADD current_value :inc",
                ExpressionAttributeValues={":inc": 1},
                ReturnValues="UPDATED_NEW",
            )
            return int(response["Attributes"]["current_value"])

        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to allocate id for {counter_name}: {e}")
            raise StoreError(f"Failed to allocate id for {counter_name}") from e
