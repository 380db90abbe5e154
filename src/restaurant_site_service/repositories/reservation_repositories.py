"""DynamoDB repository for table reservations."""

import logging
from datetime import date, datetime

from botocore.exceptions import BotoCoreError, ClientError

from restaurant_site_service.exceptions import StoreError
from restaurant_site_service.models.reservation_models import (
    Reservation,
    ReservationStatusEnum,
)
from restaurant_site_service.repositories.base_repository import (
    DynamoDBRepository,
    collect_pages,
)

logger = logging.getLogger(__name__)


class ReservationRepository(DynamoDBRepository):
    """Repository for reservation records.

    Manages reservations in DynamoDB with id as partition key. Reservations for
    a calendar day are queried through the ``reservation_date-index`` Global
    Secondary Index, keyed by the YYYY-MM-DD date string.
    """

    DATE_INDEX = "reservation_date-index"

    def save_reservation(self, reservation: Reservation) -> None:
        """Save a new reservation.

        Args:
            reservation: Reservation to save

        Raises:
            StoreError: If DynamoDB rejects the write
        """
        try:
            self.table.put_item(
                Item=reservation.to_dynamodb_item(),
                ConditionExpression="attribute_not_exists(id)",
            )

        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to save reservation {reservation.id}: {e}")
            raise StoreError(f"Failed to save reservation {reservation.id}") from e

    def list_reservations_for_date(self, reservation_date: date) -> list[Reservation]:
        """List every reservation on a calendar day, in no particular order.

        Args:
            reservation_date: The day to list

        Returns:
            list: Reservation objects of every status (empty list if none found)

        Raises:
            StoreError: If DynamoDB rejects the query
        """
        try:
            items = collect_pages(
                self.table.query,
                IndexName=self.DATE_INDEX,
                KeyConditionExpression="reservation_date = :date",
                ExpressionAttributeValues={":date": reservation_date.isoformat()},
            )

        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to list reservations for {reservation_date}: {e}")
            raise StoreError(f"Failed to list reservations for {reservation_date}") from e

        return [Reservation.from_dynamodb_item(item) for item in items]

    def update_status(
        self,
        reservation_id: int,
        status: ReservationStatusEnum,
        updated_at: datetime,
    ) -> Reservation | None:
        """Set the status of an existing reservation.

        Args:
            reservation_id: Reservation identifier
            status: New status
            updated_at: Timestamp to record as the last update

        Returns:
            The updated Reservation, or None if no reservation has this id

        Raises:
            StoreError: If DynamoDB rejects the update for any other reason
        """
        try:
            response = self.table.update_item(
                Key={"id": reservation_id},
                UpdateExpression="SET #status = :status, updated_at = :updated_at",
                ConditionExpression="attribute_exists(id)",
                ExpressionAttributeNames={"#status": "status"},
                ExpressionAttributeValues={
                    ":status": status.value,
                    ":updated_at": updated_at.isoformat(),
                },
                ReturnValues="ALL_NEW",
            )

        except (ClientError, BotoCoreError) as e:
            if (
                isinstance(e, ClientError)
                and e.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException"
            ):
                return None
            logger.error(f"Failed to update reservation {reservation_id} status: {e}")
            raise StoreError(f"Failed to update reservation {reservation_id} status") from e

        return Reservation.from_dynamodb_item(response["Attributes"])
