"""Reservation service for bookings and time slot availability."""

import logging
from collections import defaultdict
from datetime import UTC, date, datetime

from restaurant_site_service.models.reservation_models import (
    Reservation,
    ReservationCreate,
    ReservationSettings,
    ReservationStatusEnum,
    TimeSlot,
)
from restaurant_site_service.observability import traced
from restaurant_site_service.observability.metrics import (
    record_availability_query,
    record_reservation_created,
    record_status_update,
)
from restaurant_site_service.repositories.counter_repository import IdCounterRepository
from restaurant_site_service.repositories.reservation_repositories import ReservationRepository

logger = logging.getLogger(__name__)

RESERVATION_COUNTER = "reservations"


class ReservationService:
    """Service for taking reservations and reporting seat availability.

    Capacity is advisory: creating a reservation never checks occupancy, so a
    slot can be booked past capacity and then reports a negative remaining
    count. Status changes are accepted in any direction.
    """

    def __init__(
        self,
        reservation_repository: ReservationRepository,
        id_counter: IdCounterRepository,
        settings: ReservationSettings | None = None,
    ) -> None:
        """Initialize the ReservationService.

        Args:
            reservation_repository: Repository for reservations
            id_counter: Allocator for new reservation ids
            settings: Seating capacity and time slot catalog (defaults: 80 seats,
                ten half-hour slots from 17:00 to 21:30)
        """
        self.reservation_repository = reservation_repository
        self.id_counter = id_counter
        self.settings = settings or ReservationSettings()

    @traced("reservations.create")
    async def create_reservation(self, reservation_input: ReservationCreate) -> Reservation:
        """Store a new pending reservation.

        Args:
            reservation_input: Validated booking details

        Returns:
            The stored reservation with its id and timestamps
        """
        now = datetime.now(UTC)
        reservation = Reservation(
            id=self.id_counter.next_id(RESERVATION_COUNTER),
            customer_name=reservation_input.customer_name,
            customer_email=str(reservation_input.customer_email),
            customer_phone=reservation_input.customer_phone,
            party_size=reservation_input.party_size,
            reservation_date=reservation_input.reservation_date,
            reservation_time=reservation_input.reservation_time,
            special_requests=reservation_input.special_requests,
            status=ReservationStatusEnum.PENDING,
            created_at=now,
            updated_at=now,
        )
        self.reservation_repository.save_reservation(reservation)
        record_reservation_created(reservation.party_size)

        logger.info(
            f"Created reservation {reservation.id} for {reservation.party_size} "
            f"on {reservation.reservation_date} at {reservation.reservation_time}"
        )
        return reservation

    @traced("reservations.update_status")
    async def update_reservation_status(
        self,
        reservation_id: int,
        status: ReservationStatusEnum,
    ) -> Reservation | None:
        """Set a reservation's status and refresh its update timestamp.

        Args:
            reservation_id: Reservation identifier
            status: New status

        Returns:
            The updated reservation, or None if no reservation has this id
        """
        reservation = self.reservation_repository.update_status(
            reservation_id, status, datetime.now(UTC)
        )
        if reservation is None:
            logger.info(f"Reservation {reservation_id} not found for status update")
            return None

        record_status_update(status.value)
        logger.info(f"Reservation {reservation_id} is now {status.value}")
        return reservation

    @traced("reservations.list_for_date")
    async def list_reservations_for_date(self, reservation_date: date) -> list[Reservation]:
        """List every reservation on a date, earliest time first.

        Cancelled reservations are included.

        Args:
            reservation_date: The day to list

        Returns:
            Reservations ordered by HH:MM time; empty if none exist
        """
        reservations = self.reservation_repository.list_reservations_for_date(reservation_date)
        return sorted(reservations, key=lambda r: (r.reservation_time, r.id))

    @traced("reservations.available_time_slots")
    async def get_available_time_slots(self, reservation_date: date) -> list[TimeSlot]:
        """Report remaining capacity for every configured slot on a date.

        Party sizes of non-cancelled reservations are summed per slot. A
        reservation counts only against the slot whose time string it matches
        exactly; any other time is left out of every slot.

        Args:
            reservation_date: The day to report on

        Returns:
            One TimeSlot per configured slot, in configured order
        """
        reservations = self.reservation_repository.list_reservations_for_date(reservation_date)

        occupied: dict[str, int] = defaultdict(int)
        for reservation in reservations:
            if reservation.status != ReservationStatusEnum.CANCELLED:
                occupied[reservation.reservation_time] += reservation.party_size

        capacity = self.settings.total_capacity
        slots = []
        for time in self.settings.time_slots:
            remaining = capacity - occupied.get(time, 0)
            slots.append(TimeSlot(time=time, available=remaining > 0, remaining=remaining))

        overbooked = sum(1 for slot in slots if slot.remaining < 0)
        if overbooked:
            logger.warning(f"{overbooked} slot(s) overbooked on {reservation_date}")
        record_availability_query(overbooked)

        return slots
