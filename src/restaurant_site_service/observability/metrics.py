"""Custom metrics for the restaurant site service."""

from opentelemetry import metrics

meter = metrics.get_meter("restaurant-site-svc")

reservations_created_counter = meter.create_counter(
    name="reservations_created_total",
    description="Total number of reservations accepted",
    unit="1",
)

reservation_party_size_histogram = meter.create_histogram(
    name="reservation_party_size",
    description="Party size of accepted reservations",
    unit="1",
)

reservation_status_updates_counter = meter.create_counter(
    name="reservation_status_updates_total",
    description="Total number of reservation status changes by target status",
    unit="1",
)

availability_queries_counter = meter.create_counter(
    name="availability_queries_total",
    description="Total number of time slot availability lookups",
    unit="1",
)

overbooked_slots_counter = meter.create_counter(
    name="overbooked_slots_total",
    description="Slots reported with negative remaining capacity",
    unit="1",
)


def record_reservation_created(party_size: int) -> None:
    """Record an accepted reservation.

    Args:
        party_size: Number of guests on the reservation
    """
    reservations_created_counter.add(1)
    reservation_party_size_histogram.record(party_size)


def record_status_update(status: str) -> None:
    """Record a reservation status change.

    Args:
        status: The status the reservation moved to
    """
    reservation_status_updates_counter.add(1, {"status": status})


def record_availability_query(overbooked_slots: int) -> None:
    """Record an availability lookup.

    Args:
        overbooked_slots: Number of slots whose occupancy exceeded capacity
    """
    availability_queries_counter.add(1)
    if overbooked_slots:
        overbooked_slots_counter.add(overbooked_slots)
