"""Reservation models.

These models represent table reservations, the booking input collected from
guests, the restaurant's seating configuration, and per-slot availability.
"""

import os
import re
from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, EmailStr, Field, field_validator

TIME_PATTERN = re.compile(r"^([01][0-9]|2[0-3]):[0-5][0-9]$")

DEFAULT_TOTAL_CAPACITY = 80
DEFAULT_TIME_SLOTS = (
    "17:00",
    "17:30",
    "18:00",
    "18:30",
    "19:00",
    "19:30",
    "20:00",
    "20:30",
    "21:00",
    "21:30",
)


def validate_time_string(value: str) -> str:
    """Check that a time is a zero-padded 24-hour HH:MM string.

    Args:
        value: Candidate time string

    Returns:
        str: The unchanged time string

    Raises:
        ValueError: If the value is not in HH:MM form
    """
    if not TIME_PATTERN.match(value):
        raise ValueError("Time must be in HH:MM format")
    return value


class ReservationStatusEnum(str, Enum):
    """Enumeration of reservation status values."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class Reservation(BaseModel):
    """Table reservation.

    Stored in DynamoDB with id as partition key and a reservation_date index.
    """

    id: int = Field(..., description="Unique reservation identifier")
    customer_name: str = Field(..., description="Guest name")
    customer_email: str = Field(..., description="Guest email address")
    customer_phone: str = Field(..., description="Guest phone number")
    party_size: int = Field(..., description="Number of guests", ge=1, le=20)
    reservation_date: date = Field(..., description="Calendar date of the booking")
    reservation_time: str = Field(..., description="Time of the booking in HH:MM form")
    special_requests: str | None = Field(None, description="Free-text guest requests")
    status: ReservationStatusEnum = Field(
        default=ReservationStatusEnum.PENDING, description="Current reservation status"
    )
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    def to_dynamodb_item(self) -> dict[str, Any]:
        """Convert to DynamoDB item format.

        Returns:
            dict: DynamoDB-compatible representation
        """
        item: dict[str, Any] = {
            "id": self.id,
            "customer_name": self.customer_name,
            "customer_email": self.customer_email,
            "customer_phone": self.customer_phone,
            "party_size": self.party_size,
            "reservation_date": self.reservation_date.isoformat(),
            "reservation_time": self.reservation_time,
            "status": self.status.value,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

        if self.special_requests is not None:
            item["special_requests"] = self.special_requests

        return item

    @classmethod
    def from_dynamodb_item(cls, item: dict[str, Any]) -> "Reservation":
        """Create Reservation from DynamoDB item.

        Args:
            item: DynamoDB item dictionary

        Returns:
            Reservation: Parsed model instance
        """
        return cls(
            id=int(item["id"]),
            customer_name=item["customer_name"],
            customer_email=item["customer_email"],
            customer_phone=item["customer_phone"],
            party_size=int(item["party_size"]),
            reservation_date=date.fromisoformat(item["reservation_date"]),
            reservation_time=item["reservation_time"],
            special_requests=item.get("special_requests"),
            status=ReservationStatusEnum(item["status"]),
            created_at=datetime.fromisoformat(item["created_at"]),
            updated_at=datetime.fromisoformat(item["updated_at"]),
        )


class ReservationCreate(BaseModel):
    """Booking input submitted by a guest."""

    customer_name: str = Field(..., min_length=1)
    customer_email: EmailStr
    customer_phone: str = Field(..., min_length=10)
    party_size: int = Field(..., ge=1, le=20)
    reservation_date: date
    reservation_time: str
    special_requests: str | None = None

    @field_validator("reservation_date")
    @classmethod
    def validate_reservation_date(cls, v: date) -> date:
        """Validate that the reservation is for today or later."""
        if v < date.today():
            raise ValueError("Reservation date must be today or in the future")
        return v

    @field_validator("reservation_time")
    @classmethod
    def validate_reservation_time(cls, v: str) -> str:
        """Validate the HH:MM time format."""
        return validate_time_string(v)


class ReservationStatusUpdate(BaseModel):
    """Input for changing a reservation's status."""

    status: ReservationStatusEnum


class TimeSlot(BaseModel):
    """Availability of one reservation slot on a given date."""

    time: str = Field(..., description="Slot start time in HH:MM form")
    available: bool = Field(..., description="Whether any seats remain")
    remaining: int = Field(..., description="Seats left; negative when overbooked")


class ReservationSettings(BaseModel):
    """Seating configuration used for availability computation."""

    total_capacity: int = Field(default=DEFAULT_TOTAL_CAPACITY, gt=0)
    time_slots: tuple[str, ...] = Field(default=DEFAULT_TIME_SLOTS, min_length=1)

    @field_validator("time_slots")
    @classmethod
    def validate_time_slots(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Validate slot format and uniqueness."""
        for slot in v:
            validate_time_string(slot)
        if len(set(v)) != len(v):
            raise ValueError("time_slots must not contain duplicates")
        return v

    @classmethod
    def from_env(cls) -> "ReservationSettings":
        """Build settings from RESTAURANT_CAPACITY and RESERVATION_TIME_SLOTS.

        RESERVATION_TIME_SLOTS is a comma-separated list such as "17:00,17:30".
        Unset variables fall back to the defaults.

        Returns:
            ReservationSettings: Parsed settings
        """
        data: dict[str, Any] = {}

        capacity = os.getenv("RESTAURANT_CAPACITY")
        if capacity:
            data["total_capacity"] = int(capacity)

        slots = os.getenv("RESERVATION_TIME_SLOTS")
        if slots:
            data["time_slots"] = tuple(s.strip() for s in slots.split(",") if s.strip())

        return cls(**data)
