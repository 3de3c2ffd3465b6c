"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in experiences/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from math import ceil
from typing import Generic, TypeVar

from experiences.domain.value_objects import (
    DEFAULT_SLOT_CAPACITY,
    BookingId,
    Email,
    ExperienceId,
    Money,
)

T = TypeVar("T")

LIMITED_AVAILABILITY_THRESHOLD = 3


class BookingStatus(Enum):
    CONFIRMED = "confirmed"
    PENDING = "pending"
    CANCELLED = "cancelled"


class SlotStatus(Enum):
    AVAILABLE = "available"
    LIMITED = "limited"
    SOLD_OUT = "sold_out"


class DiscountKind(Enum):
    PERCENT = "percent"
    FLAT = "flat"


@dataclass(frozen=True)
class Slot:
    """Capacity bucket for one (date, time) pair of an Experience."""

    date: str
    time: str
    booked: int = 0
    capacity: int = DEFAULT_SLOT_CAPACITY

    def __post_init__(self) -> None:
        if self.booked < 0:
            raise ValueError("Booked count cannot be negative")
        if self.capacity < 1:
            raise ValueError("Capacity must be at least 1")
        if self.booked > self.capacity:
            raise ValueError("Booked count cannot exceed capacity")

    @property
    def available(self) -> int:
        return self.capacity - self.booked

    @property
    def status(self) -> SlotStatus:
        if self.available == 0:
            return SlotStatus.SOLD_OUT
        if self.available <= LIMITED_AVAILABILITY_THRESHOLD:
            return SlotStatus.LIMITED
        return SlotStatus.AVAILABLE

    def can_reserve(self, quantity: int) -> bool:
        return self.booked + quantity <= self.capacity

    def matches(self, date: str, time: str) -> bool:
        return self.date == date and self.time == time


@dataclass(frozen=True)
class Experience:
    """Domain representation of an Experience with its slots."""

    id: ExperienceId
    title: str
    location: str
    image: str
    description: str
    price: Money
    about: str
    available_dates: tuple[str, ...]
    available_times: tuple[str, ...]
    created_at: datetime
    updated_at: datetime
    slots: tuple[Slot, ...] = ()

    def find_slot(self, date: str, time: str) -> Slot | None:
        return next((slot for slot in self.slots if slot.matches(date, time)), None)

    def advertises_availability(self) -> bool:
        return bool(self.available_dates) and bool(self.available_times)

    def offers(self, date: str, time: str) -> bool:
        """Whether (date, time) is part of the advertised availability grid."""
        return date in self.available_dates and time in self.available_times

    def open_slots(self) -> tuple[Slot, ...]:
        return tuple(slot for slot in self.slots if slot.available > 0)

    def availability_grid(self) -> tuple[Slot, ...]:
        """Explicit slots followed by advertised pairs that have no slot yet."""
        grid = list(self.slots)
        for date in self.available_dates:
            for time in self.available_times:
                if self.find_slot(date, time) is None:
                    grid.append(Slot(date=date, time=time))
        return tuple(grid)


@dataclass(frozen=True)
class PromoCode:
    """Static catalog entry for a discount rule."""

    code: str
    kind: DiscountKind
    value: Decimal
    min_amount: Decimal | None = None
    description: str = ""


@dataclass(frozen=True)
class PromoApplication:
    """Promo detail snapshot returned with a confirmed booking."""

    code: str
    kind: DiscountKind
    value: Decimal
    discount: Decimal


@dataclass(frozen=True)
class BookingDraft:
    """A booking that has been priced but not yet persisted."""

    experience_id: ExperienceId
    experience_title: str
    full_name: str
    email: Email
    phone: str | None
    date: str
    time: str
    quantity: int
    price_per_person: Money
    subtotal: Money
    discount: Money
    total: Money
    promo_code: str | None = None
    status: BookingStatus = BookingStatus.CONFIRMED

    def __post_init__(self) -> None:
        if self.subtotal.amount != self.price_per_person.amount * self.quantity:
            raise ValueError("Subtotal must equal quantity times price per person")
        if self.discount.amount > self.subtotal.amount:
            raise ValueError("Discount cannot exceed subtotal")
        if self.total.amount != self.subtotal.amount - self.discount.amount:
            raise ValueError("Total must equal subtotal minus discount")


@dataclass(frozen=True)
class Booking:
    """Domain representation of a persisted Booking."""

    id: BookingId
    experience_id: ExperienceId
    experience_title: str
    full_name: str
    email: Email
    phone: str | None
    date: str
    time: str
    quantity: int
    price_per_person: Money
    subtotal: Money
    discount: Money
    total: Money
    promo_code: str | None
    status: BookingStatus
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class BookingConfirmation:
    """Result of a committed booking transaction."""

    booking: Booking
    promo_applied: PromoApplication | None = None


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of an ordered result set."""

    items: tuple[T, ...]
    total: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        return ceil(self.total / self.page_size) if self.page_size else 0

    @property
    def has_more(self) -> bool:
        return self.page < self.total_pages
