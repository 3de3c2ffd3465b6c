"""Domain primitives that enforce validity at creation time."""

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Self
from uuid import UUID

CENTS = Decimal("0.01")

MIN_QUANTITY = 1
MAX_QUANTITY = 20

DEFAULT_SLOT_CAPACITY = 10

# Column bounds shared by validation and the ORM models.
MAX_PRICE = Decimal("99999999.99")
MAX_AMOUNT = Decimal("9999999999.99")
MAX_TITLE_LENGTH = 200
MAX_FULL_NAME_LENGTH = 100
MAX_EMAIL_LENGTH = 254
MAX_PHONE_LENGTH = 32
MAX_SLOT_LABEL_LENGTH = 32

# Same shape the checkout form validates against: word characters separated
# by single dots or hyphens, ending in a 2-3 character TLD.
EMAIL_PATTERN = re.compile(r"^\w+(?:[.-]\w+)*@\w+(?:[.-]\w+)*\.\w{2,3}$", re.ASCII)


def round_money(amount: Decimal) -> Decimal:
    """Round an amount to cents, half-up.

    Raises:
        ValueError: If the amount has too many digits to hold in cents.
    """
    try:
        return amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise ValueError("Amount is out of range") from exc


@dataclass(frozen=True)
class ExperienceId:
    """Unique identifier for an Experience."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(str(value)))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class BookingId:
    """Unique identifier for a Booking."""

    value: UUID

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Money:
    """Price representation with validation."""

    amount: Decimal

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    @classmethod
    def from_value(cls, value: object) -> Self:
        """Parse a JSON number or numeric string.

        Raises:
            ValueError: If the value is not a finite, non-negative number.
        """
        if isinstance(value, bool):
            raise ValueError("Money amount must be a number")
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise ValueError("Money amount must be a number") from exc
        if not amount.is_finite():
            raise ValueError("Money amount must be finite")
        return cls(amount=amount)

    def __str__(self) -> str:
        return f"{self.amount:.2f}"


@dataclass(frozen=True)
class Quantity:
    """Number of people on a single booking."""

    value: int

    def __post_init__(self) -> None:
        if not MIN_QUANTITY <= self.value <= MAX_QUANTITY:
            raise ValueError(
                f"Quantity must be between {MIN_QUANTITY} and {MAX_QUANTITY}"
            )

    @classmethod
    def from_value(cls, value: object) -> Self:
        """Accept ints, integral floats and digit strings; reject everything else."""
        if isinstance(value, bool):
            raise ValueError("Quantity must be an integer")
        if isinstance(value, int):
            return cls(value=value)
        if isinstance(value, float) and value.is_integer():
            return cls(value=int(value))
        if isinstance(value, str) and value.strip().lstrip("-").isdigit():
            return cls(value=int(value.strip()))
        raise ValueError("Quantity must be an integer")


@dataclass(frozen=True)
class Email:
    """Lower-cased, pattern-checked customer email."""

    value: str

    @classmethod
    def from_string(cls, value: str) -> Self:
        normalized = str(value).strip().lower()
        if len(normalized) > MAX_EMAIL_LENGTH or not EMAIL_PATTERN.match(normalized):
            raise ValueError("Invalid email format")
        return cls(value=normalized)

    def __str__(self) -> str:
        return self.value
