"""Domain error codes for the experiences module."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from experiences.domain.value_objects import MAX_PRICE


class ErrorCode(Enum):
    """Domain error codes."""

    MISSING_FIELDS = "MISSING_FIELDS"
    INVALID_EXPERIENCE_ID = "INVALID_EXPERIENCE_ID"
    INVALID_QUANTITY = "INVALID_QUANTITY"
    INVALID_EMAIL = "INVALID_EMAIL"
    INVALID_PRICE = "INVALID_PRICE"
    FIELD_TOO_LONG = "FIELD_TOO_LONG"
    INVALID_PAGINATION = "INVALID_PAGINATION"
    INVALID_STATUS_FILTER = "INVALID_STATUS_FILTER"
    INVALID_PROMO_REQUEST = "INVALID_PROMO_REQUEST"
    EXPERIENCE_NOT_FOUND = "EXPERIENCE_NOT_FOUND"
    SLOT_NOT_FOUND = "SLOT_NOT_FOUND"
    INVALID_SELECTION = "INVALID_SELECTION"
    CAPACITY_EXCEEDED = "CAPACITY_EXCEEDED"
    DUPLICATE_BOOKING = "DUPLICATE_BOOKING"
    PROMO_MINIMUM_NOT_MET = "PROMO_MINIMUM_NOT_MET"
    TRANSACTION_FAILED = "TRANSACTION_FAILED"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

    def details(self) -> dict[str, Any]:
        """Extra machine-readable fields a caller can act on."""
        return {}


class ValidationError(DomainError):
    """Caller-supplied data is malformed. Nothing has been written."""


class MissingFieldsError(ValidationError):
    """Raised when required request fields are absent or blank."""

    def __init__(self, fields: list[str]) -> None:
        super().__init__(
            code=ErrorCode.MISSING_FIELDS,
            message="Missing required fields",
        )
        self.fields = list(fields)

    def details(self) -> dict[str, Any]:
        return {"fields": self.fields}


class InvalidExperienceIdError(ValidationError):
    """Raised when an experience ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_EXPERIENCE_ID,
            message="Invalid experience ID format",
        )


class InvalidQuantityError(ValidationError):
    def __init__(self, minimum: int, maximum: int) -> None:
        super().__init__(
            code=ErrorCode.INVALID_QUANTITY,
            message=f"Quantity must be between {minimum} and {maximum}",
        )


class InvalidEmailError(ValidationError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_EMAIL,
            message="Invalid email format",
        )


class InvalidPriceError(ValidationError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_PRICE,
            message=f"Price must be a non-negative number up to {MAX_PRICE}",
        )


class FieldTooLongError(ValidationError):
    """Raised when a text field would not fit its column."""

    def __init__(self, field: str, max_length: int) -> None:
        super().__init__(
            code=ErrorCode.FIELD_TOO_LONG,
            message=f"{field} must be at most {max_length} characters",
        )
        self.field = field
        self.max_length = max_length

    def details(self) -> dict[str, Any]:
        return {"field": self.field, "maxLength": self.max_length}


class InvalidPaginationError(ValidationError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_PAGINATION,
            message="Page and limit must be positive integers",
        )


class InvalidStatusFilterError(ValidationError):
    def __init__(self, allowed: list[str]) -> None:
        super().__init__(
            code=ErrorCode.INVALID_STATUS_FILTER,
            message=f"Status must be one of: {', '.join(allowed)}",
        )


class InvalidPromoRequestError(ValidationError):
    """Raised when a promo preview lacks a code or a positive amount."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_PROMO_REQUEST, message=message)


class ExperienceNotFoundError(DomainError):
    """Raised when an experience is not found."""

    def __init__(self, experience_id: str) -> None:
        super().__init__(
            code=ErrorCode.EXPERIENCE_NOT_FOUND,
            message="Experience not found",
        )
        self.experience_id = experience_id


class SlotNotFoundError(DomainError):
    """Raised when no slot exists and the experience advertises none to create."""

    def __init__(self, date: str, time: str) -> None:
        super().__init__(
            code=ErrorCode.SLOT_NOT_FOUND,
            message="Selected slot not found",
        )
        self.date = date
        self.time = time


class InvalidSelectionError(DomainError):
    """Raised when the date or time is not part of the advertised availability."""

    def __init__(self, date: str, time: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_SELECTION,
            message="Selected date or time is not available",
        )
        self.date = date
        self.time = time


class CapacityExceededError(DomainError):
    def __init__(self, available: int, requested: int) -> None:
        super().__init__(
            code=ErrorCode.CAPACITY_EXCEEDED,
            message="Not enough slots available",
        )
        self.available = available
        self.requested = requested

    def details(self) -> dict[str, Any]:
        return {"available": self.available, "requested": self.requested}


class DuplicateBookingError(DomainError):
    """Raised when an active booking already exists for the same slot and email."""

    def __init__(self, existing_booking_id: str) -> None:
        super().__init__(
            code=ErrorCode.DUPLICATE_BOOKING,
            message="You already have a booking for this slot",
        )
        self.existing_booking_id = existing_booking_id

    def details(self) -> dict[str, Any]:
        return {"bookingId": self.existing_booking_id}


class PromoMinimumNotMetError(DomainError):
    """Raised when a recognized promo code is used below its qualifying amount."""

    def __init__(self, min_amount: Decimal) -> None:
        super().__init__(
            code=ErrorCode.PROMO_MINIMUM_NOT_MET,
            message=f"Promo code requires minimum purchase of {min_amount}",
        )
        self.min_amount = min_amount

    def details(self) -> dict[str, Any]:
        return {"minAmount": self.min_amount}


class TransactionFailureError(DomainError):
    """Raised when the store could not commit. Safe to retry the whole request."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.TRANSACTION_FAILED,
            message="Failed to create booking",
        )
