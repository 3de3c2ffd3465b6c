"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

from experiences.domain import (
    Booking,
    BookingDraft,
    BookingStatus,
    Email,
    Experience,
    ExperienceId,
    Page,
    Slot,
)


class ExperienceStore(ABC):
    """Interface for experience and slot availability persistence."""

    @abstractmethod
    def list_experiences(self, page: int, page_size: int) -> Page[Experience]:
        """Return one page of experiences ordered by created_at descending."""
        ...

    @abstractmethod
    def get_experience(
        self, experience_id: ExperienceId, for_update: bool = False
    ) -> Experience | None:
        """Return an experience with its slots, or None if not found.

        With for_update the experience is locked until the enclosing
        unit of work ends.
        """
        ...

    @abstractmethod
    def find_slot(self, experience_id: ExperienceId, date: str, time: str) -> Slot | None:
        """Return the explicit slot for (date, time), or None."""
        ...

    @abstractmethod
    def reserve_slot(
        self, experience: Experience, date: str, time: str, quantity: int
    ) -> Slot:
        """Add quantity to the slot's booked count and return the updated slot.

        Materializes an advertised slot that does not exist yet. Only
        durable as part of the enclosing unit of work.

        Raises:
            SlotNotFoundError: If there is no slot and nothing is advertised.
            InvalidSelectionError: If (date, time) is not advertised.
            CapacityExceededError: If the freshest slot row has no room.
        """
        ...


class BookingStore(ABC):
    """Interface for the booking ledger."""

    @abstractmethod
    def find_active_duplicate(
        self, experience_id: ExperienceId, email: Email, date: str, time: str
    ) -> Booking | None:
        """Return a non-cancelled booking for the same tuple, or None."""
        ...

    @abstractmethod
    def insert(self, draft: BookingDraft) -> Booking:
        """Persist a draft, assigning identity and timestamps.

        Raises:
            DuplicateBookingError: If an active booking for the tuple won a race.
        """
        ...

    @abstractmethod
    def list_by_email(
        self,
        email: Email,
        status: BookingStatus | None = None,
        page: int = 1,
        page_size: int = 10,
    ) -> Page[Booking]:
        """Return bookings for an email ordered by created_at descending."""
        ...


class UnitOfWork(ABC):
    """All-or-nothing boundary around store writes."""

    @abstractmethod
    def ensure_connection(self) -> None:
        """Connect to the store if not already connected. Idempotent.

        Raises:
            TransactionFailureError: If the store is unreachable.
        """
        ...

    @abstractmethod
    def atomic(self) -> AbstractContextManager[None]:
        """Context manager committing on success and rolling back on any error.

        Store-level failures inside the block are raised as
        TransactionFailureError; domain errors propagate unchanged.
        """
        ...
