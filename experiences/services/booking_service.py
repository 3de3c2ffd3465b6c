"""Booking service - the booking transaction and booking history.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or raise domain errors
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from experiences.domain import (
    BookingConfirmation,
    BookingDraft,
    BookingStatus,
    Email,
    Experience,
    ExperienceId,
    Money,
    Page,
    PromoApplication,
    PromoEngine,
    PromoRejection,
    Quantity,
)
from experiences.domain.errors import (
    CapacityExceededError,
    DomainError,
    DuplicateBookingError,
    ExperienceNotFoundError,
    FieldTooLongError,
    InvalidEmailError,
    InvalidExperienceIdError,
    InvalidPriceError,
    InvalidQuantityError,
    InvalidSelectionError,
    InvalidStatusFilterError,
    MissingFieldsError,
    PromoMinimumNotMetError,
    SlotNotFoundError,
)
from experiences.domain.value_objects import (
    MAX_FULL_NAME_LENGTH,
    MAX_PHONE_LENGTH,
    MAX_PRICE,
    MAX_QUANTITY,
    MAX_SLOT_LABEL_LENGTH,
    MAX_TITLE_LENGTH,
    MIN_QUANTITY,
    round_money,
)
from experiences.services.pagination import parse_pagination
from experiences.stores.interfaces import BookingStore, ExperienceStore, UnitOfWork

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = (
    "experienceId",
    "title",
    "price",
    "quantity",
    "selectedDate",
    "selectedTime",
    "fullName",
    "email",
)


class TransactionStage(Enum):
    STARTED = "started"
    VALIDATING = "validating"
    LOADING = "loading"
    RESERVING = "reserving"
    PRICING = "pricing"
    PERSISTING = "persisting"
    COMMITTED = "committed"


@dataclass(frozen=True)
class BookingRequest:
    """A booking request that passed shape and format validation."""

    experience_id: ExperienceId
    title: str
    price: Money
    quantity: int
    date: str
    time: str
    full_name: str
    email: Email
    phone: str | None
    promo_code: str | None


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _optional_text(value: Any) -> str | None:
    if _is_blank(value):
        return None
    return str(value).strip()


class BookingService:
    """Creates bookings atomically and reads booking history."""

    def __init__(
        self,
        experiences: ExperienceStore,
        bookings: BookingStore,
        unit_of_work: UnitOfWork,
        promo_engine: PromoEngine,
    ) -> None:
        self._experiences = experiences
        self._bookings = bookings
        self._uow = unit_of_work
        self._promo_engine = promo_engine

    def create_booking(self, payload: Mapping[str, Any]) -> BookingConfirmation:
        """Validate, price and persist a booking as one unit of work.

        Either the booking and its slot increment are both committed, or
        nothing is written.

        Raises:
            ValidationError: Missing fields, bad ID, quantity, email or price,
                or text too long for storage.
            ExperienceNotFoundError: If the experience does not exist.
            SlotNotFoundError: If no slot exists and none can be created.
            InvalidSelectionError: If the date/time is not advertised.
            CapacityExceededError: If the slot lacks room for the quantity.
            DuplicateBookingError: If an active booking exists for the slot and email.
            PromoMinimumNotMetError: If a known promo code is below its minimum.
            TransactionFailureError: If the store fails to commit.
        """
        stage = TransactionStage.STARTED
        try:
            stage = TransactionStage.VALIDATING
            request = self._validate(payload)

            self._uow.ensure_connection()
            with self._uow.atomic():
                stage = TransactionStage.LOADING
                experience = self._experiences.get_experience(
                    request.experience_id, for_update=True
                )
                if experience is None:
                    raise ExperienceNotFoundError(str(request.experience_id))

                stage = TransactionStage.RESERVING
                self._check_availability(experience, request)
                existing = self._bookings.find_active_duplicate(
                    request.experience_id, request.email, request.date, request.time
                )
                if existing is not None:
                    raise DuplicateBookingError(str(existing.id))

                stage = TransactionStage.PRICING
                draft, promo_applied = self._price(request)

                stage = TransactionStage.PERSISTING
                self._experiences.reserve_slot(
                    experience, request.date, request.time, request.quantity
                )
                booking = self._bookings.insert(draft)
        except DomainError as err:
            logger.info("Booking aborted while %s: %s", stage.value, err)
            raise

        stage = TransactionStage.COMMITTED
        logger.info(
            "Booking %s %s for experience %s (%s %s, qty %d, total %s)",
            booking.id,
            stage.value,
            booking.experience_id,
            booking.date,
            booking.time,
            booking.quantity,
            booking.total,
        )
        return BookingConfirmation(booking=booking, promo_applied=promo_applied)

    def list_bookings(
        self,
        email: str | None,
        status: str | None = None,
        page: Any = None,
        page_size: Any = None,
    ) -> Page:
        """Return a page of bookings for an email, newest first.

        Raises:
            MissingFieldsError: If email is absent.
            InvalidEmailError: If email is malformed.
            InvalidStatusFilterError: If status is not a known booking status.
            InvalidPaginationError: If page or limit are not positive integers.
        """
        if _is_blank(email):
            raise MissingFieldsError(["email"])
        try:
            normalized = Email.from_string(email)
        except ValueError:
            raise InvalidEmailError()

        status_filter = None
        if not _is_blank(status):
            try:
                status_filter = BookingStatus(str(status).strip().lower())
            except ValueError:
                raise InvalidStatusFilterError([s.value for s in BookingStatus])

        page_number, size = parse_pagination(page, page_size)
        return self._bookings.list_by_email(
            normalized, status=status_filter, page=page_number, page_size=size
        )

    def _validate(self, payload: Mapping[str, Any]) -> BookingRequest:
        missing = [name for name in REQUIRED_FIELDS if _is_blank(payload.get(name))]
        if missing:
            raise MissingFieldsError(missing)

        try:
            experience_id = ExperienceId.from_string(payload["experienceId"])
        except ValueError:
            raise InvalidExperienceIdError()

        try:
            quantity = Quantity.from_value(payload["quantity"])
        except ValueError:
            raise InvalidQuantityError(MIN_QUANTITY, MAX_QUANTITY)

        try:
            email = Email.from_string(payload["email"])
        except ValueError:
            raise InvalidEmailError()

        try:
            price = Money.from_value(payload["price"])
            price = Money(amount=round_money(price.amount))
        except ValueError:
            raise InvalidPriceError()
        if price.amount > MAX_PRICE:
            raise InvalidPriceError()

        request = BookingRequest(
            experience_id=experience_id,
            title=str(payload["title"]).strip(),
            price=price,
            quantity=quantity.value,
            date=str(payload["selectedDate"]).strip(),
            time=str(payload["selectedTime"]).strip(),
            full_name=str(payload["fullName"]).strip(),
            email=email,
            phone=_optional_text(payload.get("phone")),
            promo_code=_optional_text(payload.get("promoCode")),
        )
        for field, value, max_length in (
            ("title", request.title, MAX_TITLE_LENGTH),
            ("selectedDate", request.date, MAX_SLOT_LABEL_LENGTH),
            ("selectedTime", request.time, MAX_SLOT_LABEL_LENGTH),
            ("fullName", request.full_name, MAX_FULL_NAME_LENGTH),
            ("phone", request.phone or "", MAX_PHONE_LENGTH),
        ):
            if len(value) > max_length:
                raise FieldTooLongError(field, max_length)
        return request

    def _check_availability(self, experience: Experience, request: BookingRequest) -> None:
        slot = experience.find_slot(request.date, request.time)
        if slot is None:
            if not experience.advertises_availability():
                raise SlotNotFoundError(request.date, request.time)
            if not experience.offers(request.date, request.time):
                raise InvalidSelectionError(request.date, request.time)
            # Will be materialized empty on reservation.
            return
        if not slot.can_reserve(request.quantity):
            raise CapacityExceededError(available=slot.available, requested=request.quantity)

    def _price(self, request: BookingRequest) -> tuple[BookingDraft, PromoApplication | None]:
        subtotal = request.price.amount * request.quantity
        discount = Decimal("0")
        promo_applied = None

        if request.promo_code:
            evaluation = self._promo_engine.evaluate(request.promo_code, subtotal)
            if evaluation.reason is PromoRejection.MINIMUM_NOT_MET:
                raise PromoMinimumNotMetError(evaluation.min_amount)
            # Unrecognized codes are ignored rather than rejected.
            promo_applied = evaluation.as_application()
            if promo_applied is not None:
                discount = min(promo_applied.discount, subtotal)

        draft = BookingDraft(
            experience_id=request.experience_id,
            experience_title=request.title,
            full_name=request.full_name,
            email=request.email,
            phone=request.phone,
            date=request.date,
            time=request.time,
            quantity=request.quantity,
            price_per_person=request.price,
            subtotal=Money(amount=subtotal),
            discount=Money(amount=discount),
            total=Money(amount=subtotal - discount),
            promo_code=promo_applied.code if promo_applied else None,
        )
        return draft, promo_applied
