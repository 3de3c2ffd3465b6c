"""Django ORM implementation of the stores and unit of work."""

import logging
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from functools import partial

from django.db import DEFAULT_DB_ALIAS, DatabaseError, IntegrityError, connections, transaction
from django.db.models import F

from experiences import models
from experiences.cache import invalidate_experience
from experiences.domain import (
    Booking,
    BookingDraft,
    BookingId,
    BookingStatus,
    Email,
    Experience,
    ExperienceId,
    Money,
    Page,
    Slot,
)
from experiences.domain.errors import (
    CapacityExceededError,
    DuplicateBookingError,
    InvalidSelectionError,
    SlotNotFoundError,
    TransactionFailureError,
)
from experiences.domain.value_objects import DEFAULT_SLOT_CAPACITY
from experiences.stores.interfaces import BookingStore, ExperienceStore, UnitOfWork

logger = logging.getLogger(__name__)


def _slot_to_domain(row: models.Slot) -> Slot:
    return Slot(date=row.date, time=row.time, booked=row.booked, capacity=row.capacity)


def _experience_to_domain(row: models.Experience, slots: Iterable[models.Slot]) -> Experience:
    return Experience(
        id=ExperienceId(value=row.id),
        title=row.title,
        location=row.location,
        image=row.image,
        description=row.description,
        price=Money(amount=row.price),
        about=row.about,
        available_dates=tuple(row.available_dates or ()),
        available_times=tuple(row.available_times or ()),
        created_at=row.created_at,
        updated_at=row.updated_at,
        slots=tuple(_slot_to_domain(slot) for slot in slots),
    )


def _booking_to_domain(row: models.Booking) -> Booking:
    return Booking(
        id=BookingId(value=row.id),
        experience_id=ExperienceId(value=row.experience_id),
        experience_title=row.experience_title,
        full_name=row.full_name,
        email=Email(value=row.email),
        phone=row.phone,
        date=row.date,
        time=row.time,
        quantity=row.quantity,
        price_per_person=Money(amount=row.price_per_person),
        subtotal=Money(amount=row.subtotal),
        discount=Money(amount=row.discount),
        total=Money(amount=row.total),
        promo_code=row.promo_code,
        status=BookingStatus(row.status),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class DjangoExperienceStore(ExperienceStore):
    """Relational experience store; slots live in their own table keyed by experience."""

    def __init__(self, using: str = DEFAULT_DB_ALIAS) -> None:
        self._using = using

    def list_experiences(self, page: int, page_size: int) -> Page[Experience]:
        queryset = models.Experience.objects.using(self._using).prefetch_related("slots")
        offset = (page - 1) * page_size
        rows = queryset[offset : offset + page_size]
        return Page(
            items=tuple(_experience_to_domain(row, row.slots.all()) for row in rows),
            total=queryset.count(),
            page=page,
            page_size=page_size,
        )

    def get_experience(
        self, experience_id: ExperienceId, for_update: bool = False
    ) -> Experience | None:
        queryset = models.Experience.objects.using(self._using)
        if for_update:
            queryset = queryset.select_for_update()
        try:
            row = queryset.get(pk=experience_id.value)
        except models.Experience.DoesNotExist:
            return None
        slots = models.Slot.objects.using(self._using).filter(experience_id=row.pk)
        return _experience_to_domain(row, slots)

    def find_slot(self, experience_id: ExperienceId, date: str, time: str) -> Slot | None:
        row = (
            models.Slot.objects.using(self._using)
            .filter(experience_id=experience_id.value, date=date, time=time)
            .first()
        )
        return _slot_to_domain(row) if row else None

    def reserve_slot(
        self, experience: Experience, date: str, time: str, quantity: int
    ) -> Slot:
        slots = models.Slot.objects.using(self._using)
        row = slots.filter(experience_id=experience.id.value, date=date, time=time).first()

        if row is None:
            if not experience.advertises_availability():
                raise SlotNotFoundError(date, time)
            if not experience.offers(date, time):
                raise InvalidSelectionError(date, time)
            row = slots.create(
                experience_id=experience.id.value,
                date=date,
                time=time,
                booked=0,
                capacity=DEFAULT_SLOT_CAPACITY,
            )
            logger.info("Materialized slot %s %s for experience %s", date, time, experience.id)

        # Guarded increment against the freshest committed row.
        updated = slots.filter(pk=row.pk, booked__lte=F("capacity") - quantity).update(
            booked=F("booked") + quantity
        )
        row.refresh_from_db(using=self._using)
        if not updated:
            raise CapacityExceededError(available=row.capacity - row.booked, requested=quantity)

        # Queryset updates skip model signals.
        transaction.on_commit(
            partial(invalidate_experience, str(experience.id)), using=self._using
        )
        return _slot_to_domain(row)


class DjangoBookingStore(BookingStore):
    def __init__(self, using: str = DEFAULT_DB_ALIAS) -> None:
        self._using = using

    def _active(self, experience_id: ExperienceId, email: Email, date: str, time: str):
        return (
            models.Booking.objects.using(self._using)
            .filter(experience_id=experience_id.value, email=email.value, date=date, time=time)
            .exclude(status=models.Booking.Status.CANCELLED)
        )

    def find_active_duplicate(
        self, experience_id: ExperienceId, email: Email, date: str, time: str
    ) -> Booking | None:
        row = self._active(experience_id, email, date, time).first()
        return _booking_to_domain(row) if row else None

    def insert(self, draft: BookingDraft) -> Booking:
        try:
            with transaction.atomic(using=self._using):
                row = models.Booking.objects.using(self._using).create(
                    experience_id=draft.experience_id.value,
                    experience_title=draft.experience_title,
                    full_name=draft.full_name,
                    email=draft.email.value,
                    phone=draft.phone,
                    date=draft.date,
                    time=draft.time,
                    quantity=draft.quantity,
                    price_per_person=draft.price_per_person.amount,
                    subtotal=draft.subtotal.amount,
                    discount=draft.discount.amount,
                    total=draft.total.amount,
                    promo_code=draft.promo_code,
                    status=draft.status.value,
                )
        except IntegrityError as exc:
            existing = self.find_active_duplicate(
                draft.experience_id, draft.email, draft.date, draft.time
            )
            if existing is None:
                raise
            raise DuplicateBookingError(str(existing.id)) from exc
        # Re-read so database-assigned values (timestamps, decimal scale) are reflected.
        row.refresh_from_db(using=self._using)
        return _booking_to_domain(row)

    def list_by_email(
        self,
        email: Email,
        status: BookingStatus | None = None,
        page: int = 1,
        page_size: int = 10,
    ) -> Page[Booking]:
        queryset = models.Booking.objects.using(self._using).filter(email=email.value)
        if status is not None:
            queryset = queryset.filter(status=status.value)
        queryset = queryset.order_by("-created_at")
        offset = (page - 1) * page_size
        return Page(
            items=tuple(_booking_to_domain(row) for row in queryset[offset : offset + page_size]),
            total=queryset.count(),
            page=page,
            page_size=page_size,
        )


class DjangoUnitOfWork(UnitOfWork):
    """Wraps django.db.transaction.atomic for one database alias."""

    def __init__(self, using: str = DEFAULT_DB_ALIAS) -> None:
        self._using = using

    def ensure_connection(self) -> None:
        try:
            connections[self._using].ensure_connection()
        except DatabaseError as exc:
            logger.error("Could not connect to database %r", self._using, exc_info=True)
            raise TransactionFailureError() from exc

    @contextmanager
    def atomic(self) -> Iterator[None]:
        try:
            with transaction.atomic(using=self._using):
                yield
        except DatabaseError as exc:
            logger.error("Transaction on %r rolled back", self._using, exc_info=True)
            raise TransactionFailureError() from exc
