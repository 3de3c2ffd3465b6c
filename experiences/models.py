"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.core.validators import MaxValueValidator, MinLengthValidator, MinValueValidator
from django.db import models
from django.db.models import F, Q

from experiences.domain.value_objects import (
    DEFAULT_SLOT_CAPACITY,
    MAX_EMAIL_LENGTH,
    MAX_FULL_NAME_LENGTH,
    MAX_PHONE_LENGTH,
    MAX_QUANTITY,
    MAX_SLOT_LABEL_LENGTH,
    MAX_TITLE_LENGTH,
    MIN_QUANTITY,
)


class Experience(models.Model):
    """Persistence model for experiences."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(
        max_length=MAX_TITLE_LENGTH, validators=[MinLengthValidator(3)]
    )
    location = models.CharField(max_length=255)
    image = models.CharField(max_length=500)
    description = models.TextField(validators=[MinLengthValidator(10)])
    price = models.DecimalField(
        max_digits=10, decimal_places=2, validators=[MinValueValidator(0)]
    )
    about = models.TextField()
    available_dates = models.JSONField(default=list, blank=True)
    available_times = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["-created_at"], name="experience_created_idx"),
            models.Index(fields=["title", "location"], name="experience_title_loc_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(price__gte=0), name="experience_price_non_negative"
            ),
        ]

    def __str__(self) -> str:
        return self.title


class Slot(models.Model):
    """Persistence model for the capacity of one date/time of an experience."""

    experience = models.ForeignKey(
        Experience, on_delete=models.CASCADE, related_name="slots"
    )
    date = models.CharField(max_length=MAX_SLOT_LABEL_LENGTH)
    time = models.CharField(max_length=MAX_SLOT_LABEL_LENGTH)
    booked = models.PositiveIntegerField(default=0)
    capacity = models.PositiveIntegerField(
        default=DEFAULT_SLOT_CAPACITY, validators=[MinValueValidator(1)]
    )

    class Meta:
        ordering = ["id"]
        constraints = [
            models.UniqueConstraint(
                fields=["experience", "date", "time"], name="unique_slot_per_experience"
            ),
            models.CheckConstraint(
                condition=Q(booked__lte=F("capacity")), name="slot_booked_within_capacity"
            ),
            models.CheckConstraint(
                condition=Q(capacity__gte=1), name="slot_capacity_at_least_one"
            ),
        ]
        indexes = [
            models.Index(fields=["date", "time"], name="slot_date_time_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.experience.title} - {self.date} {self.time}"


class Booking(models.Model):
    """Persistence model for bookings."""

    class Status(models.TextChoices):
        CONFIRMED = "confirmed", "Confirmed"
        PENDING = "pending", "Pending"
        CANCELLED = "cancelled", "Cancelled"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    experience = models.ForeignKey(
        Experience, on_delete=models.PROTECT, related_name="bookings"
    )
    experience_title = models.CharField(max_length=MAX_TITLE_LENGTH)
    full_name = models.CharField(
        max_length=MAX_FULL_NAME_LENGTH, validators=[MinLengthValidator(2)]
    )
    email = models.EmailField(max_length=MAX_EMAIL_LENGTH)
    phone = models.CharField(max_length=MAX_PHONE_LENGTH, blank=True, null=True)
    date = models.CharField(max_length=MAX_SLOT_LABEL_LENGTH)
    time = models.CharField(max_length=MAX_SLOT_LABEL_LENGTH)
    quantity = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(MIN_QUANTITY), MaxValueValidator(MAX_QUANTITY)]
    )
    price_per_person = models.DecimalField(max_digits=10, decimal_places=2)
    subtotal = models.DecimalField(max_digits=12, decimal_places=2)
    discount = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    total = models.DecimalField(max_digits=12, decimal_places=2)
    promo_code = models.CharField(max_length=32, blank=True, null=True)
    status = models.CharField(
        max_length=16, choices=Status.choices, default=Status.CONFIRMED
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(
                fields=["experience", "date", "time", "email"], name="booking_slot_email_idx"
            ),
            models.Index(fields=["email", "-created_at"], name="booking_email_created_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["experience", "email", "date", "time"],
                condition=~Q(status="cancelled"),
                name="unique_active_booking",
            ),
            models.CheckConstraint(
                condition=Q(quantity__gte=MIN_QUANTITY) & Q(quantity__lte=MAX_QUANTITY),
                name="booking_quantity_in_range",
            ),
            models.CheckConstraint(
                condition=Q(discount__lte=F("subtotal")),
                name="booking_discount_within_subtotal",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.experience_title} - {self.email} ({self.date} {self.time})"
