from experiences.domain.models import (
    Booking,
    BookingConfirmation,
    BookingDraft,
    BookingStatus,
    DiscountKind,
    Experience,
    Page,
    PromoApplication,
    PromoCode,
    Slot,
    SlotStatus,
)
from experiences.domain.promo import PromoEngine, PromoEvaluation, PromoRejection
from experiences.domain.value_objects import (
    BookingId,
    Email,
    ExperienceId,
    Money,
    Quantity,
)

__all__ = [
    "Booking",
    "BookingConfirmation",
    "BookingDraft",
    "BookingStatus",
    "DiscountKind",
    "Experience",
    "Page",
    "PromoApplication",
    "PromoCode",
    "Slot",
    "SlotStatus",
    "PromoEngine",
    "PromoEvaluation",
    "PromoRejection",
    "BookingId",
    "Email",
    "ExperienceId",
    "Money",
    "Quantity",
]
