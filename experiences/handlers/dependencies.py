"""Wire services to their Django-backed stores."""

from django.conf import settings

from experiences.domain import PromoEngine
from experiences.services import BookingService, ExperienceService, PromoService
from experiences.stores.django_store import (
    DjangoBookingStore,
    DjangoExperienceStore,
    DjangoUnitOfWork,
)


def get_promo_engine() -> PromoEngine:
    return PromoEngine.from_config(settings.PROMO_CODES)


def get_experience_service() -> ExperienceService:
    return ExperienceService(DjangoExperienceStore())


def get_booking_service() -> BookingService:
    return BookingService(
        experiences=DjangoExperienceStore(),
        bookings=DjangoBookingStore(),
        unit_of_work=DjangoUnitOfWork(),
        promo_engine=get_promo_engine(),
    )


def get_promo_service() -> PromoService:
    return PromoService(get_promo_engine(), currency_symbol=settings.CURRENCY_SYMBOL)
