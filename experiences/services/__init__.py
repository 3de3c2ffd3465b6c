from experiences.services.booking_service import BookingService
from experiences.services.experience_service import ExperienceService
from experiences.services.promo_service import PromoService

__all__ = ["BookingService", "ExperienceService", "PromoService"]
