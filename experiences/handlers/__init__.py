from experiences.handlers.views import (
    BookingListCreateView,
    ExperienceDetailView,
    ExperienceListView,
    PromoValidateView,
    SlotListView,
)

__all__ = [
    "BookingListCreateView",
    "ExperienceDetailView",
    "ExperienceListView",
    "PromoValidateView",
    "SlotListView",
]
