from django.urls import path

from experiences.handlers import (
    BookingListCreateView,
    ExperienceDetailView,
    ExperienceListView,
    PromoValidateView,
    SlotListView,
)

urlpatterns = [
    path("experiences", ExperienceListView.as_view(), name="experience-list"),
    path(
        "experiences/<str:experience_id>",
        ExperienceDetailView.as_view(),
        name="experience-detail",
    ),
    path(
        "experiences/<str:experience_id>/slots",
        SlotListView.as_view(),
        name="slot-list",
    ),
    path("bookings", BookingListCreateView.as_view(), name="booking-list"),
    path("promo/validate", PromoValidateView.as_view(), name="promo-validate"),
]
