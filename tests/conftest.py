"""Pytest configuration and shared fixtures."""

from decimal import Decimal

import pytest
from rest_framework.test import APIClient

BOOKING_DATE = "2025-11-01"
BOOKING_TIME = "09:00"


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def make_experience(db):
    """Create a persisted experience, optionally with explicit slots."""
    from experiences.models import Experience, Slot

    def _make(
        price="1000.00",
        dates=(BOOKING_DATE, "2025-11-02"),
        times=(BOOKING_TIME, "14:00"),
        slots=(),
        title="Sunrise Kayaking",
    ):
        experience = Experience.objects.create(
            title=title,
            location="Goa",
            image="https://example.com/kayak.jpg",
            description="Paddle through the mangroves at dawn.",
            price=Decimal(price),
            about="Guided tour, all equipment included.",
            available_dates=list(dates),
            available_times=list(times),
        )
        for slot in slots:
            Slot.objects.create(experience=experience, **slot)
        return experience

    return _make


@pytest.fixture
def booking_payload():
    """Build a valid create-booking payload for an experience."""

    def _payload(experience, **overrides):
        payload = {
            "experienceId": str(experience.id),
            "title": experience.title,
            "price": float(experience.price),
            "quantity": 2,
            "selectedDate": BOOKING_DATE,
            "selectedTime": BOOKING_TIME,
            "fullName": "Asha Rao",
            "email": "asha@example.com",
            "phone": "+91 98765 43210",
        }
        payload.update(overrides)
        return payload

    return _payload
