"""Tests for the HTTP API.

Run with: pytest tests/test_api.py -v
"""

from uuid import uuid4

import pytest
from django.db import DatabaseError
from django.urls import reverse

from experiences import models
from experiences.stores.django_store import DjangoBookingStore

BOOKING_DATE = "2025-11-01"
BOOKING_TIME = "09:00"


def _detail_url(experience_id) -> str:
    return reverse("experience-detail", args=[str(experience_id)])


def _slots_url(experience_id) -> str:
    return reverse("slot-list", args=[str(experience_id)])


@pytest.mark.django_db
class TestExperienceEndpoints:
    """Tests for GET /api/experiences and its detail routes."""

    def test_list_experiences(self, api_client, make_experience):
        make_experience(title="Sunrise Kayaking")
        make_experience(title="Spice Farm Walk")

        response = api_client.get(reverse("experience-list"))

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["total"] == 2
        assert body["count"] == 2
        assert body["hasMore"] is False
        assert [item["title"] for item in body["data"]] == ["Spice Farm Walk", "Sunrise Kayaking"]
        assert body["data"][0]["price"] == 1000
        assert body["data"][0]["availableTimes"] == [BOOKING_TIME, "14:00"]

    def test_list_experiences_paginates(self, api_client, make_experience):
        for title in ("One walk", "Two walk", "Three walk"):
            make_experience(title=title)

        body = api_client.get(reverse("experience-list"), {"page": 2, "limit": 2}).json()

        assert body["count"] == 1
        assert body["page"] == 2
        assert body["totalPages"] == 2

    def test_list_rejects_bad_pagination(self, api_client, db):
        response = api_client.get(reverse("experience-list"), {"limit": "0"})
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_PAGINATION"

    @pytest.mark.parametrize("url", ["experience-list", "booking-list"])
    def test_page_past_addressable_offset_is_400(self, api_client, url):
        response = api_client.get(
            reverse(url), {"email": "asha@example.com", "page": "100000000000000000000"}
        )
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_PAGINATION"

    def test_detail_includes_open_slots(self, api_client, make_experience):
        experience = make_experience(
            slots=[
                {"date": BOOKING_DATE, "time": BOOKING_TIME, "booked": 7},
                {"date": BOOKING_DATE, "time": "14:00", "booked": 10},
            ]
        )

        response = api_client.get(_detail_url(experience.id))

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["id"] == str(experience.id)
        assert data["about"] == "Guided tour, all equipment included."
        assert data["availableSlots"] == [
            {"date": BOOKING_DATE, "time": BOOKING_TIME, "available": 3}
        ]
        assert data["totalAvailableSlots"] == 3

    def test_detail_invalid_id(self, api_client, db):
        response = api_client.get(_detail_url("not-a-uuid"))
        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "code": "INVALID_EXPERIENCE_ID",
            "error": "Invalid experience ID format",
        }

    def test_detail_not_found(self, api_client, db):
        response = api_client.get(_detail_url(uuid4()))
        assert response.status_code == 404
        assert response.json()["error"] == "Experience not found"

    def test_slots_grid(self, api_client, make_experience):
        experience = make_experience(
            dates=(BOOKING_DATE,),
            slots=[{"date": BOOKING_DATE, "time": BOOKING_TIME, "booked": 8}],
        )

        body = api_client.get(_slots_url(experience.id)).json()

        assert body["count"] == 2
        assert body["data"] == [
            {
                "date": BOOKING_DATE,
                "time": BOOKING_TIME,
                "available": 2,
                "capacity": 10,
                "status": "limited",
            },
            {
                "date": BOOKING_DATE,
                "time": "14:00",
                "available": 10,
                "capacity": 10,
                "status": "available",
            },
        ]


@pytest.mark.django_db
class TestCreateBookingEndpoint:
    """Tests for POST /api/bookings"""

    def test_create_booking_returns_confirmation(
        self, api_client, make_experience, booking_payload
    ):
        experience = make_experience()

        response = api_client.post(
            reverse("booking-list"),
            booking_payload(experience, promoCode="save10"),
            format="json",
        )

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Booking confirmed successfully"
        data = body["data"]
        assert data["bookingId"] == str(models.Booking.objects.get().pk)
        assert data["experienceTitle"] == "Sunrise Kayaking"
        assert data["quantity"] == 2
        assert data["subtotal"] == 2000
        assert data["discount"] == 200
        assert data["total"] == 1800
        assert data["status"] == "confirmed"
        assert data["promoApplied"] == {
            "code": "SAVE10",
            "type": "percent",
            "value": 10,
            "discount": 200,
        }

    def test_unknown_promo_gives_null_promo_applied(
        self, api_client, make_experience, booking_payload
    ):
        response = api_client.post(
            reverse("booking-list"),
            booking_payload(make_experience(), promoCode="XYZ123"),
            format="json",
        )
        assert response.status_code == 201
        assert response.json()["data"]["promoApplied"] is None
        assert response.json()["data"]["discount"] == 0

    def test_missing_fields(self, api_client, db):
        response = api_client.post(
            reverse("booking-list"), {"fullName": "Asha Rao"}, format="json"
        )
        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "MISSING_FIELDS"
        assert body["fields"] == [
            "experienceId",
            "title",
            "price",
            "quantity",
            "selectedDate",
            "selectedTime",
            "email",
        ]

    def test_non_object_body_is_missing_everything(self, api_client, db):
        response = api_client.post(reverse("booking-list"), [1, 2], format="json")
        assert response.status_code == 400
        assert len(response.json()["fields"]) == 8

    @pytest.mark.parametrize(
        "override,code",
        [
            ({"experienceId": "abc"}, "INVALID_EXPERIENCE_ID"),
            ({"quantity": 25}, "INVALID_QUANTITY"),
            ({"email": "asha@"}, "INVALID_EMAIL"),
            ({"price": "free"}, "INVALID_PRICE"),
            ({"price": "1e30"}, "INVALID_PRICE"),
            ({"price": "123456789012.34"}, "INVALID_PRICE"),
            ({"fullName": "A" * 101}, "FIELD_TOO_LONG"),
            ({"phone": "+91 " + "9" * 40}, "FIELD_TOO_LONG"),
            ({"selectedTime": "23:00"}, "INVALID_SELECTION"),
        ],
    )
    def test_validation_errors_are_400(
        self, api_client, make_experience, booking_payload, override, code
    ):
        response = api_client.post(
            reverse("booking-list"),
            booking_payload(make_experience(), **override),
            format="json",
        )
        assert response.status_code == 400
        assert response.json()["code"] == code

    def test_unknown_experience_is_404(self, api_client, make_experience, booking_payload):
        response = api_client.post(
            reverse("booking-list"),
            booking_payload(make_experience(), experienceId=str(uuid4())),
            format="json",
        )
        assert response.status_code == 404
        assert response.json()["code"] == "EXPERIENCE_NOT_FOUND"

    def test_slot_not_found_is_404(self, api_client, make_experience, booking_payload):
        response = api_client.post(
            reverse("booking-list"),
            booking_payload(make_experience(dates=(), times=())),
            format="json",
        )
        assert response.status_code == 404
        assert response.json()["code"] == "SLOT_NOT_FOUND"

    def test_capacity_conflict_is_409(self, api_client, make_experience, booking_payload):
        experience = make_experience(
            slots=[{"date": BOOKING_DATE, "time": BOOKING_TIME, "booked": 9}]
        )
        response = api_client.post(
            reverse("booking-list"), booking_payload(experience), format="json"
        )
        assert response.status_code == 409
        assert response.json() == {
            "success": False,
            "code": "CAPACITY_EXCEEDED",
            "error": "Not enough slots available",
            "available": 1,
            "requested": 2,
        }

    def test_duplicate_is_409_with_booking_id(
        self, api_client, make_experience, booking_payload
    ):
        experience = make_experience()
        first = api_client.post(
            reverse("booking-list"), booking_payload(experience), format="json"
        ).json()

        response = api_client.post(
            reverse("booking-list"), booking_payload(experience), format="json"
        )

        assert response.status_code == 409
        assert response.json()["code"] == "DUPLICATE_BOOKING"
        assert response.json()["bookingId"] == first["data"]["bookingId"]

    def test_promo_minimum_not_met(self, api_client, make_experience, booking_payload):
        response = api_client.post(
            reverse("booking-list"),
            booking_payload(make_experience(price="250.00"), promoCode="FLAT100"),
            format="json",
        )
        assert response.status_code == 400
        assert response.json()["code"] == "PROMO_MINIMUM_NOT_MET"
        assert response.json()["minAmount"] == 1000
        assert not models.Booking.objects.exists()

    def test_store_failure_is_503_without_internal_detail(
        self, api_client, make_experience, booking_payload, monkeypatch
    ):
        def fail(self, draft):
            raise DatabaseError("relation bookings is locked")

        monkeypatch.setattr(DjangoBookingStore, "insert", fail)
        response = api_client.post(
            reverse("booking-list"), booking_payload(make_experience()), format="json"
        )
        assert response.status_code == 503
        assert response.json() == {
            "success": False,
            "code": "TRANSACTION_FAILED",
            "error": "Failed to create booking",
        }


@pytest.mark.django_db
class TestBookingHistoryEndpoint:
    """Tests for GET /api/bookings"""

    def test_requires_email(self, api_client):
        response = api_client.get(reverse("booking-list"))
        assert response.status_code == 400
        assert response.json()["fields"] == ["email"]

    def test_rejects_unknown_status(self, api_client):
        response = api_client.get(
            reverse("booking-list"), {"email": "asha@example.com", "status": "lost"}
        )
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_STATUS_FILTER"

    def test_lists_bookings_for_email(self, api_client, make_experience, booking_payload):
        experience = make_experience()
        api_client.post(reverse("booking-list"), booking_payload(experience), format="json")

        response = api_client.get(reverse("booking-list"), {"email": "ASHA@example.com"})

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 1
        item = body["data"][0]
        assert item["experienceId"] == str(experience.id)
        assert item["email"] == "asha@example.com"
        assert item["pricePerPerson"] == 1000
        assert item["promoCode"] is None
        assert item["status"] == "confirmed"


@pytest.mark.django_db
class TestPromoEndpoint:
    """Tests for /api/promo/validate"""

    def test_lists_codes(self, api_client):
        body = api_client.get(reverse("promo-validate")).json()
        assert body["success"] is True
        assert body["count"] == 3
        codes = {item["code"]: item for item in body["data"]}
        assert codes["SAVE10"]["type"] == "percent"
        assert codes["SAVE10"]["minAmount"] == 500
        assert codes["WELCOME20"]["minAmount"] == 0

    def test_preview_valid_code(self, api_client):
        response = api_client.post(
            reverse("promo-validate"), {"code": "save10", "amount": 2000}, format="json"
        )
        assert response.status_code == 200
        body = response.json()
        assert body["valid"] is True
        assert body["code"] == "SAVE10"
        assert body["type"] == "percent"
        assert body["discount"] == 200
        assert body["savings"] == 200
        assert body["finalAmount"] == 1800
        assert body["message"] == "10% discount applied successfully!"
        assert "error" not in body

    def test_preview_invalid_code(self, api_client):
        body = api_client.post(
            reverse("promo-validate"), {"code": "XYZ123", "amount": 2000}, format="json"
        ).json()
        assert body == {
            "valid": False,
            "code": "XYZ123",
            "message": "The promo code you entered is not valid",
            "error": "Invalid promo code",
        }

    def test_preview_minimum_not_met(self, api_client):
        body = api_client.post(
            reverse("promo-validate"), {"code": "FLAT100", "amount": 500}, format="json"
        ).json()
        assert body["valid"] is False
        assert body["error"] == "Minimum amount not met"
        assert body["minAmount"] == 1000

    @pytest.mark.parametrize(
        "payload",
        [
            {"amount": 100},
            {"code": "SAVE10", "amount": -5},
            {"code": "SAVE10", "amount": "1e30"},
        ],
    )
    def test_preview_bad_request(self, api_client, payload):
        response = api_client.post(reverse("promo-validate"), payload, format="json")
        assert response.status_code == 400
        assert response.json()["valid"] is False
        assert response.json()["errorCode"] == "INVALID_PROMO_REQUEST"
