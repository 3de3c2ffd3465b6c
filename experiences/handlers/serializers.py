"""Serializers for transforming domain models to API responses.

Keys are camelCase to match the booking client's contract.
"""

from rest_framework import serializers


def _money(source: str | None = None) -> serializers.DecimalField:
    if source is None:
        return serializers.DecimalField(max_digits=12, decimal_places=2)
    return serializers.DecimalField(max_digits=12, decimal_places=2, source=source)


class SlotAvailabilitySerializer(serializers.Serializer):
    """Serializer for Slot domain model."""

    date = serializers.CharField()
    time = serializers.CharField()
    available = serializers.IntegerField()
    capacity = serializers.IntegerField()
    status = serializers.SerializerMethodField()

    def get_status(self, obj) -> str:
        return obj.status.value


class ExperienceSerializer(serializers.Serializer):
    """Serializer for Experience domain model (list items)."""

    id = serializers.UUIDField(source="id.value")
    title = serializers.CharField()
    location = serializers.CharField()
    image = serializers.CharField()
    description = serializers.CharField()
    price = _money("price.amount")
    availableDates = serializers.ListField(child=serializers.CharField(), source="available_dates")
    availableTimes = serializers.ListField(child=serializers.CharField(), source="available_times")
    createdAt = serializers.DateTimeField(source="created_at")


class ExperienceDetailSerializer(ExperienceSerializer):
    """Experience with open slots, without exposing booked counters."""

    about = serializers.CharField()
    availableSlots = serializers.SerializerMethodField()
    totalAvailableSlots = serializers.SerializerMethodField()

    def get_availableSlots(self, obj) -> list[dict]:
        return [
            {"date": slot.date, "time": slot.time, "available": slot.available}
            for slot in obj.open_slots()
        ]

    def get_totalAvailableSlots(self, obj) -> int:
        return sum(slot.available for slot in obj.open_slots())


class BookingSerializer(serializers.Serializer):
    """Serializer for Booking domain model (history items)."""

    id = serializers.UUIDField(source="id.value")
    experienceId = serializers.UUIDField(source="experience_id.value")
    experienceTitle = serializers.CharField(source="experience_title")
    fullName = serializers.CharField(source="full_name")
    email = serializers.CharField(source="email.value")
    phone = serializers.CharField(allow_null=True)
    date = serializers.CharField()
    time = serializers.CharField()
    quantity = serializers.IntegerField()
    pricePerPerson = _money("price_per_person.amount")
    subtotal = _money("subtotal.amount")
    discount = _money("discount.amount")
    total = _money("total.amount")
    promoCode = serializers.CharField(source="promo_code", allow_null=True)
    status = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source="created_at")

    def get_status(self, obj) -> str:
        return obj.status.value


class PromoApplicationSerializer(serializers.Serializer):
    code = serializers.CharField()
    type = serializers.SerializerMethodField()
    value = _money()
    discount = _money()

    def get_type(self, obj) -> str:
        return obj.kind.value


class BookingConfirmationSerializer(serializers.Serializer):
    bookingId = serializers.UUIDField(source="booking.id.value")
    experienceTitle = serializers.CharField(source="booking.experience_title")
    fullName = serializers.CharField(source="booking.full_name")
    email = serializers.CharField(source="booking.email.value")
    date = serializers.CharField(source="booking.date")
    time = serializers.CharField(source="booking.time")
    quantity = serializers.IntegerField(source="booking.quantity")
    subtotal = _money("booking.subtotal.amount")
    discount = _money("booking.discount.amount")
    total = _money("booking.total.amount")
    promoApplied = PromoApplicationSerializer(source="promo_applied", allow_null=True)
    status = serializers.SerializerMethodField()

    def get_status(self, obj) -> str:
        return obj.booking.status.value


class PromoCodeSerializer(serializers.Serializer):
    code = serializers.CharField()
    type = serializers.SerializerMethodField()
    value = _money()
    minAmount = serializers.SerializerMethodField()
    description = serializers.CharField()

    def get_type(self, obj) -> str:
        return obj.kind.value

    def get_minAmount(self, obj):
        return obj.min_amount if obj.min_amount is not None else 0


class PromoPreviewSerializer(serializers.Serializer):
    valid = serializers.BooleanField()
    code = serializers.CharField()
    type = serializers.SerializerMethodField()
    value = _money()
    discount = _money()
    finalAmount = _money("final_amount")
    savings = _money("discount")
    minAmount = _money("min_amount")
    message = serializers.CharField()
    description = serializers.CharField(allow_null=True)
    error = serializers.CharField(allow_null=True)

    def get_type(self, obj) -> str | None:
        return obj.kind.value if obj.kind else None

    def to_representation(self, instance):
        data = super().to_representation(instance)
        return {key: value for key, value in data.items() if value is not None}
