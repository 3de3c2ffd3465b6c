"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

from collections.abc import Mapping

from django.core.cache import cache
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from experiences.cache import experience_detail_key, experience_slots_key, get_cache_timeout
from experiences.domain import ExperienceId, Page
from experiences.domain.errors import DomainError, ErrorCode
from experiences.handlers import dependencies
from experiences.handlers.serializers import (
    BookingConfirmationSerializer,
    BookingSerializer,
    ExperienceDetailSerializer,
    ExperienceSerializer,
    PromoCodeSerializer,
    PromoPreviewSerializer,
    SlotAvailabilitySerializer,
)

ERROR_STATUS = {
    ErrorCode.EXPERIENCE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.SLOT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.CAPACITY_EXCEEDED: status.HTTP_409_CONFLICT,
    ErrorCode.DUPLICATE_BOOKING: status.HTTP_409_CONFLICT,
    ErrorCode.TRANSACTION_FAILED: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def error_response(error: DomainError) -> Response:
    body = {"success": False, "code": error.code.value, "error": error.message}
    body.update(error.details())
    return Response(body, status=ERROR_STATUS.get(error.code, status.HTTP_400_BAD_REQUEST))


def page_response(page: Page, serializer_class) -> Response:
    return Response(
        {
            "success": True,
            "count": len(page.items),
            "total": page.total,
            "page": page.page,
            "totalPages": page.total_pages,
            "hasMore": page.has_more,
            "data": serializer_class(page.items, many=True).data,
        }
    )


def _body(request: Request) -> Mapping:
    return request.data if isinstance(request.data, Mapping) else {}


def _canonical_id(experience_id: str) -> str:
    try:
        return str(ExperienceId.from_string(experience_id))
    except ValueError:
        return experience_id


class ExperienceListView(APIView):
    """Handler for GET /api/experiences"""

    def get(self, request: Request) -> Response:
        try:
            page = dependencies.get_experience_service().list_experiences(
                request.query_params.get("page"), request.query_params.get("limit")
            )
        except DomainError as err:
            return error_response(err)
        return page_response(page, ExperienceSerializer)


class ExperienceDetailView(APIView):
    """Handler for GET /api/experiences/{experience_id}"""

    def get(self, request: Request, experience_id: str) -> Response:
        key = experience_detail_key(_canonical_id(experience_id))
        data = cache.get(key)
        if data is None:
            try:
                experience = dependencies.get_experience_service().get_experience(experience_id)
            except DomainError as err:
                return error_response(err)
            data = ExperienceDetailSerializer(experience).data
            cache.set(key, data, get_cache_timeout())
        return Response({"success": True, "data": data})


class SlotListView(APIView):
    """Handler for GET /api/experiences/{experience_id}/slots"""

    def get(self, request: Request, experience_id: str) -> Response:
        key = experience_slots_key(_canonical_id(experience_id))
        data = cache.get(key)
        if data is None:
            try:
                slots = dependencies.get_experience_service().get_slot_availability(
                    experience_id
                )
            except DomainError as err:
                return error_response(err)
            data = SlotAvailabilitySerializer(slots, many=True).data
            cache.set(key, data, get_cache_timeout())
        return Response({"success": True, "count": len(data), "data": data})


class BookingListCreateView(APIView):
    """Handler for GET and POST /api/bookings"""

    def get(self, request: Request) -> Response:
        params = request.query_params
        try:
            page = dependencies.get_booking_service().list_bookings(
                email=params.get("email"),
                status=params.get("status"),
                page=params.get("page"),
                page_size=params.get("limit"),
            )
        except DomainError as err:
            return error_response(err)
        return page_response(page, BookingSerializer)

    def post(self, request: Request) -> Response:
        try:
            confirmation = dependencies.get_booking_service().create_booking(_body(request))
        except DomainError as err:
            return error_response(err)
        return Response(
            {
                "success": True,
                "message": "Booking confirmed successfully",
                "data": BookingConfirmationSerializer(confirmation).data,
            },
            status=status.HTTP_201_CREATED,
        )


class PromoValidateView(APIView):
    """Handler for GET and POST /api/promo/validate"""

    def get(self, request: Request) -> Response:
        codes = dependencies.get_promo_service().list_codes()
        return Response(
            {
                "success": True,
                "count": len(codes),
                "data": PromoCodeSerializer(codes, many=True).data,
            }
        )

    def post(self, request: Request) -> Response:
        try:
            body = _body(request)
            preview = dependencies.get_promo_service().preview(body.get("code"), body.get("amount"))
        except DomainError as err:
            body = {"valid": False, "errorCode": err.code.value, "error": err.message}
            return Response(body, status=status.HTTP_400_BAD_REQUEST)
        return Response(PromoPreviewSerializer(preview).data)
