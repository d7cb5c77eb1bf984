"""API views for the booking domain."""

from __future__ import annotations

import structlog  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.dateparse import parse_date  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.exceptions import ValidationError  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from .application.command_handlers import (
    CancelBookingCommand,
    CancelBookingHandler,
    CreateBookingHandler,
    DeleteBookingCommand,
    DeleteBookingHandler,
    UpdateBookingStatusCommand,
    UpdateBookingStatusHandler,
    UpdatePaymentStatusCommand,
    UpdatePaymentStatusHandler,
)
from .filters import BookingFilterSet
from .projections import BookingView
from .repositories import BookingRepository
from .serializers import (
    AvailabilityReportSerializer,
    AvailableRoomsQuerySerializer,
    BedAvailabilityReportSerializer,
    BedAvailabilityRequestSerializer,
    BookingCreateSerializer,
    BookingStatusUpdateSerializer,
    BookingViewSerializer,
    CancelBookingSerializer,
    DateRangeQuerySerializer,
    PaymentStatusUpdateSerializer,
)
from .services import check_availability, find_available_rooms

logger = structlog.get_logger(__name__)

PUBLIC_ACTIONS = {"create", "by_reference", "by_access_code"}


class BookingViewSet(viewsets.GenericViewSet):
    """Guests create and look up bookings; staff manage them."""

    serializer_class = BookingViewSerializer
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = BookingFilterSet
    ordering_fields = ["check_in_date", "check_out_date", "created_at"]
    ordering = ["-created_at"]
    lookup_value_regex = r"\d+"

    def get_queryset(self):  # type: ignore
        return BookingRepository.base_queryset()

    def get_permissions(self):  # type: ignore
        if self.action in PUBLIC_ACTIONS:
            return [permissions.AllowAny()]
        return [permissions.IsAdminUser()]

    def _render(self, view: BookingView, status_code: int = status.HTTP_200_OK) -> Response:
        return Response(BookingViewSerializer(view).data, status=status_code)

    def list(self, request, *args, **kwargs):  # type: ignore
        queryset = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(queryset)
        bookings = page if page is not None else queryset
        data = BookingViewSerializer([BookingView.from_booking(b) for b in bookings], many=True).data
        if page is not None:
            return self.get_paginated_response(data)
        return Response(data)

    def retrieve(self, request, pk=None, *args, **kwargs):  # type: ignore
        return self._render(BookingRepository().get_view(int(pk)))

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = BookingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        view = CreateBookingHandler().handle(serializer.to_command())
        logger.info("booking.created", reference=view.booking_reference, beds=len(view.beds))
        return self._render(view, status.HTTP_201_CREATED)

    def destroy(self, request, pk=None, *args, **kwargs):  # type: ignore
        DeleteBookingHandler().handle(DeleteBookingCommand(booking_id=int(pk)))
        logger.warning("booking.purged", booking_id=int(pk), user=request.user.pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=["get"], url_path=r"reference/(?P<reference>[A-Za-z0-9-]+)")
    def by_reference(self, request, reference=None):  # type: ignore
        return self._render(BookingRepository().get_view_by_reference(reference))

    @action(detail=False, methods=["get"], url_path=r"code/(?P<access_code>[0-9]{6})")
    def by_access_code(self, request, access_code=None):  # type: ignore
        return self._render(BookingRepository().get_view_by_access_code(access_code))

    @action(detail=True, methods=["post"], url_path="status")
    def update_status(self, request, pk=None):  # type: ignore
        serializer = BookingStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        view = UpdateBookingStatusHandler().handle(
            UpdateBookingStatusCommand(
                booking_id=int(pk),
                status=serializer.validated_data["status"],
                expected_version=serializer.validated_data.get("expected_version"),
            )
        )
        return self._render(view)

    @action(detail=True, methods=["post"], url_path="payment-status")
    def update_payment_status(self, request, pk=None):  # type: ignore
        serializer = PaymentStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        view = UpdatePaymentStatusHandler().handle(
            UpdatePaymentStatusCommand(
                booking_id=int(pk),
                payment_status=serializer.validated_data["payment_status"],
                expected_version=serializer.validated_data.get("expected_version"),
            )
        )
        return self._render(view)

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):  # type: ignore
        serializer = CancelBookingSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        CancelBookingHandler().handle(
            CancelBookingCommand(
                booking_id=int(pk),
                expected_version=serializer.validated_data.get("expected_version"),
            )
        )
        return self._render(BookingRepository().get_view(int(pk)))

    def _day_param(self, request):  # type: ignore
        raw = request.query_params.get("date")
        if not raw:
            return timezone.localdate()
        day = parse_date(raw)
        if day is None:
            raise ValidationError({"date": "Use the YYYY-MM-DD format."})
        return day

    @action(detail=False, methods=["get"], url_path="check-ins")
    def check_ins(self, request):  # type: ignore
        views = BookingRepository().check_ins_on(self._day_param(request))
        return Response(BookingViewSerializer(views, many=True).data)

    @action(detail=False, methods=["get"], url_path="check-outs")
    def check_outs(self, request):  # type: ignore
        views = BookingRepository().check_outs_on(self._day_param(request))
        return Response(BookingViewSerializer(views, many=True).data)


class RoomAvailabilityView(APIView):
    """Free beds of a room for a date range, with the next free date when full."""

    permission_classes = [permissions.AllowAny]

    def get(self, request, room_id: int):  # type: ignore
        serializer = DateRangeQuerySerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        report = check_availability(
            serializer.validated_data["check_in"],
            serializer.validated_data["check_out"],
            room_id=room_id,
        )
        return Response(AvailabilityReportSerializer(report).data)


class BedAvailabilityView(APIView):
    """All-or-nothing availability of an explicit set of beds."""

    permission_classes = [permissions.AllowAny]

    def post(self, request):  # type: ignore
        serializer = BedAvailabilityRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        report = check_availability(
            serializer.validated_data["check_in"],
            serializer.validated_data["check_out"],
            bed_ids=serializer.validated_data["bed_ids"],
        )
        return Response(BedAvailabilityReportSerializer(report).data)


class AvailableRoomsView(APIView):
    """Active rooms that still have a free bed for the date range."""

    permission_classes = [permissions.AllowAny]

    def get(self, request):  # type: ignore
        serializer = AvailableRoomsQuerySerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        reports = find_available_rooms(
            serializer.validated_data["check_in"],
            serializer.validated_data["check_out"],
            room_type=serializer.validated_data.get("room_type"),
        )
        return Response(AvailabilityReportSerializer(reports, many=True).data)
