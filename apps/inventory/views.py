"""Inventory API views."""

from __future__ import annotations

from django.db.models import Prefetch  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.response import Response  # type: ignore

from .filters import PackFilterSet, ServiceFilterSet
from .models import Bed, Pack, Room, Service
from .serializers import (
    PackSerializer,
    RoomCreateSerializer,
    RoomSerializer,
    ServiceSerializer,
)
from .services import create_room


class ActiveOnlyForGuestsMixin:
    """Staff see the whole catalogue, everyone else only active entries."""

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        user = self.request.user
        if getattr(user, "is_staff", False):
            return qs
        return qs.filter(is_active=True)


class RoomViewSet(
    ActiveOnlyForGuestsMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    viewsets.GenericViewSet,
):
    """Rooms with their beds; anyone can browse, staff can add rooms."""

    queryset = Room.objects.prefetch_related(Prefetch("beds", Bed.objects.order_by("id")))
    serializer_class = RoomSerializer

    def get_permissions(self):  # type: ignore
        if self.action in {"list", "retrieve"}:
            return [permissions.AllowAny()]
        return [permissions.IsAdminUser()]

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = RoomCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        room = create_room(**serializer.validated_data)
        room = self.get_queryset().get(pk=room.pk)
        return Response(RoomSerializer(room).data, status=status.HTTP_201_CREATED)


class ServiceViewSet(ActiveOnlyForGuestsMixin, viewsets.ReadOnlyModelViewSet):
    """Extras a guest can add to a booking, filterable by category."""

    queryset = Service.objects.all()
    serializer_class = ServiceSerializer
    permission_classes = [permissions.AllowAny]
    filter_backends = [DjangoFilterBackend]
    filterset_class = ServiceFilterSet


class PackViewSet(ActiveOnlyForGuestsMixin, viewsets.ReadOnlyModelViewSet):
    """Flat-priced packs with their included services, filterable by room type."""

    queryset = Pack.objects.prefetch_related("included_services")
    serializer_class = PackSerializer
    permission_classes = [permissions.AllowAny]
    filter_backends = [DjangoFilterBackend]
    filterset_class = PackFilterSet
