"""URL routing for the inventory domain."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import PackViewSet, RoomViewSet, ServiceViewSet

router = DefaultRouter()
router.register(r"rooms", RoomViewSet, basename="room")
router.register(r"services", ServiceViewSet, basename="service")
router.register(r"packs", PackViewSet, basename="pack")

urlpatterns = [
    path("", include(router.urls)),
]
