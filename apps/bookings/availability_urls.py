"""URL routing for availability checks."""

from django.urls import path  # type: ignore

from .views import AvailableRoomsView, BedAvailabilityView, RoomAvailabilityView

urlpatterns = [
    path("rooms/", AvailableRoomsView.as_view(), name="available-rooms"),
    path("rooms/<int:room_id>/", RoomAvailabilityView.as_view(), name="room-availability"),
    path("beds/", BedAvailabilityView.as_view(), name="bed-availability"),
]
