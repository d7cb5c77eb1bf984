"""Integration tests for the public service and pack catalogue."""

from __future__ import annotations

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.inventory.models import Pack, RoomType, Service


class CatalogueAPITests(APITestCase):
    def setUp(self) -> None:
        self.breakfast = Service.objects.create(
            name="Breakfast",
            price=Decimal("30.00"),
            category=Service.Category.MEAL,
            price_type=Service.PriceType.PER_NIGHT,
        )
        self.transfer = Service.objects.create(
            name="Airport transfer",
            price=Decimal("150.00"),
            category=Service.Category.TRANSPORT,
        )
        self.retired = Service.objects.create(
            name="Bike rental",
            price=Decimal("60.00"),
            category=Service.Category.ACTIVITY,
            is_active=False,
        )
        self.surf = Pack.objects.create(
            name="Surf week",
            duration_days=7,
            promo_price=Decimal("900.00"),
            room_type=RoomType.DORTOIR,
        )
        self.surf.included_services.set([self.breakfast])
        self.honeymoon = Pack.objects.create(
            name="Atlas weekend",
            duration_days=2,
            promo_price=Decimal("1200.00"),
            room_type=RoomType.DOUBLE,
        )
        self.old_pack = Pack.objects.create(
            name="Winter deal",
            duration_days=5,
            promo_price=Decimal("500.00"),
            room_type=RoomType.DORTOIR,
            is_active=False,
        )

    def test_guests_see_active_services_only(self) -> None:
        response = self.client.get(reverse("service-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(
            [service["name"] for service in response.data["results"]],
            ["Airport transfer", "Breakfast"],
        )

    def test_services_by_category(self) -> None:
        response = self.client.get(reverse("service-list"), {"category": Service.Category.MEAL})

        self.assertEqual([service["id"] for service in response.data["results"]], [self.breakfast.id])
        self.assertEqual(response.data["results"][0]["price_type"], "PER_NIGHT")

    def test_inactive_service_is_hidden_from_guests(self) -> None:
        response = self.client.get(reverse("service-detail", kwargs={"pk": self.retired.pk}))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_packs_by_room_type_with_included_services(self) -> None:
        response = self.client.get(reverse("pack-list"), {"room_type": RoomType.DORTOIR})

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        results = response.data["results"]
        self.assertEqual([pack["name"] for pack in results], ["Surf week"])
        self.assertEqual(results[0]["promo_price"], "900.00")
        self.assertEqual([s["name"] for s in results[0]["included_services"]], ["Breakfast"])

    def test_pack_detail(self) -> None:
        response = self.client.get(reverse("pack-detail", kwargs={"pk": self.honeymoon.pk}))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["room_type"], RoomType.DOUBLE)
        self.assertEqual(response.data["duration_days"], 2)

    def test_staff_see_retired_entries(self) -> None:
        staff = get_user_model().objects.create_user(username="manager", password="StrongPass123", is_staff=True)
        self.client.force_authenticate(staff)

        services = self.client.get(reverse("service-list"))
        packs = self.client.get(reverse("pack-list"))

        self.assertEqual(services.data["count"], 3)
        self.assertEqual(packs.data["count"], 3)

    def test_catalogue_is_read_only(self) -> None:
        response = self.client.post(reverse("service-list"), {"name": "Spa"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_405_METHOD_NOT_ALLOWED)
