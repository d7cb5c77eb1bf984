"""FilterSet definitions for the public service and pack catalogues."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Pack, RoomType, Service


class ServiceFilterSet(django_filters.FilterSet):
    category = django_filters.ChoiceFilter(choices=Service.Category.choices)
    price_type = django_filters.ChoiceFilter(choices=Service.PriceType.choices)

    class Meta:
        model = Service
        fields = ["category", "price_type"]


class PackFilterSet(django_filters.FilterSet):
    """Packs are sold for one room type; guests browse them by that type."""

    room_type = django_filters.ChoiceFilter(choices=RoomType.choices)
    max_price = django_filters.NumberFilter(field_name="promo_price", lookup_expr="lte")

    class Meta:
        model = Pack
        fields = ["room_type"]
