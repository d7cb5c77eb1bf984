"""Admin registrations for the inventory domain."""

from __future__ import annotations

from django.contrib import admin

from .models import Bed, Pack, Room, Service


class BedInline(admin.TabularInline):
    model = Bed
    extra = 0
    fields = ("bed_number", "is_available")


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ("room_number", "room_type", "price_per_night", "is_active")
    list_filter = ("room_type", "is_active")
    search_fields = ("room_number",)
    inlines = (BedInline,)
    readonly_fields = ("created_at", "updated_at")


@admin.register(Bed)
class BedAdmin(admin.ModelAdmin):
    list_display = ("bed_number", "room", "is_available")
    list_filter = ("is_available", "room__room_type")
    search_fields = ("room__room_number",)


@admin.register(Service)
class ServiceAdmin(admin.ModelAdmin):
    list_display = ("name", "category", "price", "price_type", "is_active")
    list_filter = ("category", "price_type", "is_active")
    search_fields = ("name",)


@admin.register(Pack)
class PackAdmin(admin.ModelAdmin):
    list_display = ("name", "room_type", "duration_days", "promo_price", "is_active")
    list_filter = ("room_type", "is_active")
    search_fields = ("name",)
    filter_horizontal = ("included_services",)
