from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


ROOM_TYPE_CHOICES = [
    ("DOUBLE", "Double room"),
    ("SINGLE", "Single room"),
    ("DORTOIR", "Dormitory"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Room",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("room_number", models.CharField(max_length=10, unique=True)),
                ("room_type", models.CharField(choices=ROOM_TYPE_CHOICES, max_length=20)),
                ("description", models.TextField(blank=True)),
                (
                    "price_per_night",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.01"))],
                    ),
                ),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Room",
                "verbose_name_plural": "Rooms",
                "ordering": ["room_number"],
                "indexes": [
                    models.Index(fields=["room_type"], name="room_type_idx"),
                    models.Index(fields=["is_active"], name="room_active_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Service",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100)),
                ("description", models.TextField(blank=True)),
                (
                    "price",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.00"))],
                    ),
                ),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("TRANSPORT", "Transport"),
                            ("MEAL", "Meals"),
                            ("ACTIVITY", "Activities"),
                            ("OTHER", "Other"),
                        ],
                        max_length=20,
                    ),
                ),
                (
                    "price_type",
                    models.CharField(
                        choices=[
                            ("FIXED", "Charged once for the stay"),
                            ("PER_NIGHT", "Multiplied by the number of nights"),
                        ],
                        default="FIXED",
                        max_length=20,
                    ),
                ),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Service",
                "verbose_name_plural": "Services",
                "ordering": ["name"],
                "indexes": [
                    models.Index(fields=["category"], name="service_category_idx"),
                    models.Index(fields=["is_active"], name="service_active_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Bed",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("bed_number", models.CharField(max_length=10)),
                (
                    "is_available",
                    models.BooleanField(
                        default=True,
                        help_text="Administrative flag, unrelated to date-range availability.",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "room",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="beds",
                        to="inventory.room",
                    ),
                ),
            ],
            options={
                "verbose_name": "Bed",
                "verbose_name_plural": "Beds",
                "ordering": ["room_id", "id"],
                "constraints": [
                    models.UniqueConstraint(fields=("room", "bed_number"), name="uk_room_bed_number"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Pack",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True)),
                ("duration_days", models.PositiveIntegerField()),
                ("original_price", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                (
                    "promo_price",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.01"))],
                    ),
                ),
                ("room_type", models.CharField(choices=ROOM_TYPE_CHOICES, max_length=20)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "included_services",
                    models.ManyToManyField(blank=True, related_name="packs", to="inventory.service"),
                ),
            ],
            options={
                "verbose_name": "Pack",
                "verbose_name_plural": "Packs",
                "ordering": ["name"],
            },
        ),
    ]
