import uuid

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Experience",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("title", models.CharField(max_length=200, validators=[django.core.validators.MinLengthValidator(3)])),
                ("location", models.CharField(max_length=255)),
                ("image", models.CharField(max_length=500)),
                ("description", models.TextField(validators=[django.core.validators.MinLengthValidator(10)])),
                ("price", models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(0)])),
                ("about", models.TextField()),
                ("available_dates", models.JSONField(blank=True, default=list)),
                ("available_times", models.JSONField(blank=True, default=list)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["-created_at"], name="experience_created_idx"),
                    models.Index(fields=["title", "location"], name="experience_title_loc_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("price__gte", 0)), name="experience_price_non_negative"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Slot",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.CharField(max_length=32)),
                ("time", models.CharField(max_length=32)),
                ("booked", models.PositiveIntegerField(default=0)),
                ("capacity", models.PositiveIntegerField(default=10, validators=[django.core.validators.MinValueValidator(1)])),
                (
                    "experience",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="slots",
                        to="experiences.experience",
                    ),
                ),
            ],
            options={
                "ordering": ["id"],
                "indexes": [
                    models.Index(fields=["date", "time"], name="slot_date_time_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("experience", "date", "time"), name="unique_slot_per_experience"),
                    models.CheckConstraint(condition=models.Q(("booked__lte", models.F("capacity"))), name="slot_booked_within_capacity"),
                    models.CheckConstraint(condition=models.Q(("capacity__gte", 1)), name="slot_capacity_at_least_one"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Booking",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("experience_title", models.CharField(max_length=200)),
                ("full_name", models.CharField(max_length=100, validators=[django.core.validators.MinLengthValidator(2)])),
                ("email", models.EmailField(max_length=254)),
                ("phone", models.CharField(blank=True, max_length=32, null=True)),
                ("date", models.CharField(max_length=32)),
                ("time", models.CharField(max_length=32)),
                (
                    "quantity",
                    models.PositiveSmallIntegerField(
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(20),
                        ]
                    ),
                ),
                ("price_per_person", models.DecimalField(decimal_places=2, max_digits=10)),
                ("subtotal", models.DecimalField(decimal_places=2, max_digits=12)),
                ("discount", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("total", models.DecimalField(decimal_places=2, max_digits=12)),
                ("promo_code", models.CharField(blank=True, max_length=32, null=True)),
                (
                    "status",
                    models.CharField(
                        choices=[("confirmed", "Confirmed"), ("pending", "Pending"), ("cancelled", "Cancelled")],
                        default="confirmed",
                        max_length=16,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "experience",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="bookings",
                        to="experiences.experience",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["experience", "date", "time", "email"], name="booking_slot_email_idx"),
                    models.Index(fields=["email", "-created_at"], name="booking_email_created_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("status", "cancelled"), _negated=True),
                        fields=("experience", "email", "date", "time"),
                        name="unique_active_booking",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("quantity__gte", 1), ("quantity__lte", 20)),
                        name="booking_quantity_in_range",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("discount__lte", models.F("subtotal"))),
                        name="booking_discount_within_subtotal",
                    ),
                ],
            },
        ),
    ]
