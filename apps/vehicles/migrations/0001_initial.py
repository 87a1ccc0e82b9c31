from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Vehicle",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100)),
                ("vehicle_type", models.CharField(db_index=True, max_length=50)),
                ("seats", models.PositiveSmallIntegerField(default=4)),
                ("power", models.CharField(blank=True, max_length=50)),
                ("rating", models.DecimalField(blank=True, decimal_places=1, max_digits=3, null=True)),
                ("price", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                (
                    "city",
                    models.CharField(
                        blank=True,
                        help_text="City where the vehicle can be picked up.",
                        max_length=100,
                        null=True,
                    ),
                ),
                ("image", models.CharField(blank=True, max_length=500, null=True)),
                (
                    "special",
                    models.CharField(
                        blank=True,
                        help_text="Promotional label shown next to the vehicle.",
                        max_length=100,
                        null=True,
                    ),
                ),
                ("description", models.TextField(blank=True, null=True)),
                ("features", models.JSONField(blank=True, default=list)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Vehicle",
                "verbose_name_plural": "Vehicles",
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="AvailabilityWindow",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("start_date", models.DateTimeField()),
                ("end_date", models.DateTimeField()),
                ("is_available", models.BooleanField(default=True)),
                (
                    "vehicle_type",
                    models.CharField(
                        blank=True,
                        help_text="Copy of the vehicle type used to narrow availability queries.",
                        max_length=50,
                        null=True,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "vehicle",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="availability_windows",
                        to="vehicles.vehicle",
                    ),
                ),
            ],
            options={
                "verbose_name": "Availability window",
                "verbose_name_plural": "Availability windows",
                "ordering": ["start_date", "id"],
            },
        ),
        migrations.AddConstraint(
            model_name="availabilitywindow",
            constraint=models.CheckConstraint(
                condition=models.Q(end_date__gt=models.F("start_date")),
                name="window_end_after_start",
            ),
        ),
        migrations.AddIndex(
            model_name="availabilitywindow",
            index=models.Index(fields=["vehicle", "start_date", "end_date"], name="window_vehicle_dates_idx"),
        ),
    ]
