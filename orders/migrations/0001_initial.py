from django.db import migrations, models
import django.core.validators
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("profiles", "0001_initial"),
        ("restaurants", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Order",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "pending"),
                            ("processing", "processing"),
                            ("preparing", "preparing"),
                            ("ready", "ready"),
                            ("picked", "picked"),
                            ("delivered", "delivered"),
                            ("cancelled", "cancelled"),
                        ],
                        default="pending",
                        max_length=20,
                    ),
                ),
                ("total", models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(0)])),
                ("delivery_fee", models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(0)])),
                ("address", models.TextField()),
                ("phone", models.CharField(max_length=50)),
                (
                    "payment_method",
                    models.CharField(
                        choices=[("cash", "cash"), ("esewa", "esewa"), ("khalti", "khalti")],
                        max_length=20,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("estimated_delivery_time", models.PositiveIntegerField(blank=True, null=True)),
                ("actual_delivery_time", models.PositiveIntegerField(blank=True, null=True)),
                ("cancel_reason", models.TextField(blank=True, null=True)),
                (
                    "customer",
                    models.ForeignKey(
                        limit_choices_to={"type": "customer"},
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="orders_placed",
                        to="profiles.profile",
                    ),
                ),
                (
                    "partner",
                    models.ForeignKey(
                        blank=True,
                        limit_choices_to={"type": "partner"},
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="deliveries",
                        to="profiles.profile",
                    ),
                ),
                (
                    "restaurant",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="orders",
                        to="restaurants.restaurant",
                    ),
                ),
            ],
            options={
                "db_table": "orders",
                "ordering": ("-created_at", "-id"),
            },
        ),
        migrations.CreateModel(
            name="OrderItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("quantity", models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ("price", models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(0)])),
                (
                    "food_item",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="order_items",
                        to="restaurants.fooditem",
                    ),
                ),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="orders.order",
                    ),
                ),
            ],
            options={
                "db_table": "order_items",
                "ordering": ["id"],
            },
        ),
        migrations.AddIndex(
            model_name="order",
            index=models.Index(fields=["status", "partner"], name="orders_pool_idx"),
        ),
    ]
