from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Customer",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("first_name", models.CharField(max_length=100)),
                ("last_name", models.CharField(max_length=100)),
                ("dni", models.CharField(max_length=8, unique=True)),
                ("email", models.CharField(max_length=254)),
            ],
            options={
                "db_table": "customers",
                "ordering": ["id"],
                "indexes": [
                    models.Index(
                        fields=["last_name", "first_name"],
                        name="customers_name_idx",
                    )
                ],
            },
        ),
    ]
