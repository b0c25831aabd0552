from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("slug", models.SlugField(blank=True, max_length=255, unique=True)),
                ("description", models.TextField(blank=True, null=True)),
                ("price", models.DecimalField(decimal_places=2, max_digits=10)),
                ("file_path", models.CharField(max_length=500)),
                ("preview_image", models.ImageField(blank=True, null=True, upload_to="previews/")),
                ("file_type", models.CharField(max_length=20)),
                ("file_size", models.PositiveBigIntegerField(default=0)),
                ("tags", models.JSONField(blank=True, default=list)),
                ("category", models.CharField(blank=True, db_index=True, max_length=100, null=True)),
                ("license_type", models.CharField(choices=[("standard", "Standard"), ("extended", "Extended"), ("commercial", "Commercial")], default="standard", max_length=20)),
                ("is_active", models.BooleanField(db_index=True, default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
    ]
