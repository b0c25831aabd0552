from django.db import models
from django.db.models import Q
from django.utils.text import slugify


class ProductQuerySet(models.QuerySet):
    def active(self):
        return self.filter(is_active=True)

    def search(self, term):
        return self.filter(
            Q(name__icontains=term) | Q(description__icontains=term) | Q(category__icontains=term)
        )

    def in_category(self, name):
        return self.filter(category__iexact=name)


class Product(models.Model):
    class LicenseType(models.TextChoices):
        STANDARD = "standard", "Standard"
        EXTENDED = "extended", "Extended"
        COMMERCIAL = "commercial", "Commercial"

    name = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, unique=True, blank=True)
    description = models.TextField(blank=True, null=True)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    # relative to the "products" storage, never served directly
    file_path = models.CharField(max_length=500)
    preview_image = models.ImageField(upload_to="previews/", blank=True, null=True)
    file_type = models.CharField(max_length=20)  # PSD, AI, JPG, PNG, SVG
    file_size = models.PositiveBigIntegerField(default=0)  # bytes
    tags = models.JSONField(default=list, blank=True)
    category = models.CharField(max_length=100, blank=True, null=True, db_index=True)
    license_type = models.CharField(
        max_length=20, choices=LicenseType.choices, default=LicenseType.STANDARD
    )
    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ProductQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        # auto-generate slug if not provided
        if not self.slug:
            base = slugify(self.name)[:200] or "product"
            slug = base
            i = 1
            while Product.objects.filter(slug=slug).exclude(pk=self.pk).exists():
                slug = f"{base}-{i}"
                i += 1
            self.slug = slug
        super().save(*args, **kwargs)

    @property
    def download_name(self):
        """File name used for this product inside an order archive."""
        return f"{self.name}.{self.file_type.lower()}"
