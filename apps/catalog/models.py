from django.db import models
from django.core.validators import MinValueValidator
from django.utils.text import slugify
from decimal import Decimal
import uuid
import re


class Category(models.Model):
    """Product category (Audio, Computers, Smart Home, ...)."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'categories'
        ordering = ['name']
        verbose_name_plural = 'categories'

    def __str__(self):
        return self.name


class Product(models.Model):
    """Sellable product with its current stock level."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200, db_index=True)
    slug = models.SlugField(max_length=220, unique=True)
    name_normalized = models.CharField(max_length=200, db_index=True, editable=False)
    description = models.TextField(blank=True)
    image = models.URLField(max_length=500, blank=True)
    vendor = models.CharField(max_length=100, db_index=True)
    vendor_normalized = models.CharField(max_length=100, db_index=True, editable=False)
    serial_no = models.CharField(max_length=64, blank=True)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )

    # Units in stock; placing orders decrements it, returns add it back
    quantity = models.PositiveIntegerField(default=0)

    categories = models.ManyToManyField(Category, blank=True, related_name='products')
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'products'
        indexes = [
            models.Index(fields=['name_normalized', 'vendor_normalized'], name='products_name_no_3f4a1c_idx'),
            models.Index(fields=['price'], name='products_price_8e1b2d_idx'),
            models.Index(fields=['is_active', 'created_at'], name='products_is_acti_5c7d9e_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.vendor} - {self.name}"

    def save(self, *args, **kwargs):
        self.name_normalized = self._normalize_string(self.name)
        self.vendor_normalized = self._normalize_string(self.vendor)
        if not self.slug:
            self.slug = self._unique_slug()
        super().save(*args, **kwargs)

    @staticmethod
    def _normalize_string(text):
        text = text.lower().strip()
        text = re.sub(r'\s+', ' ', text)
        text = re.sub(r'[^\w\s-]', '', text)
        return text

    def _unique_slug(self):
        base = slugify(self.name) or 'product'
        slug = base
        suffix = 2
        while Product.objects.filter(slug=slug).exclude(pk=self.pk).exists():
            slug = f"{base}-{suffix}"
            suffix += 1
        return slug

    @property
    def in_stock(self):
        return self.quantity > 0


class ProductPlan(models.Model):
    """Optional paid service plan (guarantee and maintenance) for a product."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name='plans')
    name = models.CharField(max_length=100)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    guarantee = models.PositiveIntegerField(default=0, help_text='Guarantee period in years')
    maintenance = models.PositiveIntegerField(default=0, help_text='Maintenance period in years')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'product_plans'
        ordering = ['price']

    def __str__(self):
        return f"{self.product.name} - {self.name}"
