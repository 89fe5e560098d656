from django.db import models
from django.core.exceptions import ValidationError
from decimal import Decimal
import uuid


class TimeStampedModel(models.Model):
    """Base model with created_at and updated_at fields"""
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class ShopSettings(TimeStampedModel):
    """Shop configuration - a single row read by billing, printing and reports"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    shop_name = models.CharField(max_length=255, default='My Shop')
    shop_address = models.TextField(blank=True, default='')
    shop_phone = models.CharField(max_length=50, blank=True, default='')
    gst_number = models.CharField(max_length=50, blank=True, default='')
    tax_percentage = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal('5.00'))

    class Meta:
        db_table = 'settings'
        verbose_name_plural = "Settings"
        constraints = [
            models.CheckConstraint(
                condition=models.Q(tax_percentage__gte=0),
                name='settings_tax_percentage_gte_0',
            ),
        ]

    def __str__(self):
        return '{}  {} %'.format(self.shop_name, self.tax_percentage)

    def save(self, *args, **kwargs):
        if self._state.adding and ShopSettings.objects.exclude(pk=self.pk).exists():
            raise ValidationError("Shop settings already exist")
        super().save(*args, **kwargs)

    @classmethod
    def load(cls):
        """Return the settings row, creating it with defaults on first use"""
        settings = cls.objects.order_by('created_at').first()
        if settings is None:
            settings = cls.objects.create()
        return settings
